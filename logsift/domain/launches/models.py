from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column
from advanced_alchemy.types import DateTimeUTC
from advanced_alchemy.extensions.litestar import base

from logsift.domain.enums import LaunchMode, StatusEnum


class Launch(base.BigIntBase):
    """One execution run of a test suite."""

    __tablename__ = "launches"

    name: Mapped[str] = mapped_column(String(256), nullable=False)

    project_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[StatusEnum] = mapped_column(
        Enum(StatusEnum, native_enum=False, length=16),
        nullable=False,
        default=StatusEnum.IN_PROGRESS,
    )
    mode: Mapped[LaunchMode] = mapped_column(
        Enum(LaunchMode, native_enum=False, length=16),
        nullable=False,
        default=LaunchMode.DEFAULT,
    )

    start_time: Mapped[datetime] = mapped_column(
        DateTimeUTC(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    # NULL while the launch is still running
    end_time: Mapped[Optional[datetime]] = mapped_column(DateTimeUTC(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_launches_project_start_time", "project_id", "start_time"),
    )

    def __repr__(self) -> str:
        return f"<Launch(id={self.id}, name={self.name}, project_id={self.project_id}, status={self.status})>"
