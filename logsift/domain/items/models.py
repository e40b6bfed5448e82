from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column
from advanced_alchemy.types import DateTimeUTC
from advanced_alchemy.extensions.litestar import base

from logsift.domain.enums import StatusEnum


class TestItem(base.BigIntBase):
    """A single test (or suite node) inside a launch.

    The issue classification is stored as the issue type locator, e.g.
    ``ti001`` for "to investigate" or ``pb_1h2k`` for a custom product bug
    sub-type. Items without a locator were never classified.
    """

    __tablename__ = "test_items"
    __test__ = False

    name: Mapped[str] = mapped_column(String(1024), nullable=False)

    launch_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("launches.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    unique_id: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    status: Mapped[StatusEnum] = mapped_column(
        Enum(StatusEnum, native_enum=False, length=16),
        nullable=False,
        default=StatusEnum.IN_PROGRESS,
    )

    issue_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    auto_analyzed: Mapped[bool] = mapped_column(default=False)
    ignore_analyzer: Mapped[bool] = mapped_column(default=False)

    # Set on retries of another item; only the original is analyzed
    retry_of: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    start_time: Mapped[datetime] = mapped_column(
        DateTimeUTC(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ix_test_items_launch_issue_type", "launch_id", "issue_type"),
    )

    def __repr__(self) -> str:
        return f"<TestItem(id={self.id}, launch_id={self.launch_id}, issue_type={self.issue_type})>"
