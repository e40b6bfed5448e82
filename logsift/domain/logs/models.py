from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from advanced_alchemy.types import DateTimeUTC
from advanced_alchemy.extensions.litestar import base


class Attachment(base.BigIntBase):
    """Binary attached to a log.

    The bytes live in the attachment data store under ``file_id``; images
    additionally get a thumbnail stored under ``thumbnail_id``.
    """

    __tablename__ = "attachments"

    file_id: Mapped[str] = mapped_column(String(1024), nullable=False)
    thumbnail_id: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    content_type: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)

    project_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    launch_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    item_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    creation_date: Mapped[datetime] = mapped_column(
        DateTimeUTC(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ix_attachments_launch_creation_date", "launch_id", "creation_date"),
    )

    def __repr__(self) -> str:
        return f"<Attachment(id={self.id}, file_id={self.file_id}, launch_id={self.launch_id})>"


class Log(base.BigIntBase):
    """Timestamped message emitted while a test item (or launch) ran."""

    __tablename__ = "logs"

    log_time: Mapped[datetime] = mapped_column(
        DateTimeUTC(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    log_message: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Integer severity, see LogLevel. NULL when the reporter sent none.
    log_level: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Item logs set item_id, launch-level logs set launch_id
    item_id: Mapped[Optional[int]] = mapped_column(
        BigInteger,
        ForeignKey("test_items.id", ondelete="CASCADE"),
        nullable=True,
    )
    launch_id: Mapped[Optional[int]] = mapped_column(
        BigInteger,
        ForeignKey("launches.id", ondelete="CASCADE"),
        nullable=True,
    )
    attachment_id: Mapped[Optional[int]] = mapped_column(
        BigInteger,
        ForeignKey("attachments.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_logs_item_level", "item_id", "log_level"),
        Index("ix_logs_launch_log_time", "launch_id", "log_time"),
        Index("ix_logs_log_time", "log_time"),
    )

    def __repr__(self) -> str:
        return f"<Log(id={self.id}, item_id={self.item_id}, level={self.log_level}, log_time={self.log_time})>"
