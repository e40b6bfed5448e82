from typing import Optional

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from advanced_alchemy.extensions.litestar import base


class Project(base.BigIntAuditBase):
    """Project owning launches, logs and attachments.

    ``keep_logs_days`` is the retention period applied by the scheduled log
    cleanup. NULL keeps logs forever.
    """

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    keep_logs_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=None)

    __table_args__ = (
        UniqueConstraint("name", name="uq_projects_name"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name}, keep_logs_days={self.keep_logs_days})>"
