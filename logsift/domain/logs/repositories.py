"""Repositories for log and attachment data."""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import delete, or_, select
from advanced_alchemy.repository import SQLAlchemyAsyncRepository

from logsift.domain.items.models import TestItem
from logsift.domain.logs.models import Attachment, Log


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class LogRepository(SQLAlchemyAsyncRepository[Log]):
    """Repository for Log model with level filtering and retention deletes."""

    model_type = Log

    async def find_all_by_test_item_ids_and_level_gte(
        self,
        item_ids: Sequence[int],
        level: int,
    ) -> list[Log]:
        """Return the items' logs with ``log_level >= level`` in log time order."""
        if not item_ids:
            return []
        stmt = (
            select(Log)
            .where(Log.item_id.in_(item_ids), Log.log_level >= int(level))
            .order_by(Log.log_time, Log.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def _launch_logs_clause(self, launch_ids: Sequence[int]):
        item_ids = select(TestItem.id).where(TestItem.launch_id.in_(launch_ids))
        return or_(Log.launch_id.in_(launch_ids), Log.item_id.in_(item_ids))

    async def find_ids_by_period_and_launch_ids(
        self,
        cutoff: datetime,
        launch_ids: Sequence[int],
    ) -> list[int]:
        """Return ids of the launches' logs older than ``cutoff``.

        Covers both launch-level logs and the logs of the launches' items.
        """
        if not launch_ids:
            return []
        stmt = (
            select(Log.id)
            .where(Log.log_time < _as_utc(cutoff), self._launch_logs_clause(launch_ids))
            .order_by(Log.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_period_and_launch_ids(
        self,
        cutoff: datetime,
        launch_ids: Sequence[int],
    ) -> int:
        """Delete the launches' logs older than ``cutoff``.

        Args:
            cutoff: Delete logs with log_time before this datetime.
            launch_ids: Launches whose logs (and item logs) are affected.

        Returns:
            Number of deleted logs.
        """
        if not launch_ids:
            return 0
        stmt = delete(Log).where(
            Log.log_time < _as_utc(cutoff),
            self._launch_logs_clause(launch_ids),
        )
        result = await self.session.execute(stmt, execution_options={"synchronize_session": False})
        return result.rowcount or 0

    async def delete_by_period_and_test_item_ids(
        self,
        cutoff: datetime,
        item_ids: Sequence[int],
    ) -> int:
        """Delete the items' logs older than ``cutoff``.

        Returns:
            Number of deleted logs.
        """
        if not item_ids:
            return 0
        stmt = delete(Log).where(Log.log_time < _as_utc(cutoff), Log.item_id.in_(item_ids))
        result = await self.session.execute(stmt, execution_options={"synchronize_session": False})
        return result.rowcount or 0


class AttachmentRepository(SQLAlchemyAsyncRepository[Attachment]):
    """Repository for Attachment model."""

    model_type = Attachment

    async def find_by_launch_ids_created_before(
        self,
        launch_ids: Sequence[int],
        cutoff: datetime,
    ) -> list[Attachment]:
        """Return the launches' attachments created before ``cutoff``."""
        if not launch_ids:
            return []
        stmt = (
            select(Attachment)
            .where(Attachment.launch_id.in_(launch_ids), Attachment.creation_date < _as_utc(cutoff))
            .order_by(Attachment.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_ids(self, attachment_ids: Sequence[int]) -> int:
        """Delete attachment rows by id. Returns the number of deleted rows."""
        if not attachment_ids:
            return 0
        stmt = delete(Attachment).where(Attachment.id.in_(attachment_ids))
        result = await self.session.execute(stmt, execution_options={"synchronize_session": False})
        return result.rowcount or 0
