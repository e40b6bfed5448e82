"""Repository for launch data access."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from advanced_alchemy.repository import SQLAlchemyAsyncRepository

from logsift.domain.launches.models import Launch


class LaunchRepository(SQLAlchemyAsyncRepository[Launch]):
    """Repository for Launch model."""

    model_type = Launch

    async def find_by_id(self, launch_id: int) -> Launch | None:
        """Find a Launch by id.

        Args:
            launch_id: Primary key of the launch.

        Returns:
            Launch if found, None otherwise.
        """
        return await self.get_one_or_none(id=launch_id)

    async def find_ids_by_project_started_before(self, project_id: int, before: datetime) -> list[int]:
        """Return ids of the project's launches started before a moment.

        Only these launches can hold logs older than ``before``, so the
        retention cleanup iterates over them.

        Raises:
            ValueError: If ``before`` is not timezone-aware.
        """
        if before.tzinfo is None:
            raise ValueError("before must be timezone-aware")
        stmt = (
            select(Launch.id)
            .where(Launch.project_id == project_id, Launch.start_time < before)
            .order_by(Launch.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
