"""Repository for project data access."""
from __future__ import annotations

from sqlalchemy import select
from advanced_alchemy.repository import SQLAlchemyAsyncRepository

from logsift.domain.projects.models import Project


class ProjectRepository(SQLAlchemyAsyncRepository[Project]):
    """Repository for Project model."""

    model_type = Project

    async def find_with_retention(self) -> list[Project]:
        """Return projects that have a log retention period configured."""
        stmt = (
            select(Project)
            .where(Project.keep_logs_days.is_not(None))
            .order_by(Project.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
