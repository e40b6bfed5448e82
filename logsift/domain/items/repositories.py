"""Repository for test item data access."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from advanced_alchemy.repository import SQLAlchemyAsyncRepository

from logsift.domain.items.models import TestItem


class TestItemRepository(SQLAlchemyAsyncRepository[TestItem]):
    """Repository for TestItem model."""

    __test__ = False

    model_type = TestItem

    async def find_all_by_id(self, item_ids: Sequence[int]) -> list[TestItem]:
        """Load the given items ordered by id. Unknown ids are skipped."""
        if not item_ids:
            return []
        stmt = select(TestItem).where(TestItem.id.in_(item_ids)).order_by(TestItem.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_all_not_in_issue_by_launch(self, launch_id: int, locator: str) -> list[TestItem]:
        """Load the launch's classified items whose issue type is not ``locator``.

        Items without any issue type are never returned.

        Args:
            launch_id: Launch the items belong to.
            locator: Issue type locator to exclude, e.g. ``ti001``.
        """
        stmt = (
            select(TestItem)
            .where(
                TestItem.launch_id == launch_id,
                TestItem.issue_type.is_not(None),
                TestItem.issue_type != locator,
            )
            .order_by(TestItem.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
