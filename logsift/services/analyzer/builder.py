"""Builds index requests from stored launches, test items and logs."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from logsift.domain.enums import LogLevel, TestItemIssueGroup
from logsift.exceptions import EntityNotFoundError
from logsift.services.analyzer.predicates import (
    item_can_be_indexed,
    launch_can_be_indexed,
    log_is_suitable,
)
from logsift.services.analyzer.schemas import AnalyzerConfig, IndexLaunch, IndexLog, IndexTestItem

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from logsift.domain.items.models import TestItem
    from logsift.domain.items.repositories import TestItemRepository
    from logsift.domain.launches.repositories import LaunchRepository
    from logsift.domain.logs.models import Log
    from logsift.domain.logs.repositories import LogRepository


logger = logging.getLogger(__name__)


def index_test_item_from(item: "TestItem", logs: Iterable["Log"]) -> IndexTestItem:
    """Convert a test item and its logs, keeping only suitable logs."""
    return IndexTestItem(
        test_item_id=item.id,
        unique_id=item.unique_id,
        issue_type=item.issue_type,
        is_auto_analyzed=bool(item.auto_analyzed),
        logs=[
            IndexLog(log_id=log.id, log_level=log.log_level, message=log.log_message or "")
            for log in logs
            if log_is_suitable(log)
        ],
    )


def create_index_launch(
    project_id: int,
    launch_id: int,
    name: str,
    analyzer_config: AnalyzerConfig | None,
    test_items: list[IndexTestItem],
) -> IndexLaunch:
    """Assemble an IndexLaunch from already validated parts."""
    return IndexLaunch(
        launch_id=launch_id,
        launch_name=name,
        project_id=project_id,
        analyzer_config=analyzer_config,
        test_items=test_items,
    )


class IndexRequestBuilder:
    """Selects what qualifies for indexing and shapes it into requests.

    Example:
        builder = IndexRequestBuilder.from_session(session)
        launches = await builder.prepare_launches([1, 2], config)
    """

    def __init__(
        self,
        launch_repo: "LaunchRepository",
        test_item_repo: "TestItemRepository",
        log_repo: "LogRepository",
    ) -> None:
        self.launch_repo = launch_repo
        self.test_item_repo = test_item_repo
        self.log_repo = log_repo

    @classmethod
    def from_session(cls, session: "AsyncSession") -> "IndexRequestBuilder":
        """Create a builder whose repositories share one session."""
        from logsift.domain.items.repositories import TestItemRepository
        from logsift.domain.launches.repositories import LaunchRepository
        from logsift.domain.logs.repositories import LogRepository

        return cls(
            launch_repo=LaunchRepository(session=session),
            test_item_repo=TestItemRepository(session=session),
            log_repo=LogRepository(session=session),
        )

    async def prepare_items_for_indexing(self, items: Iterable["TestItem"]) -> list[IndexTestItem]:
        """Turn indexable items into IndexTestItems with their ERROR logs.

        Items without any qualifying log are dropped; input order is kept.
        """
        prepared: list[IndexTestItem] = []
        for item in items:
            if not item_can_be_indexed(item):
                continue
            logs = await self.log_repo.find_all_by_test_item_ids_and_level_gte([item.id], LogLevel.ERROR)
            index_item = index_test_item_from(item, logs)
            if index_item.logs:
                prepared.append(index_item)
        return prepared

    async def prepare_launches(
        self,
        launch_ids: Sequence[int],
        analyzer_config: AnalyzerConfig | None,
    ) -> list[IndexLaunch]:
        """Build one IndexLaunch per indexable launch that has something to index.

        Raises:
            EntityNotFoundError: If one of the launches does not exist.
        """
        prepared: list[IndexLaunch] = []
        for launch_id in launch_ids:
            launch = await self.launch_repo.find_by_id(launch_id)
            if launch is None:
                raise EntityNotFoundError("Launch", launch_id)
            if not launch_can_be_indexed(launch):
                logger.debug("Launch %s cannot be indexed, skipping", launch_id)
                continue
            items = await self.test_item_repo.find_all_not_in_issue_by_launch(
                launch_id, TestItemIssueGroup.TO_INVESTIGATE.locator
            )
            index_items = await self.prepare_items_for_indexing(items)
            if not index_items:
                logger.debug("Launch %s has no items to index, skipping", launch_id)
                continue
            prepared.append(
                create_index_launch(launch.project_id, launch.id, launch.name, analyzer_config, index_items)
            )
        return prepared

    async def prepare_launch_items(
        self,
        project_id: int,
        launch_id: int,
        item_ids: Sequence[int],
        analyzer_config: AnalyzerConfig | None,
    ) -> IndexLaunch | None:
        """Build an IndexLaunch restricted to the named items of one launch.

        Item ids belonging to other launches are ignored. A launch of another
        project is treated as missing.

        Returns:
            The IndexLaunch, or None when the launch is not indexable or none of
            the items qualifies.

        Raises:
            EntityNotFoundError: If the launch does not exist.
        """
        launch = await self.launch_repo.find_by_id(launch_id)
        if launch is None or launch.project_id != project_id:
            raise EntityNotFoundError("Launch", launch_id)
        if not launch_can_be_indexed(launch):
            return None
        items = [item for item in await self.test_item_repo.find_all_by_id(item_ids) if item.launch_id == launch.id]
        if len(items) < len(item_ids):
            logger.debug("Ignoring %d item id(s) not found in launch %s", len(item_ids) - len(items), launch_id)
        index_items = await self.prepare_items_for_indexing(items)
        if not index_items:
            return None
        return create_index_launch(project_id, launch.id, launch.name, analyzer_config, index_items)
