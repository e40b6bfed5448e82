"""Log indexing orchestration.

This service:
- Marks a project as indexing while a run is outstanding
- Selects qualifying launches, items and logs via IndexRequestBuilder
- Submits the batch to the analyzer through IndexerServiceClient
- Removes a project's index or single documents from it

Indexing runs as asyncio tasks with a database session of their own, so many
projects can be indexed concurrently.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Coroutine, Sequence
from typing import TYPE_CHECKING, Any, Callable

from logsift.exceptions import IndexingError, LogsiftError
from logsift.services.analyzer.builder import IndexRequestBuilder
from logsift.services.analyzer.status import AnalyzerStatusCache

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from logsift.services.analyzer.client import IndexerServiceClient
    from logsift.services.analyzer.schemas import AnalyzerConfig, IndexLaunch


logger = logging.getLogger(__name__)


class LogIndexerService:
    """Coordinates indexing runs against the analyzer.

    Example:
        service = LogIndexerService(
            session_factory=session_maker,
            indexer_client=client,
        )
        indexed = await service.index_logs(project_id, [launch_id], config)
    """

    def __init__(
        self,
        session_factory: "Callable[[], AsyncSession]",
        indexer_client: "IndexerServiceClient",
        status_cache: AnalyzerStatusCache | None = None,
        *,
        builder_factory: "Callable[[AsyncSession], IndexRequestBuilder]" = IndexRequestBuilder.from_session,
    ) -> None:
        """Initialize the indexer service.

        Args:
            session_factory: SQLAlchemy async session factory, one session per run.
            indexer_client: Client of the analyzer service.
            status_cache: Per-project indexing status, created when omitted.
            builder_factory: Creates the request builder for a session.
        """
        self.session_factory = session_factory
        self.indexer_client = indexer_client
        self.status_cache: AnalyzerStatusCache = status_cache or AnalyzerStatusCache()
        self.builder_factory = builder_factory

        # Dispatched tasks are referenced until done
        self._background_tasks: set[asyncio.Task] = set()

        # Statistics
        self.total_indexed: int = 0
        self.total_failed_runs: int = 0

    def is_indexing(self, project_id: int) -> bool:
        """Return True while an indexing run for the project is outstanding."""
        return self.status_cache.is_indexing(project_id)

    def index_logs(
        self,
        project_id: int,
        launch_ids: Sequence[int],
        analyzer_config: "AnalyzerConfig | None",
    ) -> "asyncio.Future[int]":
        """Index the qualifying logs of whole launches.

        Cancelling or dropping the returned future does not stop the run.

        Returns:
            Future resolving to the number of indexed documents. It raises
            EntityNotFoundError for a missing launch and IndexingError for any
            other failure.
        """
        launch_ids = list(launch_ids)

        async def prepare(builder: IndexRequestBuilder) -> "list[IndexLaunch]":
            return await builder.prepare_launches(launch_ids, analyzer_config)

        return self._dispatch(self._run(project_id, prepare), name=f"index-logs-{project_id}")

    def index_items(
        self,
        project_id: int,
        launch_id: int,
        item_ids: Sequence[int],
        analyzer_config: "AnalyzerConfig | None",
    ) -> "asyncio.Future[int]":
        """Index the qualifying logs of specific items of one launch.

        The analyzer is not called when nothing qualifies; the future then
        resolves to 0.
        """
        item_ids = list(item_ids)

        async def prepare(builder: IndexRequestBuilder) -> "list[IndexLaunch]":
            launch = await builder.prepare_launch_items(project_id, launch_id, item_ids, analyzer_config)
            return [launch] if launch is not None else []

        return self._dispatch(
            self._run(project_id, prepare, skip_empty=True),
            name=f"index-items-{project_id}-{launch_id}",
        )

    async def delete_index(self, project_id: int) -> None:
        """Remove the project's whole index."""
        await self.indexer_client.delete_index(project_id)

    def clean_index(self, index_id: int, ids: Sequence[int]) -> None:
        """Remove documents from an index in the background.

        The caller does not observe completion; failures are only logged.
        """
        task: asyncio.Task[None] = asyncio.create_task(
            self.indexer_client.clean_index(index_id, list(ids)),
            name=f"clean-index-{index_id}",
        )
        self._background_tasks.add(task)
        task.add_done_callback(self._on_clean_done)

    def _dispatch(self, coro: "Coroutine[Any, Any, int]", *, name: str) -> "asyncio.Future[int]":
        """Start an indexing run that outlives its caller.

        The caller gets a shielded view of the task, so a timeout or
        cancellation on its side leaves the analyzer call running.
        """
        task: asyncio.Task[int] = asyncio.create_task(coro, name=name)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return asyncio.shield(task)

    def _on_clean_done(self, task: "asyncio.Task[None]") -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        if (exc := task.exception()) is not None:
            logger.error("Index cleanup task %s failed", task.get_name(), exc_info=exc)

    async def _run(
        self,
        project_id: int,
        prepare: "Callable[[IndexRequestBuilder], Awaitable[list[IndexLaunch]]]",
        *,
        skip_empty: bool = False,
    ) -> int:
        """Prepare and submit one batch while the project is marked as indexing."""
        with self.status_cache.indexing(project_id):
            try:
                async with self.session_factory() as session:
                    launches: list[IndexLaunch] = await prepare(self.builder_factory(session))
                if skip_empty and not launches:
                    logger.debug("Nothing to index for project %s", project_id)
                    return 0
                indexed: int = await self.indexer_client.index(launches)
            except LogsiftError:
                self.total_failed_runs += 1
                logger.exception("Indexing for project %s failed", project_id)
                raise
            except Exception as e:
                self.total_failed_runs += 1
                logger.exception("Indexing for project %s failed: %s", project_id, e)
                raise IndexingError(str(e)) from e
        self.total_indexed += indexed
        logger.info("Indexed %d document(s) for project %s", indexed, project_id)
        return indexed
