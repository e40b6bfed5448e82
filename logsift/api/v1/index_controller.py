"""Index API endpoints."""
from __future__ import annotations

from litestar import Controller, delete, get, post
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK, HTTP_202_ACCEPTED, HTTP_204_NO_CONTENT

from logsift.api.dependencies import provide_analyzer_config, provide_log_indexer
from logsift.api.v1.schemas import (
    CleanIndexAccepted,
    CleanIndexBody,
    IndexingStatus,
    IndexItemsRequest,
    IndexLaunchesRequest,
    IndexResult,
)
from logsift.services.analyzer import AnalyzerConfig, LogIndexerService


class IndexController(Controller):
    """Analyzer index endpoints

    Triggers indexing of a project's logs and maintains its index.
    """

    path = "/api/v1/projects/{project_id:int}/index"
    tags = ["Index"]

    dependencies = {
        "log_indexer": Provide(provide_log_indexer, sync_to_thread=False),
        "analyzer_config": Provide(provide_analyzer_config, sync_to_thread=False),
    }

    @post("/", status_code=HTTP_200_OK)
    async def index_launches(
        self,
        project_id: int,
        data: IndexLaunchesRequest,
        log_indexer: LogIndexerService,
        analyzer_config: AnalyzerConfig,
    ) -> IndexResult:
        """Index the error logs of whole launches."""
        indexed = await log_indexer.index_logs(project_id, data.launch_ids, analyzer_config)
        return IndexResult(project_id=project_id, indexed=indexed)

    @post("/items", status_code=HTTP_200_OK)
    async def index_items(
        self,
        project_id: int,
        data: IndexItemsRequest,
        log_indexer: LogIndexerService,
        analyzer_config: AnalyzerConfig,
    ) -> IndexResult:
        """Index the error logs of specific items of one launch."""
        indexed = await log_indexer.index_items(project_id, data.launch_id, data.item_ids, analyzer_config)
        return IndexResult(project_id=project_id, indexed=indexed)

    @delete("/", status_code=HTTP_204_NO_CONTENT)
    async def delete_index(self, project_id: int, log_indexer: LogIndexerService) -> None:
        """Remove the project's whole index."""
        await log_indexer.delete_index(project_id)

    @post("/clean", status_code=HTTP_202_ACCEPTED)
    async def clean_index(
        self,
        project_id: int,
        data: CleanIndexBody,
        log_indexer: LogIndexerService,
    ) -> CleanIndexAccepted:
        """Remove log documents from the project's index in the background."""
        log_indexer.clean_index(project_id, data.ids)
        return CleanIndexAccepted(project_id=project_id, scheduled=len(data.ids))

    @get("/status")
    async def indexing_status(self, project_id: int, log_indexer: LogIndexerService) -> IndexingStatus:
        """Report whether an indexing run for the project is in progress."""
        return IndexingStatus(project_id=project_id, indexing=log_indexer.is_indexing(project_id))
