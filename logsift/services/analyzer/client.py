"""HTTP client for the external analyzer (indexer) service."""
from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx
import msgspec

from logsift.services.analyzer.schemas import CleanIndexRequest, IndexLaunch, IndexResponse

logger = logging.getLogger(__name__)

INDEX_PATH = "/api/v1/index"
CLEAN_INDEX_PATH = "/api/v1/index/delete"


class IndexerServiceClient:
    """Talks to the analyzer's index endpoints.

    Example:
        client = IndexerServiceClient("http://analyzer:5001", timeout=30.0)
        indexed = await client.index(launches)
        await client.aclose()
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Analyzer service root URL.
            timeout: Request timeout in seconds, ignored when ``client`` is given.
            client: Preconfigured httpx client (tests pass one with a mock transport).
        """
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
            headers={"Content-Type": "application/json"},
        )

    async def index(self, launches: Sequence[IndexLaunch]) -> int:
        """Submit launches for indexing.

        Returns:
            Number of log documents the analyzer reports as indexed. An empty
            batch is not sent and counts as 0.

        Raises:
            httpx.HTTPError: If the analyzer is unreachable or rejects the batch.
        """
        if not launches:
            return 0
        response = await self._client.post(INDEX_PATH, content=msgspec.json.encode(list(launches)))
        response.raise_for_status()
        if not response.content:
            return 0
        result = msgspec.json.decode(response.content, type=IndexResponse)
        if result.errors:
            logger.warning("Analyzer reported errors while indexing %d launch(es)", len(launches))
        logger.debug("Indexed %d documents in %d ms", len(result.items), result.took)
        return len(result.items)

    async def delete_index(self, project_id: int) -> None:
        """Remove the whole index of a project. A missing index is not an error."""
        response = await self._client.delete(f"{INDEX_PATH}/{project_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info("Index of project %s does not exist", project_id)
            return
        response.raise_for_status()
        logger.info("Deleted index of project %s", project_id)

    async def clean_index(self, index_id: int, ids: Sequence[int]) -> None:
        """Remove log documents from an index. Failures are logged, never raised."""
        if not ids:
            return
        payload = msgspec.json.encode(CleanIndexRequest(project=index_id, ids=list(ids)))
        try:
            response = await self._client.put(CLEAN_INDEX_PATH, content=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to clean %d document(s) from index %s: %s", len(ids), index_id, e)
            return
        logger.debug("Cleaned %d document(s) from index %s", len(ids), index_id)

    async def aclose(self) -> None:
        await self._client.aclose()
