"""Shared dependency providers for API layer."""
from __future__ import annotations

from litestar import Request
from litestar.exceptions import ServiceUnavailableException

from logsift.config.settings import get_settings
from logsift.services.analyzer import AnalyzerConfig, LogIndexerService


def provide_log_indexer(request: Request) -> LogIndexerService:
    """Provide the LogIndexerService from app state.

    Raises:
        ServiceUnavailableException: In degraded mode (no database at startup).
    """
    log_indexer: LogIndexerService | None = getattr(request.app.state, "log_indexer", None)
    if log_indexer is None:
        raise ServiceUnavailableException(detail="Indexing is unavailable: database was not reachable at startup")
    return log_indexer


def provide_analyzer_config(project_id: int, log_indexer: LogIndexerService) -> AnalyzerConfig:
    """Provide the analyzer configuration for a project's indexing request.

    Defaults come from settings; ``indexing_running`` reports whether another
    run for the project is already in progress.
    """
    config = AnalyzerConfig.from_settings(get_settings().analyzer)
    config.indexing_running = log_indexer.is_indexing(project_id)
    return config
