"""Log indexing pipeline - eligibility, request building and submission."""
from .builder import IndexRequestBuilder
from .client import IndexerServiceClient
from .indexer import LogIndexerService
from .schemas import AnalyzerConfig, IndexLaunch, IndexLog, IndexTestItem
from .status import AnalyzerStatusCache

__all__ = [
    "AnalyzerConfig",
    "AnalyzerStatusCache",
    "IndexLaunch",
    "IndexLog",
    "IndexRequestBuilder",
    "IndexTestItem",
    "IndexerServiceClient",
    "LogIndexerService",
]
