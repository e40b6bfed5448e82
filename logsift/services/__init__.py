"""Services layer - indexing, retention cleanup and storage."""
from .analyzer import LogIndexerService
from .cleanup import LogCleanerService

__all__ = ["LogIndexerService", "LogCleanerService"]
