"""Log and attachment retention cleanup."""
from .service import AtomicCounter, AttachmentCleanerService, LogCleanerService

__all__ = ["AtomicCounter", "AttachmentCleanerService", "LogCleanerService"]
