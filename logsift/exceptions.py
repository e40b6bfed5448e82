"""Domain exceptions raised by the indexing and retention services."""
from __future__ import annotations

from advanced_alchemy.exceptions import NotFoundError


class LogsiftError(Exception):
    """Base class for service errors."""


class EntityNotFoundError(NotFoundError, LogsiftError):
    """A launch or test item referenced by id does not exist."""

    def __init__(self, entity: str, entity_id: int | str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")


class IndexingError(LogsiftError):
    """Preparing or submitting an indexing batch failed."""
