"""Per-project indexing status."""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class AnalyzerStatusCache:
    """Tracks which projects have indexing runs outstanding.

    The status is advisory: it never blocks a second run for the same
    project. Each run holds one reference, so overlapping runs keep the
    project marked until the last of them finishes.

    Example:
        with status_cache.indexing(project_id):
            ...  # is_indexing(project_id) is True here
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._running: dict[int, int] = {}

    def indexing_started(self, project_id: int) -> None:
        with self._lock:
            self._running[project_id] = self._running.get(project_id, 0) + 1
            outstanding = self._running[project_id]
        if outstanding > 1:
            logger.info("Project %s already has %d indexing run(s) in progress", project_id, outstanding - 1)

    def indexing_finished(self, project_id: int) -> None:
        with self._lock:
            remaining = self._running.get(project_id, 0) - 1
            if remaining > 0:
                self._running[project_id] = remaining
            else:
                self._running.pop(project_id, None)

    def is_indexing(self, project_id: int) -> bool:
        with self._lock:
            return self._running.get(project_id, 0) > 0

    @contextmanager
    def indexing(self, project_id: int) -> Iterator[None]:
        """Mark the project as indexing for the duration of the block."""
        self.indexing_started(project_id)
        try:
            yield
        finally:
            self.indexing_finished(project_id)
