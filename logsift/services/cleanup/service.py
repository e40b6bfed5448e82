"""Log retention cleanup.

This service handles:
- Deleting logs older than a cutoff, per launch or per test item
- Deleting the matching attachment rows and their binaries
- Counting removed attachment and thumbnail binaries in shared counters
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logsift.domain.logs.repositories import AttachmentRepository, LogRepository
    from logsift.services.storage.datastore import LocalDataStore


logger = logging.getLogger(__name__)


class AtomicCounter:
    """Integer accumulator safe to share between concurrent cleanups."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def increment(self, delta: int = 1) -> int:
        with self._lock:
            self._value += delta
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"AtomicCounter({self.value})"


class AttachmentCleanerService:
    """Removes outdated attachments together with their binaries."""

    def __init__(
        self,
        attachment_repo: "AttachmentRepository",
        data_store: "LocalDataStore",
    ) -> None:
        self.attachment_repo = attachment_repo
        self.data_store = data_store

    async def remove_outdated_launches_attachments(
        self,
        launch_ids: Sequence[int],
        cutoff: datetime,
        attachment_counter: AtomicCounter,
        thumbnail_counter: AtomicCounter,
    ) -> None:
        """Delete the launches' attachments created before ``cutoff``.

        Binaries are removed from the data store first; only binaries that
        actually existed are counted. Attachment rows are deleted afterwards.

        Args:
            launch_ids: Launches whose attachments are affected.
            cutoff: Delete attachments created before this datetime.
            attachment_counter: Incremented per removed attachment binary.
            thumbnail_counter: Incremented per removed thumbnail binary.
        """
        attachments = await self.attachment_repo.find_by_launch_ids_created_before(launch_ids, cutoff)
        if not attachments:
            return

        for attachment in attachments:
            if await self.data_store.delete(attachment.file_id):
                attachment_counter.increment()
            if attachment.thumbnail_id and await self.data_store.delete(attachment.thumbnail_id):
                thumbnail_counter.increment()

        deleted = await self.attachment_repo.delete_by_ids([attachment.id for attachment in attachments])
        logger.debug("Deleted %d attachment(s) of launches %s", deleted, list(launch_ids))


class LogCleanerService:
    """Deletes logs older than a retention cutoff.

    Example:
        cleaner = LogCleanerService(log_repo=log_repo, attachment_cleaner=attachment_cleaner)
        attachments, thumbnails = AtomicCounter(), AtomicCounter()
        removed = await cleaner.remove_outdated_logs(launch_id, cutoff, attachments, thumbnails)
    """

    def __init__(
        self,
        log_repo: "LogRepository",
        attachment_cleaner: AttachmentCleanerService,
    ) -> None:
        self.log_repo = log_repo
        self.attachment_cleaner = attachment_cleaner

    async def remove_outdated_logs(
        self,
        launch_id: int,
        cutoff: datetime,
        attachment_counter: AtomicCounter,
        thumbnail_counter: AtomicCounter,
    ) -> int:
        """Delete a launch's logs and attachments older than ``cutoff``.

        Returns:
            Number of deleted logs.
        """
        deleted: int = await self.log_repo.delete_by_period_and_launch_ids(cutoff, [launch_id])
        await self.attachment_cleaner.remove_outdated_launches_attachments(
            [launch_id],
            cutoff,
            attachment_counter,
            thumbnail_counter,
        )
        if deleted > 0:
            logger.info("Removed %d outdated log(s) of launch %s", deleted, launch_id)
        return deleted

    async def remove_outdated_items_logs(self, item_ids: Sequence[int], cutoff: datetime) -> int:
        """Delete the items' logs older than ``cutoff``.

        Returns:
            Number of deleted logs.
        """
        deleted: int = await self.log_repo.delete_by_period_and_test_item_ids(cutoff, list(item_ids))
        if deleted > 0:
            logger.info("Removed %d outdated log(s) of %d item(s)", deleted, len(item_ids))
        return deleted
