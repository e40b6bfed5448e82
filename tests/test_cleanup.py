import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from logsift.domain.logs.models import Attachment
from logsift.services.cleanup.service import AtomicCounter, AttachmentCleanerService, LogCleanerService
from logsift.services.storage.datastore import LocalDataStore

CUTOFF = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_atomic_counter_across_threads() -> None:
    counter = AtomicCounter()

    def work() -> None:
        for _ in range(1000):
            counter.increment()

    threads = [threading.Thread(target=work) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert counter.value == 8000
    assert counter.increment(5) == 8005


@pytest.mark.asyncio
async def test_remove_outdated_logs_invokes_attachment_cleaner_once() -> None:
    log_repo = AsyncMock()
    log_repo.delete_by_period_and_launch_ids.return_value = 2
    attachment_cleaner = AsyncMock(spec=AttachmentCleanerService)
    attachments, thumbnails = AtomicCounter(), AtomicCounter()

    cleaner = LogCleanerService(log_repo=log_repo, attachment_cleaner=attachment_cleaner)
    deleted = await cleaner.remove_outdated_logs(1, CUTOFF, attachments, thumbnails)

    assert deleted == 2
    log_repo.delete_by_period_and_launch_ids.assert_awaited_once_with(CUTOFF, [1])
    attachment_cleaner.remove_outdated_launches_attachments.assert_awaited_once()
    args = attachment_cleaner.remove_outdated_launches_attachments.await_args.args
    assert args[0] == [1]
    assert args[1] == CUTOFF
    assert args[2] is attachments
    assert args[3] is thumbnails


@pytest.mark.asyncio
async def test_remove_outdated_logs_cleans_attachments_even_without_logs() -> None:
    log_repo = AsyncMock()
    log_repo.delete_by_period_and_launch_ids.return_value = 0
    attachment_cleaner = AsyncMock(spec=AttachmentCleanerService)

    cleaner = LogCleanerService(log_repo=log_repo, attachment_cleaner=attachment_cleaner)

    assert await cleaner.remove_outdated_logs(3, CUTOFF, AtomicCounter(), AtomicCounter()) == 0
    attachment_cleaner.remove_outdated_launches_attachments.assert_awaited_once()


@pytest.mark.asyncio
async def test_remove_outdated_items_logs() -> None:
    log_repo = AsyncMock()
    log_repo.delete_by_period_and_test_item_ids.return_value = 4
    attachment_cleaner = AsyncMock(spec=AttachmentCleanerService)

    cleaner = LogCleanerService(log_repo=log_repo, attachment_cleaner=attachment_cleaner)

    assert await cleaner.remove_outdated_items_logs((5, 6), CUTOFF) == 4
    log_repo.delete_by_period_and_test_item_ids.assert_awaited_once_with(CUTOFF, [5, 6])
    attachment_cleaner.remove_outdated_launches_attachments.assert_not_awaited()


@pytest.mark.asyncio
async def test_attachment_cleaner_counts_removed_binaries(tmp_path: Path) -> None:
    (tmp_path / "f1").write_bytes(b"png")
    (tmp_path / "t1").write_bytes(b"thumb")
    (tmp_path / "f3").write_bytes(b"log")
    attachments = [
        Attachment(id=1, file_id="f1", thumbnail_id="t1", project_id=1, launch_id=1),
        Attachment(id=2, file_id="f2", thumbnail_id="t2", project_id=1, launch_id=1),
        Attachment(id=3, file_id="f3", project_id=1, launch_id=1),
    ]
    repo = AsyncMock()
    repo.find_by_launch_ids_created_before.return_value = attachments
    repo.delete_by_ids.return_value = 3
    attachment_counter, thumbnail_counter = AtomicCounter(), AtomicCounter()

    cleaner = AttachmentCleanerService(attachment_repo=repo, data_store=LocalDataStore(tmp_path))
    await cleaner.remove_outdated_launches_attachments([1], CUTOFF, attachment_counter, thumbnail_counter)

    assert attachment_counter.value == 2
    assert thumbnail_counter.value == 1
    assert not (tmp_path / "f1").exists()
    assert not (tmp_path / "t1").exists()
    assert not (tmp_path / "f3").exists()
    repo.delete_by_ids.assert_awaited_once_with([1, 2, 3])


@pytest.mark.asyncio
async def test_attachment_cleaner_nothing_outdated(tmp_path: Path) -> None:
    repo = AsyncMock()
    repo.find_by_launch_ids_created_before.return_value = []

    cleaner = AttachmentCleanerService(attachment_repo=repo, data_store=LocalDataStore(tmp_path))
    await cleaner.remove_outdated_launches_attachments(
        [1], CUTOFF - timedelta(days=1), AtomicCounter(), AtomicCounter()
    )

    repo.delete_by_ids.assert_not_awaited()


@pytest.mark.asyncio
async def test_data_store_rejects_escaping_ids(tmp_path: Path) -> None:
    store = LocalDataStore(tmp_path / "root")

    with pytest.raises(ValueError, match="escapes"):
        await store.delete("../outside")


@pytest.mark.asyncio
async def test_data_store_delete_and_exists(tmp_path: Path) -> None:
    (tmp_path / "p1").mkdir()
    (tmp_path / "p1" / "file").write_bytes(b"x")
    store = LocalDataStore(tmp_path)

    assert await store.exists("p1/file") is True
    assert await store.delete("p1/file") is True
    assert await store.exists("p1/file") is False
    assert await store.delete("p1/file") is False
