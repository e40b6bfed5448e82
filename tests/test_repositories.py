from datetime import datetime, timedelta

import pytest
import pytest_asyncio

from logsift.domain.enums import LaunchMode, LogLevel, StatusEnum
from logsift.domain.items.models import TestItem
from logsift.domain.items.repositories import TestItemRepository
from logsift.domain.launches.models import Launch
from logsift.domain.launches.repositories import LaunchRepository
from logsift.domain.logs.models import Attachment, Log
from logsift.domain.logs.repositories import AttachmentRepository, LogRepository
from logsift.domain.projects.models import Project
from logsift.domain.projects.repositories import ProjectRepository


@pytest_asyncio.fixture
async def seeded(session, now: datetime, long_ago: datetime):
    """Two projects, two launches of project 1, items with old and fresh logs."""
    session.add_all([
        Project(id=1, name="alpha", keep_logs_days=30),
        Project(id=2, name="beta", keep_logs_days=None),
    ])
    await session.flush()
    session.add_all([
        Launch(id=1, name="old", project_id=1, status=StatusEnum.FAILED, mode=LaunchMode.DEFAULT, start_time=long_ago),
        Launch(id=2, name="new", project_id=1, status=StatusEnum.PASSED, mode=LaunchMode.DEFAULT, start_time=now),
    ])
    await session.flush()
    session.add_all([
        TestItem(id=1, name="a", launch_id=1, issue_type="pb001", start_time=long_ago),
        TestItem(id=2, name="b", launch_id=1, issue_type="ti001", start_time=long_ago),
        TestItem(id=3, name="c", launch_id=1, issue_type=None, start_time=long_ago),
        TestItem(id=4, name="d", launch_id=2, issue_type="ab001", start_time=now),
    ])
    await session.flush()
    session.add_all([
        Log(id=1, item_id=1, log_level=LogLevel.ERROR, log_message="old error", log_time=long_ago),
        Log(id=2, item_id=1, log_level=LogLevel.INFO, log_message="old info", log_time=long_ago),
        Log(id=3, item_id=1, log_level=LogLevel.FATAL, log_message="fresh fatal", log_time=now),
        Log(id=4, launch_id=1, log_level=LogLevel.WARN, log_message="launch log", log_time=long_ago),
        Log(id=5, item_id=4, log_level=LogLevel.ERROR, log_message="other launch", log_time=long_ago),
    ])
    session.add_all([
        Attachment(id=1, file_id="f1", thumbnail_id="t1", project_id=1, launch_id=1, creation_date=long_ago),
        Attachment(id=2, file_id="f2", project_id=1, launch_id=1, creation_date=now),
        Attachment(id=3, file_id="f3", project_id=1, launch_id=2, creation_date=long_ago),
    ])
    await session.flush()
    return session


@pytest.mark.asyncio
async def test_project_find_with_retention(seeded) -> None:
    projects = await ProjectRepository(session=seeded).find_with_retention()
    assert [project.name for project in projects] == ["alpha"]


@pytest.mark.asyncio
async def test_launch_find_by_id(seeded) -> None:
    repo = LaunchRepository(session=seeded)

    launch = await repo.find_by_id(1)
    assert launch is not None
    assert launch.status is StatusEnum.FAILED
    assert await repo.find_by_id(404) is None


@pytest.mark.asyncio
async def test_launch_ids_started_before(seeded, now: datetime) -> None:
    repo = LaunchRepository(session=seeded)

    assert await repo.find_ids_by_project_started_before(1, now - timedelta(days=30)) == [1]
    assert await repo.find_ids_by_project_started_before(2, now) == []


@pytest.mark.asyncio
async def test_launch_ids_started_before_requires_aware_datetime(seeded) -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        await LaunchRepository(session=seeded).find_ids_by_project_started_before(1, datetime(2020, 1, 1))


@pytest.mark.asyncio
async def test_items_find_all_by_id(seeded) -> None:
    repo = TestItemRepository(session=seeded)

    items = await repo.find_all_by_id([4, 1, 999])
    assert [item.id for item in items] == [1, 4]
    assert await repo.find_all_by_id([]) == []


@pytest.mark.asyncio
async def test_items_not_in_issue_skips_unclassified(seeded) -> None:
    items = await TestItemRepository(session=seeded).find_all_not_in_issue_by_launch(1, "ti001")
    assert [item.id for item in items] == [1]


@pytest.mark.asyncio
async def test_logs_by_items_and_level(seeded) -> None:
    logs = await LogRepository(session=seeded).find_all_by_test_item_ids_and_level_gte([1], LogLevel.ERROR)
    assert [log.id for log in logs] == [1, 3]


@pytest.mark.asyncio
async def test_log_ids_by_period_include_launch_level_logs(seeded, now: datetime) -> None:
    ids = await LogRepository(session=seeded).find_ids_by_period_and_launch_ids(now - timedelta(days=30), [1])
    assert ids == [1, 2, 4]


@pytest.mark.asyncio
async def test_delete_by_period_and_launch_ids(seeded, now: datetime) -> None:
    repo = LogRepository(session=seeded)

    deleted = await repo.delete_by_period_and_launch_ids(now - timedelta(days=30), [1])

    assert deleted == 3
    remaining = await repo.find_all_by_test_item_ids_and_level_gte([1, 4], LogLevel.TRACE)
    assert sorted(log.id for log in remaining) == [3, 5]
    assert await repo.delete_by_period_and_launch_ids(now, []) == 0


@pytest.mark.asyncio
async def test_delete_by_period_and_test_item_ids(seeded, now: datetime) -> None:
    repo = LogRepository(session=seeded)

    assert await repo.delete_by_period_and_test_item_ids(now - timedelta(days=30), [1, 4]) == 3
    assert await repo.delete_by_period_and_test_item_ids(now, []) == 0


@pytest.mark.asyncio
async def test_attachments_created_before_and_delete(seeded, now: datetime) -> None:
    repo = AttachmentRepository(session=seeded)

    attachments = await repo.find_by_launch_ids_created_before([1], now - timedelta(days=30))
    assert [attachment.file_id for attachment in attachments] == ["f1"]

    assert await repo.delete_by_ids([attachment.id for attachment in attachments]) == 1
    assert await repo.find_by_launch_ids_created_before([1], now - timedelta(days=30)) == []
    assert await repo.delete_by_ids([]) == 0
