"""APScheduler configuration and scheduled job definitions.

This module configures the AsyncIOScheduler from APScheduler 3.x and defines
the scheduled log retention cleanup.

Jobs create their own database sessions to avoid shared state issues.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from logsift.config.settings import Settings
    from logsift.services.analyzer.indexer import LogIndexerService
    from logsift.services.storage.datastore import LocalDataStore

logger = logging.getLogger(__name__)


async def clean_logs_job(
    session_factory: "Callable[[], AsyncSession]",
    data_store: "LocalDataStore",
    log_indexer: "LogIndexerService | None" = None,
) -> int:
    """Apply each project's retention period to its logs and attachments.

    Every launch is cleaned and committed in its own session, so a failing
    launch does not undo the others. Removed logs are dropped from the
    analyzer index in the background.

    Args:
        session_factory: SQLAlchemy async session factory.
        data_store: Store holding attachment binaries.
        log_indexer: Indexer used to clean removed logs from the index.

    Returns:
        Total number of deleted logs.
    """
    from logsift.domain.launches.repositories import LaunchRepository
    from logsift.domain.logs.repositories import AttachmentRepository, LogRepository
    from logsift.domain.projects.repositories import ProjectRepository
    from logsift.services.cleanup.service import (
        AtomicCounter,
        AttachmentCleanerService,
        LogCleanerService,
    )

    async with session_factory() as session:
        projects = await ProjectRepository(session=session).find_with_retention()

    attachments = AtomicCounter()
    thumbnails = AtomicCounter()
    total_logs = 0

    for project in projects:
        cutoff = datetime.now(timezone.utc) - timedelta(days=project.keep_logs_days)
        async with session_factory() as session:
            launch_ids = await LaunchRepository(session=session).find_ids_by_project_started_before(
                project.id, cutoff
            )

        for launch_id in launch_ids:
            async with session_factory() as session:
                log_repo = LogRepository(session=session)
                cleaner = LogCleanerService(
                    log_repo=log_repo,
                    attachment_cleaner=AttachmentCleanerService(
                        attachment_repo=AttachmentRepository(session=session),
                        data_store=data_store,
                    ),
                )
                try:
                    log_ids = await log_repo.find_ids_by_period_and_launch_ids(cutoff, [launch_id])
                    total_logs += await cleaner.remove_outdated_logs(launch_id, cutoff, attachments, thumbnails)
                    await session.commit()
                except Exception:
                    await session.rollback()
                    logger.exception("Failed to clean logs of launch %s in project %s", launch_id, project.id)
                    continue

            if log_ids and log_indexer is not None:
                log_indexer.clean_index(project.id, log_ids)

    logger.info(
        "Completed log cleanup job: %d log(s), %d attachment(s), %d thumbnail(s) removed",
        total_logs,
        attachments.value,
        thumbnails.value,
    )
    return total_logs


def create_scheduler(
    session_factory: "Callable[[], AsyncSession]",
    settings: "Settings",
    data_store: "LocalDataStore",
    log_indexer: "LogIndexerService | None" = None,
) -> AsyncIOScheduler:
    """Create and configure the APScheduler instance.

    Args:
        session_factory: SQLAlchemy async session factory for creating job sessions.
        settings: Application settings for job configuration.
        data_store: Attachment binary store passed to the cleanup job.
        log_indexer: Indexer used to clean removed logs from the index.

    Returns:
        Configured AsyncIOScheduler (not yet started).
    """
    scheduler = AsyncIOScheduler(timezone=timezone.utc)

    if not settings.scheduler.enabled:
        logger.info("Scheduler disabled via settings")
        return scheduler

    scheduler.add_job(
        clean_logs_job,
        CronTrigger(
            hour=settings.scheduler.clean_logs_hour,
            minute=settings.scheduler.clean_logs_minute,
            timezone=timezone.utc,
        ),
        id="clean-logs",
        name="Outdated logs and attachments cleanup",
        args=[session_factory, data_store, log_indexer],
        replace_existing=True,
    )
    logger.info(
        "Scheduled log cleanup at %02d:%02d UTC",
        settings.scheduler.clean_logs_hour,
        settings.scheduler.clean_logs_minute,
    )

    return scheduler
