"""Application lifecycle hooks for startup and shutdown."""

from __future__ import annotations

import logging
import asyncio
from typing import TYPE_CHECKING, Callable

from advanced_alchemy.extensions.litestar import base
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from logsift.config.settings import get_settings
from logsift.server.plugins import sqlalchemy_config
from logsift.server.scheduler import create_scheduler
from logsift.services.analyzer import AnalyzerStatusCache, IndexerServiceClient, LogIndexerService
from logsift.services.storage import LocalDataStore

if TYPE_CHECKING:
    from litestar import Litestar

logger = logging.getLogger(__name__)


async def _db_available(timeout: float = 10.0) -> bool:
    """Return True if the database accepts connections; False otherwise."""
    try:
        async def _probe():
            async with sqlalchemy_config.get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))

        await asyncio.wait_for(_probe(), timeout=timeout)
        return True
    except Exception as e:
        logger.warning("Database unavailable at startup: %s", e)
        return False


async def on_startup(app: "Litestar") -> None:
    """Create the schema, the indexing services and the cleanup scheduler.

    - If DB is unavailable, start the API in a degraded mode (no schema
      creation, no indexer, no scheduled cleanup) instead of failing startup.
    """
    if not await _db_available():
        logger.warning("Starting without database: skipping schema creation, indexing and cleanup.")
        return

    settings = get_settings()

    async with sqlalchemy_config.get_engine().begin() as conn:
        if settings.database.drop_on_startup:
            logger.warning("Dropping all tables on startup as per configuration.")
            await conn.run_sync(base.BigIntBase.metadata.drop_all)
        await conn.run_sync(base.BigIntBase.metadata.create_all)

    session_maker: Callable[[], AsyncSession] = sqlalchemy_config.create_session_maker()

    indexer_client = IndexerServiceClient(
        settings.analyzer.url,
        timeout=settings.analyzer.timeout,
    )
    log_indexer = LogIndexerService(
        session_factory=session_maker,
        indexer_client=indexer_client,
        status_cache=AnalyzerStatusCache(),
    )
    data_store = LocalDataStore(settings.storage.path)

    # Create and start scheduler
    scheduler: AsyncIOScheduler = create_scheduler(session_maker, settings, data_store, log_indexer)
    scheduler.start()
    logger.info("Started APScheduler")

    # Store in app state for shutdown and API access
    app.state.indexer_client = indexer_client
    app.state.log_indexer = log_indexer
    app.state.scheduler = scheduler


async def on_shutdown(app: "Litestar") -> None:
    """Gracefully stop background services and clean up resources."""
    scheduler: AsyncIOScheduler | None = getattr(app.state, "scheduler", None)
    if scheduler and scheduler.running:
        scheduler.shutdown(wait=True)
        logger.info("Stopped APScheduler")

    indexer_client: IndexerServiceClient | None = getattr(app.state, "indexer_client", None)
    if indexer_client:
        await indexer_client.aclose()
        logger.info("Closed analyzer client")
