import os
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from advanced_alchemy.extensions.litestar import base
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import logsift.domain  # noqa: F401  registers all models on the metadata


@pytest.fixture(scope="session", autouse=True)
def baseline_settings_env():
    """Provide baseline env vars so tests are not affected by local .env.

    Pydantic-settings precedence: init args > env vars > .env > defaults.
    Setting these ensures stable defaults regardless of any .env present.
    """
    os.environ.update({
        # App
        "APP_NAME": "Logsift API",
        "APP_VERSION": "0.1.0",
        "APP_DEBUG": "false",
        "APP_ENVIRONMENT": "development",
        # API
        "API_HOST": "0.0.0.0",
        "API_PORT": "8000",
        "API_WORKERS": "1",
        "API_RELOAD": "false",
        "API_LOG_LEVEL": "INFO",
        # Database
        "DB_HOST": "localhost",
        "DB_PORT": "5432",
        "DB_ECHO": "false",
        "DB_POOL_SIZE": "5",
        "DB_MAX_OVERFLOW": "10",
        "DB_POOL_TIMEOUT": "30",
        "DB_POOL_RECYCLE": "3600",
        "DB_DROP_ON_STARTUP": "false",
        # Analyzer
        "ANALYZER_URL": "http://analyzer.test:5001",
        "ANALYZER_MIN_SHOULD_MATCH": "80",
        # Scheduler
        "SCHEDULER_ENABLED": "true",
    })


@pytest.fixture(autouse=True)
def refresh_settings_cache():
    """Clear settings cache so env changes take effect per test.

    Ensures tests using monkeypatch.setenv() get a fresh Settings instance.
    """
    from logsift.config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def long_ago(now: datetime) -> datetime:
    """A moment well outside any retention period used in tests."""
    return now - timedelta(days=365)


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine shared by every session of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(base.BigIntBase.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session
