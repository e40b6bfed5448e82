"""Global plugin instances and configurations.

This module provides singleton instances for:
- SQLAlchemy async configuration
- Logging configuration
"""
from __future__ import annotations

from litestar.logging import LoggingConfig
from litestar.serialization import decode_json, encode_json
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from advanced_alchemy.extensions.litestar import (
    AsyncSessionConfig,
    SQLAlchemyAsyncConfig,
    SQLAlchemyInitPlugin,
    base,
)

from logsift.config.settings import get_settings

settings = get_settings()

# SQLAlchemy async engine with connection pooling
if settings.database.pool_disabled:
    _engine = create_async_engine(
        url=settings.database.url,
        echo=settings.database.echo,
        json_serializer=encode_json,
        json_deserializer=decode_json,
        echo_pool=settings.database.echo_pool,
        poolclass=NullPool,
    )
else:
    _engine = create_async_engine(
        url=settings.database.url,
        echo=settings.database.echo,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        pool_timeout=settings.database.pool_timeout,
        pool_recycle=settings.database.pool_recycle,
        json_serializer=encode_json,
        json_deserializer=decode_json,
        echo_pool=settings.database.echo_pool,
        pool_pre_ping=True,
        pool_use_lifo=True,  # use lifo to reduce the number of idle connections
    )

# SQLAlchemy configuration for Litestar
sqlalchemy_config = SQLAlchemyAsyncConfig(
    engine_instance=_engine,
    session_config=AsyncSessionConfig(expire_on_commit=False),
    create_all=False,
    metadata=base.BigIntBase.metadata,
)

sqlalchemy_plugin = SQLAlchemyInitPlugin(config=sqlalchemy_config)

# Logging configuration
logging_config = LoggingConfig(
    root={"level": settings.api.log_level, "handlers": ["queue_listener"]},
    formatters={
        "standard": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"}
    },
    log_exceptions="always",
)
