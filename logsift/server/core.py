"""Application factory for creating Litestar app instance."""

from __future__ import annotations


from litestar import Litestar
from litestar.openapi import OpenAPIConfig
from litestar.config.compression import CompressionConfig
from litestar.middleware.logging import LoggingMiddlewareConfig

from logsift.config.settings import get_settings
from logsift.server import plugins
from logsift.server.lifecycle import on_startup, on_shutdown
from logsift.server.routes import get_route_handlers
from logsift.api.exception_handlers import exception_handlers


def create_app() -> Litestar:
    """Create and configure the Litestar application.

    This factory function loads configuration and initializes the app
    with OpenAPI, compression, the SQLAlchemy plugin and error mapping.

    Returns:
        Litestar: Configured application instance
    """
    settings = get_settings()

    openapi_config = OpenAPIConfig(
        title=settings.name,
        version=settings.version,
        description=settings.description,
        create_examples=True,
    )

    compression_config = CompressionConfig(
        backend="brotli",
        minimum_size=1000,  # Only compress responses >= 1KB
        brotli_quality=4,
    )

    logging_middleware_config = LoggingMiddlewareConfig()

    app = Litestar(
        debug=settings.debug,
        route_handlers=get_route_handlers(),
        on_startup=[on_startup],
        on_shutdown=[on_shutdown],
        plugins=[plugins.sqlalchemy_plugin],
        exception_handlers=exception_handlers,
        logging_config=plugins.logging_config,
        openapi_config=openapi_config,
        compression_config=compression_config,
        middleware=[logging_middleware_config.middleware],
    )

    return app
