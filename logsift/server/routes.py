"""Central route registration."""
from litestar.types import ControllerRouterHandler

from logsift.api.v1.index_controller import IndexController


def get_route_handlers() -> list[ControllerRouterHandler]:
    """Get all route handlers for the application."""
    return [
        IndexController,
    ]
