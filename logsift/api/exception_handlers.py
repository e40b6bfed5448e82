"""Map service errors to HTTP responses."""
from __future__ import annotations

from litestar import Request, Response
from litestar.status_codes import HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

from logsift.exceptions import EntityNotFoundError, IndexingError


def entity_not_found_handler(_: Request, exc: EntityNotFoundError) -> Response:
    return Response(
        content={"status_code": HTTP_404_NOT_FOUND, "detail": str(exc)},
        status_code=HTTP_404_NOT_FOUND,
    )


def indexing_error_handler(_: Request, exc: IndexingError) -> Response:
    return Response(
        content={"status_code": HTTP_500_INTERNAL_SERVER_ERROR, "detail": str(exc)},
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
    )


exception_handlers = {
    EntityNotFoundError: entity_not_found_handler,
    IndexingError: indexing_error_handler,
}
