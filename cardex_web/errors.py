"""Error types of the web API and their JSON rendering."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


class CatalogError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class QueryTooShortError(CatalogError):
    """Raised when a search query is shorter than :data:`MIN_QUERY_LENGTH`."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, query: str | None = None) -> None:
        super().__init__(
            f"Search query must be at least {MIN_QUERY_LENGTH} characters long"
        )
        self.query = query


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND


def validate_search_query(query: str | None) -> str:
    """Return ``query`` or raise :class:`QueryTooShortError`."""

    if not query or len(query) < MIN_QUERY_LENGTH:
        raise QueryTooShortError(query)
    return query


def client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def register_error_handlers(app: FastAPI) -> None:
    """Render catalogue errors and unexpected failures as JSON."""

    @app.exception_handler(CatalogError)
    async def catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s (ip=%s)",
            request.method,
            request.url.path,
            client_ip(request),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
