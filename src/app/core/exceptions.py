"""Domain errors and exception handlers with request_id in responses.

Services and repositories raise the AppError subclasses below. Each carries
its error kind and the HTTP status the API layer maps it to, so handlers
never need to inspect messages.
"""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for all catalog errors."""

    kind: str = "internal"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailedError(AppError):
    """Malformed or out-of-range input. Raised before any mutation."""

    kind = "validation"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """A referenced project, technology or user does not exist."""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} not found with id: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(AppError):
    """Uniqueness violation (technology name, user email)."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class InternalError(AppError):
    """Storage failure, commit failure, timeout or lost connectivity."""

    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        request_id = correlation_id.get()
        if isinstance(exc, InternalError):
            logger.error(
                "Internal error",
                error=exc.message,
                request_id=request_id,
                path=request.url.path,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.message,
                "kind": exc.kind,
                "request_id": request_id,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "kind": InternalError.kind,
                "request_id": request_id,
            },
        )
