"""Domain exceptions and the handlers that turn them into JSON error responses.

Every error response has the shape ``{"error": "<message>"}``. The request id
travels in the ``X-Request-ID`` header set by the correlation-id middleware.
"""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.todo_api.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed request body or missing required field."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """No row matches the given key."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Uniqueness violation, e.g. a duplicate project title."""

    status_code = status.HTTP_409_CONFLICT


class PersistenceError(AppError):
    """Any other storage-layer failure, including connection loss."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class DatabaseUnavailableError(Exception):
    """The database could not be reached at startup after all retries."""


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic validation errors into a single readable message."""
    messages = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        msg = error.get("msg", "Invalid input")
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(messages) or "Invalid request"


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render ``{"error": ...}`` bodies."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.info(
            "Request failed",
            error=type(exc).__name__,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return await app_error_handler(request, ValidationError(format_validation_errors(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=correlation_id.get(),
            path=request.url.path,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Internal server error"
        )
