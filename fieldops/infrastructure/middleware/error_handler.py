"""Global error handler middleware."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from fieldops.domain.errors import (
    AppError,
    AuthError,
    DatabaseUnavailableError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    ProviderUnavailableError,
    ValidationError,
)
from fieldops.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)


def _error_body(error: AppError) -> dict[str, Any]:
    return {
        "error": {
            "code": error.code,
            "message": error.message,
            "details": error.details,
            "retryable": error.retryable,
        }
    }


def _field_name(loc: tuple[Any, ...]) -> str:
    # ("body", "clientName") -> "clientName"; a missing/unparseable body is "body"
    parts = [str(p) for p in loc if p != "body"]
    return ".".join(parts) or "body"


def error_handler_middleware(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Handle all application errors."""
        status_code = _get_status_code(exc)

        log_level = "warning" if status_code < 500 else "error"
        getattr(logger, log_level)(
            f"Application error: {exc.message}",
            extra={
                "error_code": exc.code,
                "error_details": exc.details,
                "retryable": exc.retryable,
                "path": request.url.path,
            },
        )

        return JSONResponse(status_code=status_code, content=_error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed request bodies in the ValidationError shape."""
        fields: dict[str, str] = {}
        for err in exc.errors():
            fields.setdefault(_field_name(tuple(err.get("loc", ()))), err.get("msg", "Invalid value"))

        error = ValidationError.for_fields(fields)
        logger.warning(
            f"Request validation failed: {error.message}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return JSONResponse(status_code=400, content=_error_body(error))

    async def _database_unavailable(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Database unavailable",
            extra={
                "path": request.url.path,
                "error_type": type(exc).__name__,
                "error": str(exc),
            },
        )
        error = DatabaseUnavailableError(operation="request")
        return JSONResponse(status_code=503, content=_error_body(error))

    for exc_class in (OperationalError, PoolTimeoutError, TimeoutError, ConnectionError):
        app.add_exception_handler(exc_class, _database_unavailable)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            f"Unhandled exception: {str(exc)}",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "details": {},
                    "retryable": False,
                }
            },
        )


def _get_status_code(error: AppError) -> int:
    """Map error type to HTTP status code."""
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, AuthError):
        return 401
    if isinstance(error, ForbiddenError):
        return 403
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, DuplicateError):
        return 409
    if isinstance(error, (ProviderUnavailableError, DatabaseUnavailableError)):
        return 503
    return 500
