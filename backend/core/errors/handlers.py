"""FastAPI Exception Handlers

Converts AppErrors, request validation errors and stray exceptions into
structured JSON responses.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging import get_logger

from .types import AppError, ErrorCode, ErrorContext

log = get_logger("errors.handlers")


class AppErrorException(Exception):
    """Exception wrapper for AppError, for code paths outside the Result flow."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def result_to_response(error: AppError) -> JSONResponse:
    """Convert AppError to a JSONResponse and log it."""
    status_code = error.code.http_status

    log_method = log.warning if status_code < 500 else log.error
    log_method(
        "error_response",
        error_code=error.code.name,
        error_code_num=error.code.value,
        message=error.message,
        category=error.code.category,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
        metadata=error.metadata,
    )

    return JSONResponse(status_code=status_code, content=error.to_dict())


async def app_error_handler(request: Request, exc: AppErrorException) -> JSONResponse:
    error = exc.error.with_context(
        request_id=request.headers.get("X-Request-ID"),
        correlation_id=request.headers.get("X-Correlation-ID"),
    )
    return result_to_response(error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    status_code = exc.status_code
    code_map = {
        400: ErrorCode.E2000_VALIDATION_GENERIC,
        404: ErrorCode.E4010_NOT_FOUND,
        422: ErrorCode.E2000_VALIDATION_GENERIC,
    }
    code = code_map.get(status_code)
    if code is None:
        code = ErrorCode.E9001_UNEXPECTED_ERROR if status_code >= 500 else ErrorCode.E9000_INTERNAL_GENERIC

    error = AppError(
        code=code,
        message=str(exc.detail) if exc.detail else f"HTTP {status_code}",
        context=ErrorContext(
            correlation_id=request.headers.get("X-Correlation-ID", ""),
            origin="http",
        ),
    )
    return result_to_response(error)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic request validation errors with field details."""
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    error = AppError(
        code=ErrorCode.E2000_VALIDATION_GENERIC,
        message="Request validation failed",
        context=ErrorContext(
            correlation_id=request.headers.get("X-Correlation-ID", ""),
            origin="request_validation",
        ),
        metadata={"details": details},
    )
    return result_to_response(error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: converts to an internal error and logs the traceback."""
    error = AppError(
        code=ErrorCode.E9001_UNEXPECTED_ERROR,
        message="An unexpected error occurred",
        context=ErrorContext(
            correlation_id=request.headers.get("X-Correlation-ID", ""),
            origin="unhandled",
        ),
        cause=exc,
    )
    log.exception(
        "unhandled_exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        correlation_id=error.context.correlation_id,
    )
    return result_to_response(error)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI app."""
    app.add_exception_handler(AppErrorException, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def raise_error(error: AppError) -> None:
    """Raise AppError as an exception (route handlers)."""
    raise AppErrorException(error)

