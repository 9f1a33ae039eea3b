"""Result-based Error Handling

Usage:
    from core.errors import Ok, Err, Result, AppError, playback_failed

    async def play(path: str) -> Result[None, AppError]:
        if not started:
            return playback_failed(path, origin="speech")
        return Ok(None)

    match await play(path):
        case Ok(_):
            ...
        case Err(error):
            log.error("playback_failed", message=error.message)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    from_exception,
)

from .builders import (
    external_service_error,
    validation_error,
    not_found,
    file_error,
    playback_failed,
    synthesis_failed,
    synthesis_unavailable,
)

from .handlers import (
    AppErrorException,
    register_error_handlers,
    result_to_response,
    raise_error,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "from_exception",
    "external_service_error",
    "validation_error",
    "not_found",
    "file_error",
    "playback_failed",
    "synthesis_failed",
    "synthesis_unavailable",
    "AppErrorException",
    "register_error_handlers",
    "result_to_response",
    "raise_error",
]
