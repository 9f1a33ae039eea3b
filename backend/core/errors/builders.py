"""Domain-Specific Error Builders

Ergonomic constructors for the error codes this backend actually emits.
"""
from .types import AppError, ErrorCode, ErrorContext, Err


def _build(
    code: ErrorCode,
    message: str,
    origin: str,
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


# =============================================================================
# External Service Errors (E1xxx)
# =============================================================================

def external_service_error(
    service: str, reason: str = "", origin: str = "", cause: Exception | None = None
) -> Err[AppError]:
    msg = f"External service '{service}' failed"
    if reason:
        msg += f": {reason}"
    return _build(ErrorCode.E1011_EXTERNAL_SERVICE_ERROR, msg, origin, cause, service=service)


# =============================================================================
# Validation Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    field: str | None = None,
    value: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create validation error."""
    return _build(code, message, origin, field=field, value=value, **metadata)


# =============================================================================
# Lookup Errors (E4xxx)
# =============================================================================

def not_found(entity: str, id: str | int | None = None, origin: str = "") -> Err[AppError]:
    msg = f"{entity} not found"
    if id is not None:
        msg += f": {id}"
    return _build(
        ErrorCode.E4010_NOT_FOUND,
        msg,
        origin,
        entity=entity,
        entity_id=str(id) if id is not None else None,
    )


# =============================================================================
# Resource and Audio Errors (E6xxx)
# =============================================================================

def file_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E6003_FILE_WRITE_ERROR,
    path: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
) -> Err[AppError]:
    return _build(code, message, origin, cause, path=path)


def playback_failed(path: str, reason: str = "", origin: str = "", cause: Exception | None = None) -> Err[AppError]:
    msg = f"Failed to play audio: {path}"
    if reason:
        msg += f" ({reason})"
    return _build(ErrorCode.E6020_PLAYBACK_FAILED, msg, origin, cause, path=path)


def synthesis_failed(reason: str, origin: str = "", cause: Exception | None = None) -> Err[AppError]:
    return _build(
        ErrorCode.E6021_SYNTHESIS_FAILED,
        f"Speech error: {reason}",
        origin,
        cause,
        reason=reason,
    )


def synthesis_unavailable(reason: str = "", origin: str = "") -> Err[AppError]:
    msg = "Speech synthesis not supported"
    if reason:
        msg += f": {reason}"
    return _build(ErrorCode.E6022_SYNTHESIS_UNAVAILABLE, msg, origin)
