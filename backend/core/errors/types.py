"""Result Types and the Application Error Taxonomy

Operations that can genuinely fail (audio I/O, synthesis, file access)
return ``Result[T, AppError]`` instead of raising. Expected conditions
(lookup misses, absent clips, clock anomalies) never become errors at all.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Generic, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
E = TypeVar("E", bound="AppError")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E1xxx: External services
    E2xxx: Validation
    E4xxx: Lookup
    E6xxx: Resource and audio I/O
    E9xxx: Internal
    """
    # External services (E1xxx)
    E1011_EXTERNAL_SERVICE_ERROR = 1011

    # Validation (E2xxx)
    E2000_VALIDATION_GENERIC = 2000

    # Lookup (E4xxx)
    E4010_NOT_FOUND = 4010

    # Resource / audio (E6xxx)
    E6003_FILE_WRITE_ERROR = 6003
    E6020_PLAYBACK_FAILED = 6020
    E6021_SYNTHESIS_FAILED = 6021
    E6022_SYNTHESIS_UNAVAILABLE = 6022

    # Internal (E9xxx)
    E9000_INTERNAL_GENERIC = 9000
    E9001_UNEXPECTED_ERROR = 9001

    @property
    def http_status(self) -> int:
        """Map error code to an HTTP status."""
        code = self.value
        if 1000 <= code < 2000:
            return 502
        if 2000 <= code < 2100:
            return 400
        if code == 4010:
            return 404
        if code == 6022:
            return 501
        if 6020 <= code < 6030:
            return 502
        return 500

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 1000 <= code < 2000:
            return "external"
        if 2000 <= code < 3000:
            return "validation"
        if 4000 <= code < 5000:
            return "lookup"
        if 6000 <= code < 7000:
            return "resource"
        return "internal"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing."""
    correlation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""
    request_id: str | None = None


@dataclass(frozen=True, slots=True)
class AppError:
    """Application error with code, message, metadata and optional cause."""
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    def with_context(self, **kwargs) -> AppError:
        """Create a new error with updated context fields."""
        new_ctx = ErrorContext(
            correlation_id=kwargs.get("correlation_id") or self.context.correlation_id,
            timestamp=self.context.timestamp,
            origin=kwargs.get("origin", self.context.origin),
            request_id=kwargs.get("request_id", self.context.request_id),
        )
        return AppError(
            code=self.code,
            message=self.message,
            context=new_ctx,
            metadata={**self.metadata, **kwargs.get("metadata", {})},
            cause=self.cause,
        )

    def to_dict(self) -> dict:
        """Serialize error for API responses."""
        return {
            "error": {
                "code": self.code.name,
                "code_num": self.code.value,
                "message": self.message,
                "category": self.code.category,
                "correlation_id": self.context.correlation_id,
                "timestamp": self.context.timestamp.isoformat(),
                "metadata": self.metadata,
            }
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message} (correlation_id={self.context.correlation_id})"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]


def from_exception(
    exc: Exception,
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    message: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Convert an exception to Err, keeping it as the cause."""
    return Err(AppError(
        code=code,
        message=message or str(exc),
        context=ErrorContext(origin=origin),
        metadata=metadata,
        cause=exc,
    ))

