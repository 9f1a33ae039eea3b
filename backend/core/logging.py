"""Structured Logging for the Haklada Backend

structlog on top of the standard library:
- Colored, human-readable dev output
- JSON structured production output
- Correlation IDs bound per request
- Domain loggers (engine, speech, typing, content, batch, api)
"""
import logging
import sys
from uuid import uuid4

import structlog
from structlog.types import EventDict, Processor


def _add_service_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that adds service metadata."""
    event_dict.setdefault("service", "haklada-backend")
    event_dict.setdefault("version", "0.1.0")
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors used in both dev and prod configurations."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_service_info,
    ]


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Configure the logging system.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON lines. If False, colored console output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = get_shared_processors()

    if json_logs:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    # Formatter for stdlib loggers (uvicorn, httpx, ...)
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)

    for logger_name in ["uvicorn", "uvicorn.error"]:
        logging.getLogger(logger_name).handlers = []

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("numba").setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def generate_correlation_id() -> str:
    """Generate a short correlation ID for request tracing."""
    return str(uuid4())[:8]


def bind_context(**kwargs) -> None:
    """Bind key-value pairs to the current logging context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


class LoggerRegistry:
    """Registry of pre-configured loggers for different application domains."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        if name not in cls._loggers:
            cls._loggers[name] = get_logger(f"haklada.{name}")
        return cls._loggers[name]


def api_logger() -> structlog.stdlib.BoundLogger:
    """Logger for API layer events."""
    return LoggerRegistry.get("api")


def engine_logger() -> structlog.stdlib.BoundLogger:
    """Logger for curriculum/exercise engine events."""
    return LoggerRegistry.get("engine")


def speech_logger() -> structlog.stdlib.BoundLogger:
    """Logger for playback and synthesis events."""
    return LoggerRegistry.get("speech")


def typing_logger() -> structlog.stdlib.BoundLogger:
    """Logger for typing-session events."""
    return LoggerRegistry.get("typing")


def content_logger() -> structlog.stdlib.BoundLogger:
    """Logger for reference data and preference loading."""
    return LoggerRegistry.get("content")


def batch_logger() -> structlog.stdlib.BoundLogger:
    """Logger for offline batch jobs."""
    return LoggerRegistry.get("batch")
