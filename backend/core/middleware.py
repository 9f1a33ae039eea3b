"""Request Middleware

Binds a correlation ID to every request's log context and logs each
request's outcome with its timing. Static audio and health checks log at
debug level so clip fetches don't flood the console.
"""
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from core.logging import (
    api_logger,
    bind_context,
    clear_context,
    generate_correlation_id,
)

log = api_logger()

QUIET_PREFIXES = ("/audio", "/health")
CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Correlation context plus one completion log line per request."""

    def __init__(self, app, slow_threshold_ms: float = 1000):
        super().__init__(app)
        self.slow_threshold_ms = slow_threshold_ms

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        path = request.url.path

        clear_context()
        bind_context(correlation_id=correlation_id, method=request.method, path=path)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            log.exception(
                "request_failed",
                error_type=type(exc).__name__,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        finally:
            duration_ms = (time.perf_counter() - start) * 1000

        response.headers[CORRELATION_HEADER] = correlation_id
        status = response.status_code

        if path.startswith(QUIET_PREFIXES) and status < 400:
            log_method = log.debug
        else:
            log_method = log.info if status < 400 else (log.warning if status < 500 else log.error)
        log_method("request_completed", status=status, duration_ms=round(duration_ms, 2))

        if duration_ms > self.slow_threshold_ms:
            log.warning("slow_request", duration_ms=round(duration_ms, 2), threshold_ms=self.slow_threshold_ms)

        clear_context()
        return response
