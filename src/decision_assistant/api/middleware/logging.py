"""
Access logging for the API.

One "request_started" and one "request_finished" event per request, with
method, path, status and elapsed time. Probe traffic on the health paths is
not logged, and neither are bodies: they carry the user's conversation.
"""
import time
from typing import Set
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from decision_assistant.infrastructure.observability.logging import get_logger


logger = get_logger(__name__)

UNLOGGED_PATHS: Set[str] = {"/health", "/health/live", "/health/ready"}

PROCESS_TIME_HEADER = "X-Process-Time-Ms"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request and add an X-Process-Time-Ms header."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        log = logger.bind(
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )
        log.info("request_started")

        try:
            response = await call_next(request)
        except Exception as e:
            log.error(
                "request_crashed",
                error_type=type(e).__name__,
                duration_ms=_elapsed_ms(started),
            )
            raise

        duration_ms = _elapsed_ms(started)
        level = log.warning if response.status_code >= 400 else log.info
        level("request_finished", status_code=response.status_code, duration_ms=duration_ms)

        response.headers[PROCESS_TIME_HEADER] = str(duration_ms)
        return response
