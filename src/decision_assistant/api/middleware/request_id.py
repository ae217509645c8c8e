"""
Request and correlation ids.

Every chat request gets an id that appears in its log lines, in error
envelopes and in the X-Request-ID response header, so a user-reported
failure can be matched to the server logs.
"""
import uuid
from contextvars import ContextVar
from typing import Any, Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

logger = structlog.get_logger(__name__)


def is_valid_uuid(value: str) -> bool:
    """True only for a canonical lower-case UUID4 string."""
    try:
        parsed = uuid.UUID(value, version=4)
    except (ValueError, AttributeError):
        return False
    return str(parsed) == value and parsed.version == 4


def get_request_id() -> Optional[str]:
    return request_id_var.get(None)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get(None)


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_var.set(correlation_id)


def add_request_id_to_log(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Structlog processor adding the current request and correlation ids."""
    for key, value in (("request_id", get_request_id()), ("correlation_id", get_correlation_id())):
        if value:
            event_dict[key] = value
    return event_dict


def _incoming_id(request: Request, header: str, fallback: str) -> str:
    """Use the caller's id if it is a well-formed UUID4, otherwise the fallback."""
    value = request.headers.get(header)
    if not value:
        return fallback
    if is_valid_uuid(value):
        return value

    logger.warning(
        "Rejected malformed id header",
        header=header,
        invalid_id=value[:64],
        client_ip=request.client.host if request.client else None,
    )
    return fallback


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach request and correlation ids to each request.

    Incoming X-Request-ID / X-Correlation-ID headers are honoured when they
    are valid UUID4s. The correlation id defaults to the request id. Both are
    stored on request.state, in context variables for logging, and echoed
    on the response.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _incoming_id(request, REQUEST_ID_HEADER, str(uuid.uuid4()))
        correlation_id = _incoming_id(request, CORRELATION_ID_HEADER, request_id)

        request.state.request_id = request_id
        request.state.correlation_id = correlation_id
        set_request_id(request_id)
        set_correlation_id(correlation_id)

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
