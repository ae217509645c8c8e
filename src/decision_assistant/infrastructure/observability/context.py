"""
Temporary log context.

    with log_context(message_count=4):
        logger.info("chat_reply_ready")  # carries message_count

Keys are bound through structlog's contextvars, so they follow the request
across awaits and are dropped again when the block exits.
"""
from contextlib import contextmanager
from typing import Any, Iterator

import structlog


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind `fields` to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(**fields):
        yield


__all__ = [
    "log_context",
]
