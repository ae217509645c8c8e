"""
Structured logging setup.

Call `configure_logging()` once at startup (the API lifespan and the `chat`
command both do), then log through `get_logger(__name__)`:

    logger = get_logger(__name__)
    logger.info("decision_classified", importance="complex", duration=25)

Events are snake_case strings with keyword fields, not formatted sentences.
"""
from typing import Any, Optional, TextIO
import logging
import sys

import structlog

from decision_assistant.config.settings import get_settings
from decision_assistant.api.middleware.request_id import add_request_id_to_log


def console_renderer_with_colors() -> structlog.dev.ConsoleRenderer:
    """Readable, coloured output for local development."""
    return structlog.dev.ConsoleRenderer(
        colors=True,
        pad_event=25,
        exception_formatter=structlog.dev.plain_traceback,
    )


def json_renderer() -> structlog.processors.JSONRenderer:
    """One JSON object per line, for log shipping."""
    return structlog.processors.JSONRenderer()


def build_processors(log_format: str) -> list[Any]:
    """
    Processor chain, in order.

    Secret masking runs after every field has been added and before
    rendering, so nothing bound by context or request id escapes it.
    """
    # Deferred to avoid circular imports
    from decision_assistant.config.secrets import mask_secrets_processor

    renderer = json_renderer() if log_format == "json" else console_renderer_with_colors()

    return [
        structlog.contextvars.merge_contextvars,
        add_request_id_to_log,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        mask_secrets_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(stream: Optional[TextIO] = None) -> None:
    """
    Configure structlog and the stdlib root logger from settings.

    Args:
        stream: Where log lines go (default stdout). The terminal client
            passes a file so logs do not draw over the UI.
    """
    settings = get_settings()
    output = stream or sys.stdout

    structlog.configure(
        processors=build_processors(settings.log_format),
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    # uvicorn, httpx and openai log through stdlib logging
    logging.basicConfig(level=settings.log_level, stream=output, format="%(message)s")


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)


logger = get_logger()
