"""
Observability infrastructure for the decision assistant.

This package provides:
- Structured logging
- Request context management
"""

from decision_assistant.infrastructure.observability.logging import (
    configure_logging,
    get_logger,
)
from decision_assistant.infrastructure.observability.context import (
    log_context,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_context",
]
