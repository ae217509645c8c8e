"""Domain models, reflection rules, and exceptions."""

from decision_assistant.domain.exceptions import (
    AppError,
    ExternalError,
    LLMError,
    LLMNotConfigured,
    UpstreamTimeout,
)
from decision_assistant.domain.models import (
    ChatMessage,
    Classification,
    DecisionReply,
    Importance,
)
from decision_assistant.domain.reflection import (
    DEFAULT_CLASSIFICATION,
    REFLECTION_PROMPTS,
    clamp_duration,
    normalize_importance,
    parse_classification,
    pick_prompts,
)

__all__ = [
    # Exceptions
    "AppError",
    "ExternalError",
    "LLMError",
    "LLMNotConfigured",
    "UpstreamTimeout",
    # Models
    "ChatMessage",
    "Classification",
    "DecisionReply",
    "Importance",
    # Reflection rules
    "DEFAULT_CLASSIFICATION",
    "REFLECTION_PROMPTS",
    "clamp_duration",
    "normalize_importance",
    "parse_classification",
    "pick_prompts",
]
