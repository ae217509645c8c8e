"""Standard API request and response schemas."""

from decision_assistant.api.schemas.errors import (
    ErrorCode,
    ErrorDetail,
    FieldError,
)
from decision_assistant.api.schemas.chat import (
    CHAT_ERROR_MESSAGE,
    DECISION_IMPORTANCE_HEADER,
    REFLECTION_PROMPT_1_HEADER,
    REFLECTION_PROMPT_2_HEADER,
    TIMER_DURATION_HEADER,
    TIMER_HEADERS,
    ChatMessageIn,
    ChatRequest,
)

__all__ = [
    # Error schemas
    "ErrorCode",
    "ErrorDetail",
    "FieldError",
    # Chat schemas
    "ChatMessageIn",
    "ChatRequest",
    "CHAT_ERROR_MESSAGE",
    "TIMER_DURATION_HEADER",
    "REFLECTION_PROMPT_1_HEADER",
    "REFLECTION_PROMPT_2_HEADER",
    "DECISION_IMPORTANCE_HEADER",
    "TIMER_HEADERS",
]
