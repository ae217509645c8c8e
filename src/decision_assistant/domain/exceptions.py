"""
Application exceptions.

Each class fixes its HTTP status, error code, default message and a
suggestion for the caller, so raising sites only pass what is specific:

    raise LLMError("Completion returned no choices", details={"model": "gpt-4.1"})

Language-model failures all derive from LLMError. The chat route catches
that one type to return its plain-text 500.
"""

from typing import Any, Optional
from decision_assistant.api.schemas.errors import ErrorCode


class AppError(Exception):
    """Base class; rendered by the JSON error handlers when not caught."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500
    default_message: str = "An unexpected error occurred"
    default_suggested_action: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggested_action: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        self.suggested_action = suggested_action or self.default_suggested_action
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.suggested_action:
            result["suggested_action"] = self.suggested_action
        return result


class ExternalError(AppError):
    """A service we depend on failed."""

    error_code = ErrorCode.EXTERNAL_SERVICE_ERROR
    default_message = "An external service error occurred"
    default_suggested_action = "Please try again later"


class LLMError(ExternalError):
    """The chat completion could not be produced."""

    error_code = ErrorCode.LLM_ERROR
    default_message = "Language model service error"
    default_suggested_action = "The assistant is unavailable right now. Please try again in a few moments"


class LLMNotConfigured(LLMError):
    """No API key is set for the language model."""

    status_code = 503
    error_code = ErrorCode.SERVICE_UNAVAILABLE
    default_message = "Language model is not configured"
    default_suggested_action = "Set OPENAI_API_KEY and restart the service"


class UpstreamTimeout(LLMError):
    """The language model did not answer within the configured timeout."""

    status_code = 504
    error_code = ErrorCode.UPSTREAM_TIMEOUT
    default_message = "Language model request timed out"
    default_suggested_action = "Please try again; long conversations take longer to answer"
