"""Error envelope returned by the JSON exception handlers."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Machine-readable error codes, grouped by HTTP status."""

    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # 500
    INTERNAL_ERROR = "INTERNAL_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    LLM_ERROR = "LLM_ERROR"

    # 503: no API key configured for the language model
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # 504: the language model did not answer in time
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"


class FieldError(BaseModel):
    """One invalid field in a rejected request body."""

    model_config = {"str_strip_whitespace": True}

    field: str = Field(
        ...,
        description="Location of the field, dot separated",
        examples=["body.messages", "body.messages.0.role"]
    )
    message: str = Field(
        ...,
        description="What is wrong with the field",
        examples=["Must not be empty", "Must be one of: user, assistant, system"]
    )
    code: str | None = Field(
        default=None,
        description="Pydantic error type, upper-cased",
        examples=["TOO_SHORT", "LITERAL_ERROR"]
    )
    value: Any | None = Field(
        default=None,
        description="The rejected value, when it is a scalar",
    )


class ErrorDetail(BaseModel):
    """The `error` object of the envelope."""

    model_config = {"str_strip_whitespace": True}

    code: ErrorCode = Field(
        ...,
        description="Machine-readable error code",
        examples=[ErrorCode.VALIDATION_ERROR, ErrorCode.INTERNAL_ERROR]
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Request validation failed"]
    )
    details: list[FieldError] | None = Field(
        default=None,
        description="Field-level problems, for validation errors",
    )
    context: dict[str, Any] | None = Field(
        default=None,
        description="Extra information about the failure",
    )
