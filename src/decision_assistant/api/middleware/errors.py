"""
Exception handlers producing the JSON error envelope.

Every error that leaves the API as JSON has the shape::

    {
        "error": {"code": "...", "message": "...", "details": [...], "context": {...}},
        "request_id": "...",
        "suggested_action": "..."
    }

The chat endpoint's plain-text 500 for model failures is returned by the
route itself and never reaches these handlers.

Usage:
    app = FastAPI()
    register_error_handlers(app)
"""

import logging
import uuid
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from decision_assistant.api.schemas.errors import ErrorCode, ErrorDetail, FieldError
from decision_assistant.config.settings import get_settings
from decision_assistant.domain.exceptions import AppError


logger = logging.getLogger(__name__)

PRODUCTION_SERVER_ERROR = "An internal error occurred. Please try again later."

# Friendlier wording for the pydantic error types a chat request can hit
VALIDATION_MESSAGES = {
    "missing": "This field is required",
    "string_type": "Must be a valid string",
    "string_too_long": "Message is too long",
    "list_type": "Must be a list",
    "too_short": "Must not be empty",
    "literal_error": "Must be one of: user, assistant, system",
    "json_invalid": "Body must be valid JSON",
    "model_attributes_type": "Must be an object",
    "dict_type": "Must be an object",
}

CHAT_BODY_HINT = 'Send a JSON body of the form {"messages": [{"role": "user", "content": "..."}]}'


def _request_id(request: Request) -> str:
    """Id set by RequestIDMiddleware, else the caller's header, else a fresh one."""
    return (
        getattr(request.state, "request_id", None)
        or request.headers.get("x-request-id")
        or str(uuid.uuid4())
    )


def _field_errors(exc: RequestValidationError) -> list[FieldError]:
    field_errors = []
    for error in exc.errors():
        error_type = error.get("type", "")
        raw_input = error.get("input")
        field_errors.append(
            FieldError(
                field=".".join(str(loc) for loc in error.get("loc", [])),
                message=VALIDATION_MESSAGES.get(error_type, error.get("msg", "Validation error")),
                code=error_type.upper().replace(".", "_"),
                value=raw_input if isinstance(raw_input, (str, int, float, bool)) else None,
            )
        )
    return field_errors


def _error_response(
    request: Request,
    status_code: int,
    code: ErrorCode,
    message: str,
    details: Optional[list[FieldError]] = None,
    context: Optional[dict[str, Any]] = None,
    suggested_action: Optional[str] = None,
) -> JSONResponse:
    """Render the envelope. Production replaces 5xx messages and drops their context."""
    if status_code >= 500 and get_settings().is_production:
        message = PRODUCTION_SERVER_ERROR
        context = None

    content: dict[str, Any] = {
        "error": ErrorDetail(
            code=code,
            message=message,
            details=details,
            context=context,
        ).model_dump(mode="json", exclude_none=True),
        "request_id": _request_id(request),
    }
    if suggested_action:
        content["suggested_action"] = suggested_action

    return JSONResponse(status_code=status_code, content=content)


def _log_extra(request: Request, **fields: Any) -> dict[str, Any]:
    return {
        "request_id": _request_id(request),
        "path": request.url.path,
        "method": request.method,
        **fields,
    }


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers for AppError, request validation and anything unhandled."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        extra = _log_extra(request, status_code=exc.status_code, error_type=type(exc).__name__)
        if exc.status_code >= 500:
            logger.error("Server error: %s", exc, extra=extra, exc_info=True)
        else:
            logger.info("Client error: %s", exc, extra=extra)

        return _error_response(
            request,
            status_code=exc.status_code,
            code=exc.error_code,
            message=exc.message,
            context=exc.details or None,
            suggested_action=exc.suggested_action,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        field_errors = _field_errors(exc)
        logger.info(
            "Validation error: %d field(s) failed validation",
            len(field_errors),
            extra=_log_extra(request, field_count=len(field_errors)),
        )

        return _error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            code=ErrorCode.VALIDATION_ERROR,
            message="Request validation failed",
            details=field_errors,
            suggested_action=CHAT_BODY_HINT,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception: %s",
            exc,
            extra=_log_extra(request, error_type=type(exc).__name__),
            exc_info=True,
        )

        return _error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code=ErrorCode.INTERNAL_ERROR,
            message=f"An unexpected error occurred: {exc}",
            context={"exception_type": type(exc).__name__},
            suggested_action="Please try again later",
        )
