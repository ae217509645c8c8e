# src/decision_assistant/api/routes/chat.py
from typing import AsyncIterator

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse, StreamingResponse

from decision_assistant.api.dependencies import CurrentDecisionAgent
from decision_assistant.api.schemas.chat import (
    CHAT_ERROR_MESSAGE,
    DECISION_IMPORTANCE_HEADER,
    REFLECTION_PROMPT_1_HEADER,
    REFLECTION_PROMPT_2_HEADER,
    TIMER_DURATION_HEADER,
    ChatRequest,
)
from decision_assistant.domain.exceptions import LLMError
from decision_assistant.domain.models import DecisionReply
from decision_assistant.infrastructure.observability.context import log_context
from decision_assistant.infrastructure.observability.logging import get_logger

router = APIRouter()

logger = get_logger(__name__)


def timer_headers(reply: DecisionReply) -> dict[str, str]:
    """Response headers carrying the reflection timer metadata."""
    prompt_1, prompt_2 = reply.prompts
    return {
        TIMER_DURATION_HEADER: str(reply.duration),
        REFLECTION_PROMPT_1_HEADER: prompt_1,
        REFLECTION_PROMPT_2_HEADER: prompt_2,
        DECISION_IMPORTANCE_HEADER: reply.importance.value,
    }


async def _stream_text(text: str) -> AsyncIterator[bytes]:
    yield text.encode("utf-8")


@router.post(
    "/chat",
    summary="Send the conversation and get the next reply",
    description="""
    Forward the conversation to the language model and return its reply as
    the response body.

    A second model call classifies the decision and sizes the reflection
    timer. Its result is returned in headers:

    - `X-Timer-Duration`: seconds the client must wait before replying (0-240)
    - `X-Reflection-Prompt-1`, `X-Reflection-Prompt-2`: statements to reflect on
    - `X-Decision-Importance`: trivial, routine, complex or life-altering
    """,
    response_class=StreamingResponse,
    responses={
        200: {
            "description": "Assistant reply",
            "content": {"text/plain": {"example": "It might help to think about your budget here."}},
        },
        500: {
            "description": "The language model call failed",
            "content": {"text/plain": {"example": CHAT_ERROR_MESSAGE}},
        },
    },
)
async def chat(request: ChatRequest, agent: CurrentDecisionAgent):
    messages = request.history()

    with log_context(message_count=len(messages)):
        try:
            reply = await agent.run(messages)
        except LLMError as e:
            logger.error("chat_completion_failed", error=str(e), error_type=type(e).__name__)
            return PlainTextResponse(
                CHAT_ERROR_MESSAGE,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        logger.info(
            "chat_reply_ready",
            importance=reply.importance.value,
            duration=reply.duration,
            reply_length=len(reply.content),
        )

    return StreamingResponse(
        _stream_text(reply.content),
        media_type="text/plain; charset=utf-8",
        headers=timer_headers(reply),
    )
