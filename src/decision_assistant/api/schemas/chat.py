"""Request schemas and response header names for the chat endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


# Timer metadata travels next to the reply body in these response headers.
TIMER_DURATION_HEADER = "X-Timer-Duration"
REFLECTION_PROMPT_1_HEADER = "X-Reflection-Prompt-1"
REFLECTION_PROMPT_2_HEADER = "X-Reflection-Prompt-2"
DECISION_IMPORTANCE_HEADER = "X-Decision-Importance"

TIMER_HEADERS = [
    TIMER_DURATION_HEADER,
    REFLECTION_PROMPT_1_HEADER,
    REFLECTION_PROMPT_2_HEADER,
    DECISION_IMPORTANCE_HEADER,
]

CHAT_ERROR_MESSAGE = "Sorry, there was an error processing your request."


class ChatMessageIn(BaseModel):
    """A single conversation turn sent by the client."""

    role: Literal["user", "assistant", "system"] = Field(
        ...,
        description="Author of the message",
        examples=["user", "assistant"]
    )
    content: str = Field(
        ...,
        description="Message text",
        max_length=20000,
        examples=["Should I accept the job offer from the startup?"]
    )


class ChatRequest(BaseModel):
    """Request body for POST /api/chat."""

    messages: list[ChatMessageIn] = Field(
        ...,
        min_length=1,
        description="Full conversation history, oldest first",
    )

    def history(self) -> list[dict[str, str]]:
        """Conversation in the shape the completion API expects."""
        return [{"role": m.role, "content": m.content} for m in self.messages]
