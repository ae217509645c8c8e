"""HTTP client for the chat endpoint.

Hides the wire format: the reply arrives as the response body and the
reflection timer metadata as response headers.
"""

import re
from dataclasses import dataclass, field
from typing import Any

import httpx

from decision_assistant.api.schemas.chat import (
    DECISION_IMPORTANCE_HEADER,
    REFLECTION_PROMPT_1_HEADER,
    REFLECTION_PROMPT_2_HEADER,
    TIMER_DURATION_HEADER,
)

UNDEFINED_IMPORTANCE = "undefined"

# Leading integer of a header value, so "25s" reads as 25.
LEADING_INT_PATTERN = re.compile(r"\s*(-?\d+)")


class ChatApiError(Exception):
    """The chat endpoint could not be reached or answered with an error."""


@dataclass
class ChatReply:
    """Assistant reply plus the timer metadata read from headers."""

    content: str
    duration: int = 0
    prompts: list[str] = field(default_factory=list)
    importance: str = UNDEFINED_IMPORTANCE

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ChatReply":
        headers = response.headers
        match = LEADING_INT_PATTERN.match(headers.get(TIMER_DURATION_HEADER, ""))
        duration = int(match.group(1)) if match else 0

        prompt_1 = headers.get(REFLECTION_PROMPT_1_HEADER, "")
        prompt_2 = headers.get(REFLECTION_PROMPT_2_HEADER, "")
        prompts = [prompt_1, prompt_2] if prompt_1 and prompt_2 else []

        return cls(
            content=response.text,
            duration=duration,
            prompts=prompts,
            importance=headers.get(DECISION_IMPORTANCE_HEADER) or UNDEFINED_IMPORTANCE,
        )


class ChatApiClient:
    """Async client for POST /api/chat."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        try:
            self._client = httpx.AsyncClient(
                base_url=base_url.rstrip("/"),
                timeout=timeout,
                transport=transport,
            )
        except httpx.InvalidURL as e:
            raise ChatApiError(f"Invalid API URL {base_url!r}: {e}") from e

    async def send(self, messages: list[dict[str, Any]]) -> ChatReply:
        """Send the full conversation and return the next reply."""
        try:
            response = await self._client.post("/api/chat", json={"messages": messages})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ChatApiError(f"Request failed: {e}") from e

        if not response.is_success:
            raise ChatApiError(f"Chat endpoint returned {response.status_code}")

        return ChatReply.from_response(response)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ChatApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
