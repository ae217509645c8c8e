# src/decision_assistant/agent/llm.py
"""
Thin async wrapper over OpenAI chat completions.

The decision agent only needs "messages in, text out", so that is all this
exposes. Provider errors are translated into LLMError subclasses.
"""
from __future__ import annotations

from typing import Any

import openai
from openai import AsyncOpenAI

from decision_assistant.config.settings import Settings
from decision_assistant.domain.exceptions import LLMError, LLMNotConfigured, UpstreamTimeout


class LLMClient:
    """
    Chat-completion client bound to one API key and base URL.

    The underlying AsyncOpenAI client is created on first use so the service
    can start (and answer health checks) without an API key.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 60.0,
        client: AsyncOpenAI | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMClient":
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        return cls(
            api_key=api_key,
            base_url=settings.openai_base_url,
            timeout=settings.openai_timeout,
        )

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self._api_key)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._api_key:
                raise LLMNotConfigured()

            client_kwargs: dict[str, Any] = {"api_key": self._api_key, "timeout": self._timeout}
            if self._base_url:
                client_kwargs["base_url"] = self._base_url

            self._client = AsyncOpenAI(**client_kwargs)
        return self._client

    async def complete(
        self,
        model: str,
        messages: list[dict[str, Any]],
        max_tokens: int | None = None,
    ) -> str:
        """
        Run one chat completion and return the first choice's text.

        Args:
            model: Model identifier
            messages: OpenAI-format messages, system prompt included
            max_tokens: Optional completion budget

        Returns:
            The completion text, or "" if the model returned no content

        Raises:
            UpstreamTimeout: The provider did not answer in time
            LLMError: Any other failure, including a malformed response
        """
        client = self._get_client()

        request: dict[str, Any] = {"model": model, "messages": messages}
        if max_tokens is not None:
            request["max_tokens"] = max_tokens

        try:
            response = await client.chat.completions.create(**request)
        except openai.APITimeoutError as e:
            raise UpstreamTimeout(details={"model": model}) from e
        except openai.OpenAIError as e:
            raise LLMError(f"Completion failed: {e}", details={"model": model}) from e
        except Exception as e:
            raise LLMError(
                f"Completion failed: {type(e).__name__}",
                details={"model": model},
            ) from e

        return _first_choice_text(response, model)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()


def _first_choice_text(response: Any, model: str) -> str:
    """Text of the first choice; anything not shaped like a ChatCompletion is an LLMError."""
    choices = getattr(response, "choices", None)
    if not choices:
        raise LLMError("Completion returned no choices", details={"model": model})

    message = getattr(choices[0], "message", None)
    if message is None:
        raise LLMError("Completion choice has no message", details={"model": model})

    content = getattr(message, "content", None)
    if content is not None and not isinstance(content, str):
        raise LLMError("Completion content is not text", details={"model": model})
    return content or ""
