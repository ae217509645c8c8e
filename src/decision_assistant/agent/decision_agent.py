# src/decision_assistant/agent/decision_agent.py
"""
Decision agent: one completion for the reply, a second to size the
reflection timer.
"""
from __future__ import annotations

import random
from typing import Any

from decision_assistant.agent.llm import LLMClient
from decision_assistant.agent.prompts import (
    ASSISTANT_SYSTEM_PROMPT,
    CLASSIFIER_SYSTEM_PROMPT,
    last_response_prompt,
)
from decision_assistant.config.settings import Settings
from decision_assistant.domain.models import Classification, DecisionReply
from decision_assistant.domain.reflection import (
    clamp_duration,
    normalize_importance,
    parse_classification,
    pick_prompts,
)
from decision_assistant.infrastructure.observability.logging import get_logger


logger = get_logger(__name__)


class DecisionAgent:
    """
    Orchestrates the two model calls behind POST /api/chat.

    Classification never fails the request: any error there is logged and
    replaced by the configured fallback. Errors from the main reply
    propagate as LLMError.
    """

    def __init__(
        self,
        llm: LLMClient,
        settings: Settings,
        rng: random.Random | None = None,
    ):
        self._llm = llm
        self._settings = settings
        self._rng = rng

    @property
    def fallback_classification(self) -> Classification:
        return Classification(
            importance=normalize_importance(self._settings.reflection_default_importance),
            duration=clamp_duration(
                self._settings.reflection_default_duration,
                self._settings.reflection_max_duration,
            ),
        )

    async def respond(self, messages: list[dict[str, Any]]) -> str:
        """Generate the assistant's reply to the conversation so far."""
        return await self._llm.complete(
            model=self._settings.openai_model,
            messages=[{"role": "system", "content": ASSISTANT_SYSTEM_PROMPT}, *messages],
        )

    async def classify(self, messages: list[dict[str, Any]], reply: str) -> Classification:
        """
        Classify decision importance and pick a reflection duration.

        Args:
            messages: Conversation history sent by the client
            reply: The assistant reply the user is about to reflect on

        Returns:
            Parsed classification, or the fallback if anything goes wrong
        """
        try:
            result = await self._llm.complete(
                model=self._settings.effective_classification_model,
                messages=[
                    {"role": "system", "content": CLASSIFIER_SYSTEM_PROMPT},
                    *messages,
                    {"role": "system", "content": last_response_prompt(reply)},
                ],
                max_tokens=self._settings.classification_max_tokens,
            )
            classification = parse_classification(
                result.strip(),
                default_duration=self._settings.reflection_default_duration,
                max_duration=self._settings.reflection_max_duration,
            )
        except Exception as e:
            fallback = self.fallback_classification
            logger.error(
                "classification_failed",
                error=str(e),
                error_type=type(e).__name__,
                importance=fallback.importance.value,
                duration=fallback.duration,
            )
            return fallback

        logger.info(
            "decision_classified",
            importance=classification.importance.value,
            duration=classification.duration,
        )
        return classification

    async def run(self, messages: list[dict[str, Any]]) -> DecisionReply:
        """Reply, classify, then choose reflection prompts."""
        content = await self.respond(messages)
        classification = await self.classify(messages, content)
        prompts = pick_prompts(classification.importance, self._rng)

        return DecisionReply(
            content=content,
            classification=classification,
            prompts=prompts,
        )
