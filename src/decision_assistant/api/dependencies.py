# src/decision_assistant/api/dependencies.py
from functools import lru_cache
from typing import Annotated
from fastapi import Depends

from decision_assistant.agent import DecisionAgent, LLMClient
from decision_assistant.config.settings import Settings, get_settings


@lru_cache
def get_llm_client() -> LLMClient:
    """Process-wide LLM client built from settings."""
    return LLMClient.from_settings(get_settings())


def get_decision_agent(
    settings: Annotated[Settings, Depends(get_settings)],
    llm: Annotated[LLMClient, Depends(get_llm_client)],
) -> DecisionAgent:
    return DecisionAgent(llm=llm, settings=settings)


# Type aliases for clean injection
AppSettings = Annotated[Settings, Depends(get_settings)]
CurrentLLM = Annotated[LLMClient, Depends(get_llm_client)]
CurrentDecisionAgent = Annotated[DecisionAgent, Depends(get_decision_agent)]
