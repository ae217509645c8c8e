"""Language-model orchestration for the decision assistant."""

from decision_assistant.agent.llm import LLMClient
from decision_assistant.agent.decision_agent import DecisionAgent

__all__ = [
    "LLMClient",
    "DecisionAgent",
]
