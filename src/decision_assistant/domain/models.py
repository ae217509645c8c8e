# src/decision_assistant/domain/models.py
"""
Domain values for the decision assistant.

Nothing here is persisted: a classification is computed per request and the
chat transcript lives only in client state.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal
from uuid import uuid4


class Importance(str, Enum):
    """How weighty the decision under discussion is."""

    TRIVIAL = "trivial"
    ROUTINE = "routine"
    COMPLEX = "complex"
    LIFE_ALTERING = "life-altering"


@dataclass(frozen=True)
class Classification:
    """Result of asking the model how long the user should reflect."""

    importance: Importance
    duration: int  # seconds


@dataclass(frozen=True)
class DecisionReply:
    """Assistant reply plus the timer metadata sent alongside it."""

    content: str
    classification: Classification
    prompts: tuple[str, str]

    @property
    def importance(self) -> Importance:
        return self.classification.importance

    @property
    def duration(self) -> int:
        return self.classification.duration


@dataclass
class ChatMessage:
    """A chat message held in client state."""

    role: Literal["user", "assistant"]
    content: str
    id: str = field(default_factory=lambda: uuid4().hex)

    def to_api(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}
