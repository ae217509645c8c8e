"""
Reflection rules: parsing the classifier's free-text answer and choosing
the prompts shown while the user reflects.

The classifier is asked to answer in the form::

    importance: complex
    duration: 25

Anything it gets wrong is repaired here rather than rejected: an unknown
category becomes ``routine`` and the duration is always clamped into
``[MIN_DURATION, MAX_DURATION]``.
"""

import random
import re
from typing import Optional

from decision_assistant.domain.models import Classification, Importance


MIN_DURATION = 0
MAX_DURATION = 240
DEFAULT_DURATION = 60
DEFAULT_IMPORTANCE = Importance.ROUTINE

DEFAULT_CLASSIFICATION = Classification(
    importance=DEFAULT_IMPORTANCE,
    duration=DEFAULT_DURATION,
)

IMPORTANCE_PATTERN = re.compile(r"importance:\s*(\w+-?\w*)", re.IGNORECASE)
DURATION_PATTERN = re.compile(r"duration:\s*(\d+)", re.IGNORECASE)


# Two prompt sets per importance level, each a pair of statements.
REFLECTION_PROMPTS: dict[Importance, list[tuple[str, str]]] = {
    Importance.TRIVIAL: [
        (
            "Consider your gut feeling about this choice.",
            "Think about how this might affect the rest of your day.",
        ),
        (
            "Imagine what a satisfying outcome would look like.",
            "Consider if you're missing any information to decide.",
        ),
    ],
    Importance.ROUTINE: [
        (
            "Reflect on how this aligns with your short-term goals.",
            "Consider the trade-offs you're making with this choice.",
        ),
        (
            "Think about what you've learned from similar past decisions.",
            "Consider how this might affect your weekly routine.",
        ),
    ],
    Importance.COMPLEX: [
        (
            "Consider which values are most important in this decision.",
            "Think about the worst possible outcome of each option.",
        ),
        (
            "Imagine how this decision might look different in 6 months.",
            "Consider what someone you respect would advise here.",
        ),
    ],
    Importance.LIFE_ALTERING: [
        (
            "Reflect on how this aligns with your core values and vision.",
            "Consider what fears might be influencing your thinking.",
        ),
        (
            "Think about how this might affect your key relationships.",
            "Imagine what would make you proud looking back on this choice.",
        ),
    ],
}


def clamp_duration(seconds: int, maximum: int = MAX_DURATION) -> int:
    """Clamp a reflection duration into ``[MIN_DURATION, maximum]``."""
    return min(max(seconds, MIN_DURATION), maximum)


def normalize_importance(value: Optional[str]) -> Importance:
    """Map free text onto an Importance, defaulting to routine."""
    if not value:
        return DEFAULT_IMPORTANCE
    try:
        return Importance(value.strip().lower())
    except ValueError:
        return DEFAULT_IMPORTANCE


def parse_classification(
    text: str,
    default_duration: int = DEFAULT_DURATION,
    max_duration: int = MAX_DURATION,
) -> Classification:
    """
    Extract importance and duration from the classifier's answer.

    Args:
        text: Raw model output
        default_duration: Used when no duration is present
        max_duration: Upper clamp bound

    Returns:
        A Classification whose duration is within bounds
    """
    importance_match = IMPORTANCE_PATTERN.search(text or "")
    duration_match = DURATION_PATTERN.search(text or "")

    importance = normalize_importance(importance_match.group(1) if importance_match else None)
    duration = int(duration_match.group(1)) if duration_match else default_duration

    return Classification(
        importance=importance,
        duration=clamp_duration(duration, max_duration),
    )


def pick_prompts(
    importance: Importance,
    rng: Optional[random.Random] = None,
) -> tuple[str, str]:
    """Choose one prompt pair for the given importance at random."""
    options = REFLECTION_PROMPTS[importance]
    chooser = rng or random
    return chooser.choice(options)
