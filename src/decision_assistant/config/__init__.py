"""Configuration management for the decision assistant."""

from decision_assistant.config.settings import Settings, get_settings
from decision_assistant.config.secrets import (
    mask_secret,
    mask_secrets_in_dict,
    mask_secrets_processor,
)

__all__ = [
    "Settings",
    "get_settings",
    "mask_secret",
    "mask_secrets_in_dict",
    "mask_secrets_processor",
]
