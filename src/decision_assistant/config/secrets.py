"""
Masking of credentials in log output.

The only real secret this service holds is the language-model API key, but
any log field whose name looks sensitive is masked, including inside nested
dictionaries.
"""

from typing import Any, Iterable


SENSITIVE_KEYS = frozenset({
    "password",
    "secret",
    "token",
    "api_key",
    "apikey",
    "authorization",
    "credentials",
    "private_key",
    "bearer",
})

MASK = "****"


def mask_secret(value: str) -> str:
    """Replace a non-empty secret with a fixed mask."""
    return MASK if value else ""


def _is_sensitive(key: str, keys: Iterable[str]) -> bool:
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in keys)


def mask_secrets_in_dict(
    data: dict,
    keys: list[str] | None = None,
    default_keys: bool = True,
) -> dict:
    """
    Copy `data` with sensitive values masked.

    A key is sensitive when it contains one of the sensitive names,
    case-insensitively ("OPENAI_API_KEY" matches "api_key").

    Args:
        data: Dictionary that may contain secrets
        keys: Extra key names to treat as sensitive
        default_keys: Also use SENSITIVE_KEYS
    """
    sensitive = set(SENSITIVE_KEYS) if default_keys else set()
    sensitive.update(k.lower() for k in keys or [])

    masked = {}
    for key, value in data.items():
        if _is_sensitive(str(key), sensitive):
            masked[key] = mask_secret(str(value)) if value else value
        elif isinstance(value, dict):
            masked[key] = mask_secrets_in_dict(value, keys, default_keys)
        else:
            masked[key] = value
    return masked


def mask_secrets_processor(logger_obj: Any, method_name: str, event_dict: dict) -> dict:
    """Structlog processor applying mask_secrets_in_dict to each event."""
    return mask_secrets_in_dict(event_dict)
