"""Utilities for loading sensitive configuration without leaking values."""
from __future__ import annotations

from typing import Final

__all__ = ["MissingSecretError", "optional_secret", "is_placeholder"]


class MissingSecretError(RuntimeError):
    """Raised when a configured secret still carries a placeholder value."""


_PLACEHOLDER_VALUES: Final[set[str]] = {
    "changeme",
    "change-me",
    "placeholder",
    "example",
    "sample",
    "your-key-here",
    "your-jwt-secret",
}


def is_placeholder(value: str | None) -> bool:
    if not value:
        return True
    normalized = value.strip().lower()
    return not normalized or normalized in _PLACEHOLDER_VALUES


def optional_secret(name: str, value: str | None) -> str | None:
    """Return a trimmed secret, ``None`` when unset, or raise on placeholders.

    An empty value means the feature guarded by the secret is switched off;
    a placeholder means someone copied an example config and forgot to fill
    it in, which must not silently disable verification.
    """

    if value is None or not value.strip():
        return None
    if is_placeholder(value):
        raise MissingSecretError(f"Environment variable {name} must not use placeholder defaults")
    return value.strip()
