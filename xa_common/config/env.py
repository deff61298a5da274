"""Environment variable parsing utilities."""

from __future__ import annotations

from pathlib import Path


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_str_env(value: str | None) -> str | None:
    """Return a stripped string, or None when unset or blank."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_path_env(value: str | None) -> Path | None:
    """Parse a user path (``~`` expanded) from an environment variable."""
    text = parse_str_env(value)
    if text is None:
        return None
    return Path(text).expanduser()
