"""Helpers for reading backend payloads into entities."""

from typing import Any

from site_content.domain.exceptions import ValidationException


def require_id(payload: dict[str, Any], key: str) -> str:
    """Return payload[key] as a non-empty string. Raises ValidationException otherwise."""
    value = payload.get(key)
    if value is None or str(value).strip() == "":
        raise ValidationException(f"Missing required field: {key}", field=key)
    return str(value)


def read_text(payload: dict[str, Any], key: str) -> str:
    """Return payload[key] as a string; missing or null becomes ''."""
    value = payload.get(key)
    return "" if value is None else str(value)


def read_flag(payload: dict[str, Any], key: str, default: bool = True) -> bool:
    """Return payload[key] as bool; missing or null uses default."""
    value = payload.get(key)
    if value is None:
        return default
    return bool(value)
