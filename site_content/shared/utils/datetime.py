"""
UTC datetime utilities for consistent timezone handling.

Backend timestamps arrive as ISO-8601 strings; all parsed values are
timezone-aware UTC.
"""

from datetime import UTC, datetime


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_api_datetime(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp from the content backend.

    Returns None for missing or unparseable values; creation times are
    informational and never block merging an entity.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        return None
