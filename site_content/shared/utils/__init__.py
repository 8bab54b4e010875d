"""Shared utility helpers."""

from site_content.shared.utils.datetime import ensure_utc, parse_api_datetime

__all__ = ["ensure_utc", "parse_api_datetime"]
