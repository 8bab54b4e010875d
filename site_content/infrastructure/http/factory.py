"""Factory for the shared httpx client used by the content API adapter."""

import httpx

from site_content.core.config import Settings


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Return an AsyncClient bound to the content backend (base URL, timeout, bearer token)."""
    headers = {"Accept": "application/json"}
    if settings.content_api_token and settings.content_api_token.get_secret_value():
        headers["Authorization"] = f"Bearer {settings.content_api_token.get_secret_value()}"
    return httpx.AsyncClient(
        base_url=settings.content_api_base_url.rstrip("/"),
        headers=headers,
        timeout=settings.content_api_timeout_seconds,
    )
