"""HTTP adapters."""

from site_content.infrastructure.http.content_api_client import ContentApiClient
from site_content.infrastructure.http.factory import build_http_client

__all__ = ["ContentApiClient", "build_http_client"]
