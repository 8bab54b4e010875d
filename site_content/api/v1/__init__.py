"""API v1."""

from site_content.api.v1.router import api_router

__all__ = ["api_router"]
