"""Dependencies (composition root): shared cache services from app.state.

The lifespan builds one EntityStore and one HierarchyLoader per process;
every request reads through the same instances.
"""

import hmac

from fastapi import HTTPException, Request

from site_content.application.services import (
    ContentAdminService,
    HierarchyLoader,
    NavigationBuilder,
    TemplateDispatcher,
)
from site_content.core.config import get_settings


def _from_state(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(status_code=503, detail="Content cache not initialized")
    return service


def get_hierarchy_loader(request: Request) -> HierarchyLoader:
    """Shared hierarchy loader; 503 until the lifespan has wired it."""
    return _from_state(request, "hierarchy_loader")


def get_navigation_builder(request: Request) -> NavigationBuilder:
    return _from_state(request, "navigation_builder")


def get_template_dispatcher(request: Request) -> TemplateDispatcher:
    dispatcher = getattr(request.app.state, "template_dispatcher", None)
    return dispatcher if dispatcher is not None else TemplateDispatcher()


def get_content_admin(request: Request) -> ContentAdminService:
    """Admin service, guarded by the X-Admin-Secret header.

    503 when ADMIN_API_SECRET is not configured; 401 when the header is
    missing or does not match.
    """
    settings = get_settings()
    if settings.admin_api_secret is None:
        raise HTTPException(status_code=503, detail="Content admin is not enabled")
    header_secret = request.headers.get("X-Admin-Secret") or ""
    expected = settings.admin_api_secret.get_secret_value()
    if not header_secret or not hmac.compare_digest(header_secret, expected):
        raise HTTPException(status_code=401, detail="Unauthorized content admin request")
    return _from_state(request, "content_admin")
