"""Application lifespan: startup and shutdown.

Wires the content backend client and the shared cache graph onto
app.state. One EntityStore per process; every request reads through it.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from site_content.application.services import (
    ContentAdminService,
    EntityStore,
    HierarchyLoader,
    NavigationBuilder,
    SlugResolver,
    TemplateDispatcher,
    build_children_caches,
)
from site_content.core.config import get_settings
from site_content.infrastructure.http import ContentApiClient, build_http_client
from site_content.shared.telemetry import get_telemetry, set_telemetry, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit close the backend client and flush telemetry.

    Tracing itself is set up in create_app(): instrumentation must wrap the
    app before its middleware stack is built.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.content_http_client = build_http_client(settings)
    api = ContentApiClient(app.state.content_http_client)
    store = EntityStore()
    caches = build_children_caches(api, store)
    app.state.entity_store = store
    app.state.hierarchy_loader = HierarchyLoader(
        store,
        caches,
        SlugResolver(home_slug=settings.home_slug),
        api=api,
    )
    app.state.navigation_builder = NavigationBuilder(caches)
    app.state.template_dispatcher = TemplateDispatcher()
    app.state.content_admin = ContentAdminService(api, store, caches)
    logger.info("Content backend: %s", settings.content_api_base_url)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "content_http_client", None) is not None:
        await app.state.content_http_client.aclose()
        app.state.content_http_client = None
        logger.info("Content HTTP client closed")

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
