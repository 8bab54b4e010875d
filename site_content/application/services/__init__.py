"""Application services: entity store, children cache, slug resolution, loading, navigation and dispatch."""

from site_content.application.services.children_cache import (
    ChildrenCache,
    build_children_caches,
)
from site_content.application.services.content_admin_service import ContentAdminService
from site_content.application.services.entity_store import EntityStore
from site_content.application.services.hierarchy_loader import HierarchyLoader
from site_content.application.services.navigation_builder import NavigationBuilder
from site_content.application.services.slug_resolver import SlugResolver, normalize_slug
from site_content.application.services.template_dispatcher import TemplateDispatcher

__all__ = [
    "ChildrenCache",
    "ContentAdminService",
    "EntityStore",
    "HierarchyLoader",
    "NavigationBuilder",
    "SlugResolver",
    "TemplateDispatcher",
    "build_children_caches",
    "normalize_slug",
]
