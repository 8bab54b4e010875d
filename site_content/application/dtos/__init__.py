"""DTOs for page resolution and navigation (no dependency on HTTP or the backend wire format)."""

from site_content.application.dtos.navigation import (
    FooterSection,
    NavLink,
    NavMenu,
    SiteNavigation,
)
from site_content.application.dtos.page import (
    PageRenderPlan,
    PageResolution,
    PartialDegradation,
    ResolvedPage,
    SectionRenderPlan,
)

__all__ = [
    "FooterSection",
    "NavLink",
    "NavMenu",
    "SiteNavigation",
    "PageRenderPlan",
    "PageResolution",
    "PartialDegradation",
    "ResolvedPage",
    "SectionRenderPlan",
]
