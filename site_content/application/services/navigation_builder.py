"""Navigation builder: header menus and footer groups from the shared cache.

Reads the same apartado and categoria slices the hierarchy loader fills,
so building navigation after a page load costs no extra fetches.

Rules:
- header: active apartados except the about/faq/terms/privacy templates;
  those with show_categories get a dropdown of their active categorias;
- about: active about/faq apartados that do not list categorias;
- footer: one group per active apartado with show_categories and at least
  one active categoria, then a legal group for active terms/privacy apartados.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence

from site_content.application.dtos.navigation import (
    FooterSection,
    NavLink,
    NavMenu,
    SiteNavigation,
)
from site_content.application.services.children_cache import ChildrenCache
from site_content.core.constants import ROOT_PARENT_ID
from site_content.domain.entities import Apartado, Categoria
from site_content.domain.enums import EntityKind, PageTemplate
from site_content.domain.exceptions import SiteContentException
from site_content.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

LEGAL_SECTION_TITLE = "Términos y Políticas"

# Templates with a fixed public route; everything else routes by name.
TEMPLATE_ROUTES: dict[PageTemplate, str] = {
    PageTemplate.ABOUT: "/nosotros",
    PageTemplate.FAQ: "/faq",
    PageTemplate.BLOG: "/blog",
    PageTemplate.PRICING: "/precios",
    PageTemplate.TERMS: "/terminos",
    PageTemplate.PRIVACY: "/politicas",
}

_ABOUT_TEMPLATES = frozenset({PageTemplate.ABOUT, PageTemplate.FAQ})
_LEGAL_TEMPLATES = frozenset({PageTemplate.TERMS, PageTemplate.PRIVACY})
_OFF_HEADER_TEMPLATES = _ABOUT_TEMPLATES | _LEGAL_TEMPLATES


def apartado_route(apartado: Apartado) -> str:
    template = apartado.template
    if template in TEMPLATE_ROUTES:
        return TEMPLATE_ROUTES[template]
    return f"/{apartado.name.strip().lower()}"


def categoria_route(categoria: Categoria) -> str:
    return f"/categoria/{categoria.id}"


def _categoria_links(categorias: Iterable[Categoria]) -> tuple[NavLink, ...]:
    return tuple(NavLink(c.name, categoria_route(c)) for c in categorias if c.active)


def build_navigation(
    apartados: Sequence[Apartado],
    categorias_by_apartado: Mapping[str, Sequence[Categoria]],
) -> SiteNavigation:
    """Pure projection of cached apartados and categorias into navigation."""
    active = [a for a in apartados if a.active]

    header = []
    for apartado in active:
        if apartado.template in _OFF_HEADER_TEMPLATES:
            continue
        children: tuple[NavLink, ...] = ()
        if apartado.show_categories:
            children = _categoria_links(categorias_by_apartado.get(apartado.id, ()))
        header.append(NavMenu(apartado.name, apartado_route(apartado), children))

    about = tuple(
        NavLink(a.name, apartado_route(a))
        for a in active
        if a.template in _ABOUT_TEMPLATES and not a.show_categories
    )

    footer = []
    for apartado in active:
        if not apartado.show_categories:
            continue
        links = _categoria_links(categorias_by_apartado.get(apartado.id, ()))
        if links:
            footer.append(FooterSection(apartado.name, links))
    legal = tuple(
        NavLink(a.name, apartado_route(a)) for a in active if a.template in _LEGAL_TEMPLATES
    )
    if legal:
        footer.append(FooterSection(LEGAL_SECTION_TITLE, legal))

    return SiteNavigation(header=tuple(header), about=about, footer=tuple(footer))


class NavigationBuilder:
    """Loads what navigation needs through the children caches, then projects it."""

    def __init__(self, caches: Mapping[EntityKind, ChildrenCache]) -> None:
        self._caches = caches

    @traced("navigation_builder.build")
    async def build(self, refresh: bool = False) -> SiteNavigation:
        """Build site navigation.

        A failed categoria fetch leaves that apartado without links.

        Raises:
            ContentTransportException: The top-level collection could not be loaded.
        """
        apartados = await self._caches[EntityKind.APARTADO].ensure_loaded(
            ROOT_PARENT_ID, refresh=refresh, reload_empty=True
        )
        listed = [a for a in apartados if a.active and a.show_categories]
        results = await asyncio.gather(
            *(self._load_categorias(a.id, refresh) for a in listed)
        )
        return build_navigation(
            apartados, {a.id: categorias for a, categorias in zip(listed, results)}
        )

    async def _load_categorias(self, apartado_id: str, refresh: bool) -> list[Categoria]:
        try:
            return await self._caches[EntityKind.CATEGORIA].ensure_loaded(
                apartado_id, refresh=refresh
            )
        except SiteContentException as exc:
            logger.warning(
                "Navigation: categorias of apartado %s unavailable (%s)", apartado_id, exc.message
            )
            return []
