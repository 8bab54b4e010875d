"""Template dispatcher: page and section rendering variant selection.

Two independent lookup tables:
- page level: apartado template id -> PageVariant (default FEATURE_LIST);
- section level: seccion type tag -> SectionVariant (default GENERAL).

Both are pure lookups with a default arm; unknown ids degrade to the
default instead of failing. Tables must cover every enum member.

build_plan() is the presentation boundary: inactive categorias and
secciones are dropped here, never in the cache.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from site_content.application.dtos.page import (
    PageRenderPlan,
    ResolvedPage,
    SectionRenderPlan,
)
from site_content.domain.entities import Apartado, Contenido, Seccion
from site_content.domain.enums import PageTemplate, PageVariant, SectionType, SectionVariant

DEFAULT_PAGE_VARIANT = PageVariant.FEATURE_LIST
DEFAULT_SECTION_VARIANT = SectionVariant.GENERAL

PAGE_VARIANTS: dict[PageTemplate, PageVariant] = {
    PageTemplate.HOME: PageVariant.FEATURE_LIST,
    PageTemplate.BLOG: PageVariant.BLOG,
    PageTemplate.CATEGORY: PageVariant.CATEGORY,
    PageTemplate.PRICING: PageVariant.PRICING,
    PageTemplate.ABOUT: PageVariant.ABOUT,
    PageTemplate.FAQ: PageVariant.FAQ,
    PageTemplate.TERMS: PageVariant.TERMS,
    PageTemplate.PRIVACY: PageVariant.PRIVACY,
}

SECTION_VARIANTS: dict[SectionType, SectionVariant] = {
    SectionType.GENERAL: SectionVariant.GENERAL,
    SectionType.CARDS: SectionVariant.CARDS,
    SectionType.CARDS_SIDE: SectionVariant.CARDS_WITH_MEDIA,
    SectionType.GALLERY: SectionVariant.GALLERY,
    SectionType.GALLERY_ROUNDED: SectionVariant.GALLERY_GRID,
    SectionType.TABS: SectionVariant.TABS,
    SectionType.INFO_BOXES: SectionVariant.INFO_BOXES,
}


def _content_item(contenido: Contenido) -> dict[str, str]:
    """Uniform item shape handed to every section variant."""
    return {
        "id": contenido.id,
        "title": contenido.title,
        "text": contenido.text,
        "media": contenido.media_url,
        "alt": contenido.title,
    }


def _features(items: list[dict[str, str]]) -> list[dict[str, str]]:
    return [
        {"heading": i["title"], "text": i["text"], "img_src": i["media"], "img_alt": i["alt"]}
        for i in items
    ]


def _cards(items: list[dict[str, str]]) -> list[dict[str, str]]:
    return [
        {"img_src": i["media"], "img_alt": i["alt"], "title": i["title"], "text": i["text"]}
        for i in items
    ]


def _images(items: list[dict[str, str]]) -> list[str]:
    return [i["media"] for i in items]


def _boxes(items: list[dict[str, str]]) -> list[dict[str, str]]:
    return [{"title": i["title"], "text": i["text"]} for i in items]


# Variant -> projection of uniform items into the variant's props.
SECTION_ITEM_BUILDERS: dict[SectionVariant, Callable[[list[dict[str, str]]], list[Any]]] = {
    SectionVariant.GENERAL: _features,
    SectionVariant.CARDS: _cards,
    SectionVariant.CARDS_WITH_MEDIA: _features,
    SectionVariant.GALLERY: _images,
    SectionVariant.GALLERY_GRID: _images,
    SectionVariant.TABS: _features,
    SectionVariant.INFO_BOXES: _boxes,
}


def _check_exhaustive(table: Mapping[Any, Any], enum_type: type, name: str) -> None:
    """Raise if table misses a member of enum_type (new member added without a case)."""
    missing = [member.name for member in enum_type if member not in table]
    if missing:
        raise ValueError(f"{name} has no entry for: {', '.join(missing)}")


class TemplateDispatcher:
    """Selects page and section variants and builds the render plan."""

    def __init__(
        self,
        page_variants: Mapping[PageTemplate, PageVariant] | None = None,
        section_variants: Mapping[SectionType, SectionVariant] | None = None,
    ) -> None:
        """Initialize with dispatch tables (defaults: PAGE_VARIANTS, SECTION_VARIANTS).

        Raises:
            ValueError: If a table does not cover every template or section type.
        """
        self._page_variants = dict(PAGE_VARIANTS if page_variants is None else page_variants)
        self._section_variants = dict(
            SECTION_VARIANTS if section_variants is None else section_variants
        )
        _check_exhaustive(self._page_variants, PageTemplate, "Page dispatch table")
        _check_exhaustive(self._section_variants, SectionType, "Section dispatch table")
        _check_exhaustive(SECTION_ITEM_BUILDERS, SectionVariant, "Section item builders")

    def page_variant(self, template_id: str | None) -> PageVariant:
        """Variant for an apartado template id; unknown ids fall back to FEATURE_LIST."""
        template = PageTemplate.parse(template_id)
        if template is None:
            return DEFAULT_PAGE_VARIANT
        return self._page_variants[template]

    def section_variant(self, section_type: str | None) -> SectionVariant:
        """Variant for a seccion type tag; unknown tags fall back to GENERAL."""
        tag = SectionType.parse(section_type)
        if tag is None:
            return DEFAULT_SECTION_VARIANT
        return self._section_variants[tag]

    def build_section(
        self, seccion: Seccion, contenidos: tuple[Contenido, ...] | list[Contenido]
    ) -> SectionRenderPlan:
        variant = self.section_variant(seccion.section_type)
        items = [_content_item(c) for c in contenidos]
        return SectionRenderPlan(
            seccion=seccion,
            variant=variant,
            title=seccion.title,
            subtitle=seccion.text,
            items=SECTION_ITEM_BUILDERS[variant](items),
        )

    def categoria_page_variant(self, apartado: Apartado) -> PageVariant:
        """Variant for a single categoria page: a blog post under blog apartados."""
        if apartado.template is PageTemplate.BLOG:
            return PageVariant.BLOG_POST
        return PageVariant.CATEGORY

    def build_plan(
        self, page: ResolvedPage, variant: PageVariant | None = None
    ) -> PageRenderPlan:
        """Render plan for a READY page, restricted to active categorias and secciones.

        variant overrides the apartado template dispatch (single categoria pages).
        """
        categorias = tuple(c for c in page.categorias if c.active)
        sections = tuple(
            self.build_section(seccion, page.contenidos_by_seccion.get(seccion.id, ()))
            for categoria in categorias
            for seccion in page.secciones_by_categoria.get(categoria.id, ())
            if seccion.active
        )
        return PageRenderPlan(
            variant=variant or self.page_variant(page.apartado.template_id),
            apartado=page.apartado,
            categorias=categorias,
            sections=sections,
        )
