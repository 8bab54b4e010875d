"""DTOs for page resolution and render dispatch."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from site_content.domain.entities import Apartado, Categoria, Contenido, Seccion
from site_content.domain.enums import (
    EntityKind,
    PageVariant,
    ResolutionStatus,
    SectionVariant,
)
from site_content.domain.exceptions import SiteContentException


@dataclass(frozen=True)
class PartialDegradation:
    """A grandchild fetch that failed and was replaced by an empty list."""

    kind: EntityKind
    parent_id: str
    reason: str


@dataclass(frozen=True)
class ResolvedPage:
    """Fully hydrated subtree of one apartado.

    Every categoria has an entry in secciones_by_categoria and every
    seccion listed there has an entry in contenidos_by_seccion (possibly
    empty). Inactive entities are included; filtering happens at render.
    """

    apartado: Apartado
    categorias: tuple[Categoria, ...]
    secciones_by_categoria: Mapping[str, tuple[Seccion, ...]]
    contenidos_by_seccion: Mapping[str, tuple[Contenido, ...]]

    def secciones(self) -> list[Seccion]:
        """All secciones in categoria order."""
        return [
            seccion
            for categoria in self.categorias
            for seccion in self.secciones_by_categoria.get(categoria.id, ())
        ]


@dataclass(frozen=True)
class PageResolution:
    """Outcome of one navigation event at a given state.

    generation identifies the navigation that produced it; a resolution
    is visible only while its generation is the loader's latest.
    """

    slug: str
    status: ResolutionStatus
    generation: int
    data: ResolvedPage | None = None
    error: SiteContentException | None = None
    degraded: tuple[PartialDegradation, ...] = ()


@dataclass(frozen=True)
class SectionRenderPlan:
    """One active seccion with its dispatched variant and mapped content items."""

    seccion: Seccion
    variant: SectionVariant
    title: str
    subtitle: str
    items: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class PageRenderPlan:
    """Page variant plus the active subtree it renders."""

    variant: PageVariant
    apartado: Apartado
    categorias: tuple[Categoria, ...]
    sections: tuple[SectionRenderPlan, ...]
