"""Public page API schemas.

Built from a PageRenderPlan, so every list here already excludes
inactive categorias and secciones.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from site_content.application.dtos.page import (
    PageRenderPlan,
    PageResolution,
    PartialDegradation,
    SectionRenderPlan,
)
from site_content.domain.entities import Apartado, Categoria
from site_content.domain.enums import EntityKind, PageVariant, ResolutionStatus, SectionVariant


class ApartadoResponse(BaseModel):
    id: str
    name: str
    template_id: str
    show_categories: bool

    @classmethod
    def from_entity(cls, apartado: Apartado) -> "ApartadoResponse":
        return cls(
            id=apartado.id,
            name=apartado.name,
            template_id=apartado.template_id,
            show_categories=apartado.show_categories,
        )


class CategoriaResponse(BaseModel):
    id: str
    name: str
    title: str
    text: str
    image: str
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, categoria: Categoria) -> "CategoriaResponse":
        return cls(
            id=categoria.id,
            name=categoria.name,
            title=categoria.title,
            text=categoria.text,
            image=categoria.image,
            created_at=categoria.created_at,
        )


class SectionResponse(BaseModel):
    """One active seccion rendered with its section-level variant."""

    id: str
    categoria_id: str
    variant: SectionVariant
    title: str
    subtitle: str
    image_url: str
    items: list[Any] = Field(default_factory=list)

    @classmethod
    def from_plan(cls, plan: SectionRenderPlan) -> "SectionResponse":
        return cls(
            id=plan.seccion.id,
            categoria_id=plan.seccion.categoria_id,
            variant=plan.variant,
            title=plan.title,
            subtitle=plan.subtitle,
            image_url=plan.seccion.image_url,
            items=plan.items,
        )


class DegradationResponse(BaseModel):
    kind: EntityKind
    parent_id: str
    reason: str

    @classmethod
    def from_record(cls, record: PartialDegradation) -> "DegradationResponse":
        return cls(kind=record.kind, parent_id=record.parent_id, reason=record.reason)


class PageResponse(BaseModel):
    """Response for GET /pages/{slug} when the page is READY."""

    slug: str
    status: ResolutionStatus = Field(default=ResolutionStatus.READY)
    variant: PageVariant
    apartado: ApartadoResponse
    categorias: list[CategoriaResponse]
    sections: list[SectionResponse]
    degraded: list[DegradationResponse] = Field(
        default_factory=list,
        description="Grandchild fetches that failed and render as empty lists",
    )

    @classmethod
    def from_plan(cls, resolution: PageResolution, plan: PageRenderPlan) -> "PageResponse":
        return cls(
            slug=resolution.slug,
            status=resolution.status,
            variant=plan.variant,
            apartado=ApartadoResponse.from_entity(plan.apartado),
            categorias=[CategoriaResponse.from_entity(c) for c in plan.categorias],
            sections=[SectionResponse.from_plan(s) for s in plan.sections],
            degraded=[DegradationResponse.from_record(d) for d in resolution.degraded],
        )
