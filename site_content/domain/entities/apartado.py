"""Apartado entity: top-level navigable section of the public site."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from site_content.domain.entities._payload import read_flag, read_text, require_id
from site_content.domain.enums import EntityKind, PageTemplate
from site_content.shared.utils.datetime import parse_api_datetime


@dataclass(frozen=True)
class Apartado:
    """Top-level section owned by a company (tenant).

    template_id selects the page-level rendering variant; show_categories
    mirrors the backend's mostrar_categoria flag.
    """

    KIND: ClassVar[EntityKind] = EntityKind.APARTADO

    id: str
    name: str
    template_id: str
    company_id: str = ""
    active: bool = True
    show_categories: bool = True
    created_at: datetime | None = field(default=None, compare=False)

    @property
    def parent_id(self) -> None:
        """Apartados hang off the tenant, not another entity."""
        return None

    @property
    def template(self) -> PageTemplate | None:
        """Known template for template_id, or None when unrecognized."""
        return PageTemplate.parse(self.template_id)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Apartado":
        return cls(
            id=require_id(payload, "id_apartado"),
            name=read_text(payload, "nombre_apartado"),
            template_id=read_text(payload, "id_plantilla"),
            company_id=read_text(payload, "id_empresa"),
            active=read_flag(payload, "activo_apartado"),
            show_categories=read_flag(payload, "mostrar_categoria"),
            created_at=parse_api_datetime(payload.get("fecha_creacion")),
        )

    def to_api(self) -> dict[str, Any]:
        """Write payload for create/update."""
        return {
            "nombre_apartado": self.name,
            "id_empresa": self.company_id,
            "id_plantilla": self.template_id,
            "activo_apartado": self.active,
            "mostrar_categoria": self.show_categories,
        }
