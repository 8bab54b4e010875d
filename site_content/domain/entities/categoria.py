"""Categoria entity: a named grouping within an apartado."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from site_content.domain.entities._payload import read_flag, read_text, require_id
from site_content.domain.enums import EntityKind
from site_content.shared.utils.datetime import parse_api_datetime


@dataclass(frozen=True)
class Categoria:
    """Grouping inside an apartado (e.g. one post when the apartado is a blog)."""

    KIND: ClassVar[EntityKind] = EntityKind.CATEGORIA

    id: str
    apartado_id: str
    name: str = ""
    title: str = ""
    text: str = ""
    image: str = ""
    active: bool = True
    created_at: datetime | None = field(default=None, compare=False)

    @property
    def parent_id(self) -> str:
        return self.apartado_id

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Categoria":
        return cls(
            id=require_id(payload, "id_categoria"),
            apartado_id=require_id(payload, "id_apartado"),
            name=read_text(payload, "nombre_categoria"),
            title=read_text(payload, "titulo_categoria"),
            text=read_text(payload, "texto_categoria"),
            image=read_text(payload, "imagen_categoria"),
            active=read_flag(payload, "activo_categoria"),
            created_at=parse_api_datetime(payload.get("fecha_creacion")),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "nombre_categoria": self.name,
            "titulo_categoria": self.title,
            "texto_categoria": self.text,
            "imagen_categoria": self.image,
            "activo_categoria": self.active,
        }
