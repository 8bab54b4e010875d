"""Seccion entity: a content block within a categoria."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from site_content.domain.entities._payload import read_flag, read_text, require_id
from site_content.domain.enums import EntityKind
from site_content.shared.utils.datetime import parse_api_datetime

DEFAULT_SECTION_TYPE = "default"


@dataclass(frozen=True)
class Seccion:
    """Content block; section_type selects its section-level rendering variant."""

    KIND: ClassVar[EntityKind] = EntityKind.SECCION

    id: str
    categoria_id: str
    title: str = ""
    text: str = ""
    image_url: str = ""
    active: bool = True
    section_type: str = DEFAULT_SECTION_TYPE
    created_at: datetime | None = field(default=None, compare=False)

    @property
    def parent_id(self) -> str:
        return self.categoria_id

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Seccion":
        return cls(
            id=require_id(payload, "id_seccion"),
            categoria_id=require_id(payload, "id_categoria"),
            title=read_text(payload, "titulo_seccion"),
            text=read_text(payload, "texto_seccion"),
            image_url=read_text(payload, "imagen_url"),
            active=read_flag(payload, "activo_seccion"),
            section_type=read_text(payload, "tipo_seccion") or DEFAULT_SECTION_TYPE,
            created_at=parse_api_datetime(payload.get("fecha_creacion")),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "titulo_seccion": self.title,
            "texto_seccion": self.text,
            "imagen_url": self.image_url,
            "activo_seccion": self.active,
            "tipo_seccion": self.section_type,
        }
