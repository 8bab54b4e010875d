"""Contenido entity: the smallest content unit, scoped to one seccion."""

from dataclasses import dataclass
from typing import Any, ClassVar

from site_content.domain.entities._payload import read_text, require_id
from site_content.domain.enums import EntityKind


@dataclass(frozen=True)
class Contenido:
    """Leaf of the content tree. Has no active flag; it follows its seccion."""

    KIND: ClassVar[EntityKind] = EntityKind.CONTENIDO

    id: str
    seccion_id: str
    title: str = ""
    text: str = ""
    media_url: str = ""

    @property
    def parent_id(self) -> str:
        return self.seccion_id

    @property
    def active(self) -> bool:
        return True

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Contenido":
        return cls(
            id=require_id(payload, "id_contenido"),
            seccion_id=require_id(payload, "id_seccion"),
            title=read_text(payload, "titulo_contenido"),
            text=read_text(payload, "texto_contenido"),
            media_url=read_text(payload, "multimedia_url"),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "titulo_contenido": self.title,
            "texto_contenido": self.text,
            "multimedia_url": self.media_url,
        }
