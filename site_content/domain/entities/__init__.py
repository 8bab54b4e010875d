"""Domain entities for the content tree: apartado -> categoria -> seccion -> contenido."""

from site_content.domain.entities.apartado import Apartado
from site_content.domain.entities.categoria import Categoria
from site_content.domain.entities.contenido import Contenido
from site_content.domain.entities.seccion import Seccion
from site_content.domain.enums import EntityKind

ContentEntity = Apartado | Categoria | Seccion | Contenido

ENTITY_TYPES: dict[EntityKind, type[ContentEntity]] = {
    EntityKind.APARTADO: Apartado,
    EntityKind.CATEGORIA: Categoria,
    EntityKind.SECCION: Seccion,
    EntityKind.CONTENIDO: Contenido,
}

__all__ = [
    "Apartado",
    "Categoria",
    "Contenido",
    "ContentEntity",
    "ENTITY_TYPES",
    "Seccion",
]
