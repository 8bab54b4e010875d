"""Service interfaces (ports) for the application layer.

Protocols define the contract of the external CRUD REST backend (DIP).
Implementations raise ContentTransportException on network/5xx failure;
a backend 404 for a parent id means "no children", not an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from site_content.domain.enums import EntityKind

if TYPE_CHECKING:
    from site_content.domain.entities import Apartado, ContentEntity


class IContentApi(Protocol):
    """Protocol for the content backend consumed by the cache layer."""

    async def fetch_top_level_entities(self) -> list[Apartado]:
        """Return every apartado of the current tenant."""

    async def fetch_children(
        self, parent_kind: EntityKind, parent_id: str
    ) -> list[ContentEntity]:
        """Return the children of one parent (categorias, secciones or contenidos)."""

    async def fetch_one(self, kind: EntityKind, entity_id: str) -> ContentEntity | None:
        """Return one entity by id, or None when the backend answers 404."""

    async def create(
        self, kind: EntityKind, parent_id: str | None, data: dict[str, Any]
    ) -> ContentEntity:
        """Create an entity under parent_id (None for apartados) and return it."""

    async def update(
        self, kind: EntityKind, entity_id: str, data: dict[str, Any]
    ) -> ContentEntity:
        """Replace the writable fields of an entity and return the stored copy."""

    async def delete(self, kind: EntityKind, entity_id: str) -> None:
        """Delete an entity by id."""
