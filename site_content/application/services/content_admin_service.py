"""Content admin service: single-entity loads and CRUD mutations.

Mutations go to the backend first; the cache changes only after a
successful response and always merges by primary key:
- create: upsert, then append to the parent's loaded slice;
- update: overlay partial changes on the cached copy, send the full
  write payload, upsert the returned entity (bulk and current stay equal);
- delete: drop from bulk, current slot and every slice.
A failed call leaves the cache untouched and the error propagates.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from site_content.application.interfaces.services import IContentApi
from site_content.application.services.children_cache import ChildrenCache
from site_content.application.services.entity_store import EntityStore
from site_content.core.constants import ROOT_PARENT_ID
from site_content.domain.entities import ENTITY_TYPES, ContentEntity
from site_content.domain.entities.seccion import DEFAULT_SECTION_TYPE
from site_content.domain.enums import EntityKind
from site_content.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)

# Create defaults applied when the caller leaves the field out.
_CREATE_DEFAULTS: dict[EntityKind, dict[str, Any]] = {
    EntityKind.APARTADO: {"activo_apartado": True, "mostrar_categoria": True},
    EntityKind.CATEGORIA: {"activo_categoria": True},
    EntityKind.SECCION: {"activo_seccion": True, "tipo_seccion": DEFAULT_SECTION_TYPE},
    EntityKind.CONTENIDO: {},
}


class ContentAdminService:
    """Admin-side operations that keep the shared cache consistent with the backend."""

    def __init__(
        self,
        api: IContentApi,
        store: EntityStore,
        caches: Mapping[EntityKind, ChildrenCache],
    ) -> None:
        self._api = api
        self._store = store
        self._caches = caches

    async def load_one(self, kind: EntityKind, entity_id: str) -> ContentEntity:
        """Fetch one entity and make it the current selection for its kind.

        Raises:
            ResourceNotFoundException: Backend answered 404.
            ContentTransportException: Backend unreachable or failed.
        """
        entity = await self._api.fetch_one(kind, entity_id)
        if entity is None:
            raise ResourceNotFoundException(kind.value, entity_id)
        self._store.set_current(kind, entity)
        return entity

    async def create(
        self, kind: EntityKind, parent_id: str | None, data: Mapping[str, Any]
    ) -> ContentEntity:
        """Create an entity (wire field names in data) and merge the response.

        Raises:
            ValidationException: parent_id missing for a non-top-level kind.
        """
        if kind is not EntityKind.APARTADO and not parent_id:
            raise ValidationException(f"A {kind.value} requires a parent id", field="parent_id")
        payload = {**_CREATE_DEFAULTS[kind], **dict(data)}
        entity = await self._api.create(kind, parent_id, payload)
        self._store.upsert_one(kind, entity)
        slice_key = ROOT_PARENT_ID if entity.parent_id is None else entity.parent_id
        self._caches[kind].add_child(slice_key, entity.id)
        logger.info("Created %s %s", kind.value, entity.id)
        return entity

    async def update(
        self, kind: EntityKind, entity_id: str, changes: Mapping[str, Any]
    ) -> ContentEntity:
        """Apply partial changes (entity attribute names) to a cached entity.

        Raises:
            ResourceNotFoundException: The entity is not cached (load it first).
            ValidationException: changes name an unknown or read-only field.
        """
        current = self._store.get(kind, entity_id)
        if current is None:
            raise ResourceNotFoundException(kind.value, entity_id)
        writable = _writable_fields(kind)
        unknown = sorted(set(changes) - writable)
        if unknown:
            raise ValidationException(
                f"Cannot update {kind.value} field(s): {', '.join(unknown)}",
                field=unknown[0],
            )
        merged = dataclasses.replace(current, **dict(changes))
        entity = await self._api.update(kind, entity_id, merged.to_api())
        self._store.upsert_one(kind, entity)
        logger.info("Updated %s %s", kind.value, entity_id)
        return entity

    async def delete(self, kind: EntityKind, entity_id: str) -> None:
        """Delete an entity and drop it from every cached view."""
        await self._api.delete(kind, entity_id)
        self._store.remove(kind, entity_id)
        self._caches[kind].discard_child(entity_id)
        logger.info("Deleted %s %s", kind.value, entity_id)


def _writable_fields(kind: EntityKind) -> set[str]:
    """Entity attributes a caller may change (everything except ids and timestamps)."""
    entity_type = ENTITY_TYPES[kind]
    read_only = {"id", "created_at", "apartado_id", "categoria_id", "seccion_id"}
    return {f.name for f in dataclasses.fields(entity_type) if f.name not in read_only}
