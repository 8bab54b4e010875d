"""Children cache: loaded child ids per owning parent id.

One ChildrenCache per parent/child relation (apartados under the tenant
root, categorias per apartado, secciones per categoria, contenidos per
seccion). Entities themselves live in the shared EntityStore; this cache
records which parents have been loaded and which children each one owns.

Merge rules:
- loading parent A never touches the slice of any other parent;
- a fresh response for A replaces A's slice wholesale (children that
  disappeared are dropped from the store);
- on failure the previous slice is kept and the error propagates.

Concurrent load_children calls for the same parent share one fetch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import partial

from site_content.application.interfaces.services import IContentApi
from site_content.application.services.entity_store import EntityStore
from site_content.domain.entities import ContentEntity
from site_content.domain.enums import PARENT_KIND, EntityKind

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[list[ContentEntity]]]


class ChildrenCache:
    """Per-parent child slices for one entity kind with in-flight de-duplication."""

    def __init__(
        self,
        kind: EntityKind,
        store: EntityStore,
        fetch: Fetcher,
        check_parent: bool = True,
    ) -> None:
        """Initialize the cache.

        Args:
            kind: Child entity kind held by this cache.
            store: Shared entity store that receives merged entities.
            fetch: Coroutine function parent_id -> children.
            check_parent: When True, children whose FK differs from the
                requested parent id are discarded (False for the root).
        """
        self.kind = kind
        self._store = store
        self._fetch = fetch
        self._check_parent = check_parent
        self._children: dict[str, list[str]] = {}
        self._in_flight: dict[str, asyncio.Task[list[ContentEntity]]] = {}

    def is_loaded(self, parent_id: str) -> bool:
        """True once a fetch for parent_id has succeeded (and not been invalidated)."""
        return parent_id in self._children

    def is_loading(self, parent_id: str) -> bool:
        return parent_id in self._in_flight

    def loaded_parents(self) -> list[str]:
        return list(self._children)

    def children(self, parent_id: str) -> list[ContentEntity]:
        """Cached children of parent_id in response order; empty when not loaded."""
        result = []
        for child_id in self._children.get(parent_id, ()):
            item = self._store.get(self.kind, child_id)
            if item is not None:
                result.append(item)
        return result

    async def load_children(self, parent_id: str) -> list[ContentEntity]:
        """Fetch and merge the children of parent_id.

        A call made while a fetch for the same parent is in flight awaits
        that fetch instead of issuing another. Cancelling a waiter does not
        cancel the shared fetch.

        Raises:
            ContentTransportException: The fetch failed; cache unchanged.
        """
        task = self._in_flight.get(parent_id)
        if task is None:
            task = asyncio.create_task(self._fetch_and_merge(parent_id))
            self._in_flight[parent_id] = task
        else:
            logger.debug("Joining in-flight %s fetch for %s", self.kind.value, parent_id)
        return await asyncio.shield(task)

    async def ensure_loaded(
        self, parent_id: str, refresh: bool = False, reload_empty: bool = False
    ) -> list[ContentEntity]:
        """Return cached children when parent_id was loaded before, else load them.

        With reload_empty, a loaded but empty slice is requested again.
        """
        if not refresh and self.is_loaded(parent_id) and not self.is_loading(parent_id):
            cached = self.children(parent_id)
            if cached or not reload_empty:
                return cached
        return await self.load_children(parent_id)

    async def _fetch_and_merge(self, parent_id: str) -> list[ContentEntity]:
        try:
            items = await self._fetch(parent_id)
        finally:
            self._in_flight.pop(parent_id, None)
        self._merge(parent_id, items)
        return self.children(parent_id)

    def _merge(self, parent_id: str, items: list[ContentEntity]) -> None:
        if self._check_parent:
            foreign = [item.id for item in items if item.parent_id != parent_id]
            if foreign:
                logger.warning(
                    "Discarding %d %s not owned by parent %s: %s",
                    len(foreign),
                    self.kind.value,
                    parent_id,
                    foreign,
                )
                items = [item for item in items if item.parent_id == parent_id]
        fresh_ids = list(dict.fromkeys(item.id for item in items))
        for stale_id in set(self._children.get(parent_id, ())) - set(fresh_ids):
            stale = self._store.get(self.kind, stale_id)
            if stale is not None and (not self._check_parent or stale.parent_id == parent_id):
                self._store.remove(self.kind, stale_id)
        self._store.upsert_many(self.kind, items)
        self._children[parent_id] = fresh_ids
        logger.debug(
            "Cached %d %s for parent %s", len(fresh_ids), self.kind.value, parent_id
        )

    def add_child(self, parent_id: str, child_id: str) -> None:
        """Append a newly created child to a loaded slice (no-op when not loaded)."""
        slice_ids = self._children.get(parent_id)
        if slice_ids is not None and child_id not in slice_ids:
            slice_ids.append(child_id)

    def discard_child(self, child_id: str) -> None:
        """Remove a deleted child id from every slice."""
        for slice_ids in self._children.values():
            if child_id in slice_ids:
                slice_ids.remove(child_id)

    def invalidate(self, parent_id: str | None = None) -> None:
        """Forget one slice (or all) so the next ensure_loaded fetches again."""
        if parent_id is None:
            self._children.clear()
        else:
            self._children.pop(parent_id, None)


def build_children_caches(
    api: IContentApi, store: EntityStore
) -> dict[EntityKind, ChildrenCache]:
    """Build one cache per child kind, wired to the content API.

    The apartado cache holds a single slice (keyed by ROOT_PARENT_ID by
    callers) since the backend returns every apartado of the tenant at once.
    """

    async def fetch_apartados(_parent_id: str) -> list[ContentEntity]:
        return list(await api.fetch_top_level_entities())

    caches = {
        EntityKind.APARTADO: ChildrenCache(
            EntityKind.APARTADO, store, fetch_apartados, check_parent=False
        )
    }
    for child_kind, parent_kind in PARENT_KIND.items():
        caches[child_kind] = ChildrenCache(
            child_kind, store, partial(api.fetch_children, parent_kind)
        )
    return caches
