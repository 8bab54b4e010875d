"""In-memory entity store for the four content kinds.

Holds one bulk collection per kind (keyed by primary key, in first
insertion order) plus a separate "current" slot per kind for the single
entity being viewed or edited. The two are kept consistent: writing one
refreshes the other when ids match.

All operations are synchronous and never raise, so each merge is atomic
with respect to the event loop. Fetch failures are surfaced by callers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from site_content.domain.entities import ContentEntity
from site_content.domain.enums import EntityKind

logger = logging.getLogger(__name__)


class EntityStore:
    """Bulk collections and current selections shared by every consumer.

    Pass one instance by reference to every service that reads or writes
    content; each test builds its own.
    """

    def __init__(self) -> None:
        self._items: dict[EntityKind, dict[str, ContentEntity]] = {
            kind: {} for kind in EntityKind
        }
        self._current: dict[EntityKind, ContentEntity | None] = {
            kind: None for kind in EntityKind
        }

    # ---- writes ----

    def upsert_many(self, kind: EntityKind, items: Iterable[ContentEntity]) -> None:
        """Merge items by primary key.

        Existing entries are replaced in place (keeping their position),
        new ones are appended, entries absent from items are left alone.
        """
        bucket = self._items[kind]
        current = self._current[kind]
        count = 0
        for item in items:
            bucket[item.id] = item
            if current is not None and current.id == item.id:
                self._current[kind] = current = item
            count += 1
        logger.debug("Store upsert_many: %s x%d (total %d)", kind.value, count, len(bucket))

    def upsert_one(self, kind: EntityKind, item: ContentEntity) -> None:
        """Merge a single item into the bulk collection and refresh current if it matches."""
        self.upsert_many(kind, (item,))

    def set_current(self, kind: EntityKind, item: ContentEntity | None) -> None:
        """Select item as current; refresh its bulk entry when already present."""
        self._current[kind] = item
        if item is not None and item.id in self._items[kind]:
            self._items[kind][item.id] = item

    def remove(self, kind: EntityKind, entity_id: str) -> bool:
        """Remove an entity from the bulk collection and the current slot.

        Returns:
            True if anything was removed.
        """
        removed = self._items[kind].pop(entity_id, None) is not None
        current = self._current[kind]
        if current is not None and current.id == entity_id:
            self._current[kind] = None
            removed = True
        return removed

    def clear(self) -> None:
        """Drop every collection and selection."""
        for kind in EntityKind:
            self._items[kind].clear()
            self._current[kind] = None

    # ---- reads ----

    def get(self, kind: EntityKind, entity_id: str) -> ContentEntity | None:
        """Return the bulk entry for id, falling back to the current slot."""
        item = self._items[kind].get(entity_id)
        if item is not None:
            return item
        current = self._current[kind]
        if current is not None and current.id == entity_id:
            return current
        return None

    def has(self, kind: EntityKind, entity_id: str) -> bool:
        return self.get(kind, entity_id) is not None

    def all(self, kind: EntityKind) -> list[ContentEntity]:
        """Bulk collection for kind in first insertion order."""
        return list(self._items[kind].values())

    def current(self, kind: EntityKind) -> ContentEntity | None:
        return self._current[kind]

    def children_of(self, kind: EntityKind, parent_id: str) -> list[ContentEntity]:
        """Bulk entries of kind whose parent FK equals parent_id."""
        return [item for item in self._items[kind].values() if item.parent_id == parent_id]

    def count(self, kind: EntityKind) -> int:
        return len(self._items[kind])
