"""EntityStore: merge by primary key, current slot consistency."""

from site_content.application.services import EntityStore
from site_content.domain.entities import Categoria
from site_content.domain.enums import EntityKind

CAT = EntityKind.CATEGORIA


def _cat(cat_id: str, apartado_id: str = "ap1", name: str = "") -> Categoria:
    return Categoria(id=cat_id, apartado_id=apartado_id, name=name or cat_id)


def test_upsert_many_appends_and_replaces_in_place() -> None:
    store = EntityStore()
    store.upsert_many(CAT, [_cat("a"), _cat("b")])
    store.upsert_many(CAT, [_cat("c"), _cat("a", name="renamed")])

    assert [c.id for c in store.all(CAT)] == ["a", "b", "c"]
    assert store.get(CAT, "a").name == "renamed"
    assert store.count(CAT) == 3


def test_upsert_leaves_absent_entries_alone() -> None:
    store = EntityStore()
    store.upsert_many(CAT, [_cat("a"), _cat("b")])
    store.upsert_many(CAT, [_cat("b")])
    assert store.has(CAT, "a")


def test_upsert_refreshes_matching_current() -> None:
    store = EntityStore()
    store.set_current(CAT, _cat("a"))
    store.upsert_one(CAT, _cat("a", name="fresh"))
    assert store.current(CAT).name == "fresh"
    assert store.get(CAT, "a").name == "fresh"


def test_upsert_does_not_touch_other_current() -> None:
    store = EntityStore()
    current = _cat("x")
    store.set_current(CAT, current)
    store.upsert_one(CAT, _cat("a"))
    assert store.current(CAT) is current


def test_set_current_refreshes_bulk_entry() -> None:
    store = EntityStore()
    store.upsert_many(CAT, [_cat("a"), _cat("b")])
    store.set_current(CAT, _cat("b", name="edited"))
    assert store.get(CAT, "b").name == "edited"
    assert [c.id for c in store.all(CAT)] == ["a", "b"]


def test_set_current_does_not_insert_into_bulk() -> None:
    store = EntityStore()
    store.set_current(CAT, _cat("solo"))
    assert store.all(CAT) == []
    # get() still sees it through the current slot
    assert store.get(CAT, "solo") is not None


def test_remove_clears_bulk_and_current() -> None:
    store = EntityStore()
    store.upsert_one(CAT, _cat("a"))
    store.set_current(CAT, _cat("a"))
    assert store.remove(CAT, "a") is True
    assert store.get(CAT, "a") is None
    assert store.current(CAT) is None
    assert store.remove(CAT, "a") is False


def test_children_of_filters_by_parent_fk() -> None:
    store = EntityStore()
    store.upsert_many(CAT, [_cat("a", "ap1"), _cat("b", "ap2"), _cat("c", "ap1")])
    assert [c.id for c in store.children_of(CAT, "ap1")] == ["a", "c"]


def test_kinds_are_independent_and_clear_drops_everything() -> None:
    store = EntityStore()
    store.upsert_one(CAT, _cat("a"))
    assert store.count(EntityKind.SECCION) == 0
    store.clear()
    assert store.count(CAT) == 0
    assert store.current(CAT) is None
