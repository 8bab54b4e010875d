"""ContentAdminService unit tests with a mocked content API."""

from unittest.mock import AsyncMock

import pytest

from site_content.application.services import (
    ContentAdminService,
    EntityStore,
    build_children_caches,
)
from site_content.domain.entities import Categoria, Seccion
from site_content.domain.enums import EntityKind
from site_content.domain.exceptions import (
    ContentTransportException,
    ResourceNotFoundException,
    ValidationException,
)

CAT = EntityKind.CATEGORIA


@pytest.fixture
def admin_mocks():
    """ContentAdminService over a fresh store, an AsyncMock api and real children caches."""
    api = AsyncMock()
    store = EntityStore()
    caches = build_children_caches(api, store)
    return ContentAdminService(api, store, caches), api, store, caches


async def test_load_one_sets_current(admin_mocks) -> None:
    service, api, store, _ = admin_mocks
    categoria = Categoria(id="c1", apartado_id="a1")
    api.fetch_one = AsyncMock(return_value=categoria)

    assert await service.load_one(CAT, "c1") is categoria
    assert store.current(CAT) is categoria


async def test_load_one_missing_raises_not_found(admin_mocks) -> None:
    service, api, store, _ = admin_mocks
    api.fetch_one = AsyncMock(return_value=None)

    with pytest.raises(ResourceNotFoundException):
        await service.load_one(CAT, "nope")
    assert store.current(CAT) is None


async def test_create_requires_parent_for_children(admin_mocks) -> None:
    service, api, _, _ = admin_mocks
    with pytest.raises(ValidationException):
        await service.create(CAT, None, {"nombre_categoria": "X"})
    api.create.assert_not_called()


async def test_create_seccion_applies_defaults_and_extends_loaded_slice(admin_mocks) -> None:
    service, api, store, caches = admin_mocks
    api.fetch_children.return_value = [Seccion(id="s1", categoria_id="c1")]
    await caches[EntityKind.SECCION].load_children("c1")
    created = Seccion(id="s2", categoria_id="c1")
    api.create = AsyncMock(return_value=created)

    result = await service.create(EntityKind.SECCION, "c1", {"titulo_seccion": "Nueva"})

    assert result is created
    sent = api.create.call_args.args[2]
    assert sent["tipo_seccion"] == "default"
    assert sent["activo_seccion"] is True
    assert sent["titulo_seccion"] == "Nueva"
    assert store.get(EntityKind.SECCION, "s2") is created
    assert [s.id for s in caches[EntityKind.SECCION].children("c1")] == ["s1", "s2"]


async def test_create_keeps_explicit_fields_over_defaults(admin_mocks) -> None:
    service, api, _, _ = admin_mocks
    api.create = AsyncMock(return_value=Seccion(id="s3", categoria_id="c1", section_type="Tabs"))

    await service.create(EntityKind.SECCION, "c1", {"tipo_seccion": "Tabs"})

    assert api.create.call_args.args[2]["tipo_seccion"] == "Tabs"


async def test_update_merges_changes_over_cached_copy(admin_mocks) -> None:
    service, api, store, _ = admin_mocks
    original = Categoria(id="c1", apartado_id="a1", name="Viejo", text="cuerpo")
    store.upsert_one(CAT, original)
    store.set_current(CAT, original)
    api.update = AsyncMock(side_effect=lambda kind, entity_id, data: Categoria(
        id=entity_id,
        apartado_id="a1",
        name=data["nombre_categoria"],
        text=data["texto_categoria"],
    ))

    updated = await service.update(CAT, "c1", {"name": "Nuevo"})

    payload = api.update.call_args.args[2]
    assert payload["nombre_categoria"] == "Nuevo"
    assert payload["texto_categoria"] == "cuerpo"
    assert store.get(CAT, "c1") == updated
    assert store.current(CAT) == updated


@pytest.mark.parametrize("field", ["apartado_id", "id", "color"])
async def test_update_rejects_read_only_or_unknown_fields(admin_mocks, field) -> None:
    service, api, store, _ = admin_mocks
    store.upsert_one(CAT, Categoria(id="c1", apartado_id="a1"))

    with pytest.raises(ValidationException) as exc_info:
        await service.update(CAT, "c1", {field: "x"})

    assert exc_info.value.details == {"field": field}
    api.update.assert_not_called()


async def test_update_uncached_entity_raises_not_found(admin_mocks) -> None:
    service, _, _, _ = admin_mocks
    with pytest.raises(ResourceNotFoundException):
        await service.update(CAT, "ghost", {"name": "x"})


async def test_failed_update_leaves_cache_untouched(admin_mocks) -> None:
    service, api, store, _ = admin_mocks
    original = Categoria(id="c1", apartado_id="a1", name="Viejo")
    store.upsert_one(CAT, original)
    api.update = AsyncMock(side_effect=ContentTransportException("categoria", "500"))

    with pytest.raises(ContentTransportException):
        await service.update(CAT, "c1", {"name": "Nuevo"})

    assert store.get(CAT, "c1") is original


async def test_delete_removes_from_store_and_slices(admin_mocks) -> None:
    service, api, store, caches = admin_mocks
    api.fetch_children.return_value = [
        Categoria(id="c1", apartado_id="a1"),
        Categoria(id="c2", apartado_id="a1"),
    ]
    await caches[CAT].load_children("a1")
    store.set_current(CAT, store.get(CAT, "c1"))

    await service.delete(CAT, "c1")

    api.delete.assert_awaited_once_with(CAT, "c1")
    assert store.get(CAT, "c1") is None
    assert store.current(CAT) is None
    assert [c.id for c in caches[CAT].children("a1")] == ["c2"]
