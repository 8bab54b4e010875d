"""Pytest configuration and fixtures for site_content.

Unit tests run the cache services against FakeContentApi (an in-memory
content backend with per-call gates and failure injection). HTTP tests
use create_app() with the loader and navigation dependencies overridden, so no
real backend or telemetry exporter is needed.
"""

import asyncio
import os
from collections.abc import Hashable

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("TELEMETRY_ENABLED", "false")

from site_content.api.v1.dependencies import (  # noqa: E402
    get_hierarchy_loader,
    get_navigation_builder,
)
from site_content.application.services import (  # noqa: E402
    EntityStore,
    HierarchyLoader,
    NavigationBuilder,
    build_children_caches,
)
from site_content.core.config import get_settings  # noqa: E402
from site_content.core.constants import ROOT_PARENT_ID  # noqa: E402
from site_content.domain.entities import (  # noqa: E402
    Apartado,
    Categoria,
    Contenido,
    ContentEntity,
    Seccion,
)
from site_content.domain.enums import EntityKind, PageTemplate  # noqa: E402

get_settings.cache_clear()

ROOT_KEY = ("root", ROOT_PARENT_ID)


class FakeContentApi:
    """In-memory content backend keyed by (parent kind, parent id).

    - children[(parent_kind, parent_id)]: list returned for that parent;
    - failures[key]: exception raised instead of answering;
    - gates[key]: asyncio.Event the call waits on before answering;
    - calls: every key requested, in order.
    The top-level collection uses ROOT_KEY; fetch_one uses ("one", kind, id).
    """

    def __init__(self) -> None:
        self.apartados: list[Apartado] = []
        self.children: dict[tuple[EntityKind, str], list[ContentEntity]] = {}
        self.failures: dict[Hashable, Exception] = {}
        self.gates: dict[Hashable, asyncio.Event] = {}
        self.calls: list[Hashable] = []

    async def fetch_top_level_entities(self) -> list[Apartado]:
        return await self._answer(ROOT_KEY, self.apartados)

    async def fetch_children(
        self, parent_kind: EntityKind, parent_id: str
    ) -> list[ContentEntity]:
        key = (parent_kind, parent_id)
        return await self._answer(key, self.children.get(key, []))

    async def fetch_one(self, kind: EntityKind, entity_id: str) -> ContentEntity | None:
        key = ("one", kind, entity_id)
        candidates = [*self.apartados, *(e for group in self.children.values() for e in group)]
        found = [e for e in candidates if e.KIND is kind and e.id == entity_id]
        answer = await self._answer(key, found)
        return answer[0] if answer else None

    async def create(self, kind, parent_id, data):
        raise NotImplementedError

    async def update(self, kind, entity_id, data):
        raise NotImplementedError

    async def delete(self, kind, entity_id):
        raise NotImplementedError

    def call_count(self, key: Hashable) -> int:
        return self.calls.count(key)

    async def wait_for_call(self, key: Hashable) -> None:
        """Yield to the loop until key has been requested at least once."""
        for _ in range(1000):
            if key in self.calls:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"{key} was never requested")

    async def _answer(self, key: Hashable, items: list) -> list:
        self.calls.append(key)
        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()
        failure = self.failures.get(key)
        if failure is not None:
            raise failure
        return list(items)


HOME = Apartado(id="ap-home", name="Inicio", template_id=PageTemplate.HOME.value)
ABOUT = Apartado(id="ap-about", name="Quienes somos", template_id=PageTemplate.ABOUT.value)
BLOG = Apartado(id="ap-blog", name="Blog", template_id=PageTemplate.BLOG.value)
HIDDEN = Apartado(
    id="ap-hidden", name="Borrador", template_id=PageTemplate.BLOG.value, active=False
)


def seed_site(api: FakeContentApi) -> FakeContentApi:
    """Populate api with a small site.

    Inicio: cat-h1 (active, two secciones) and cat-h2 (inactive).
    Blog: cat-b1 with one General seccion.
    Borrador (inactive): cat-x1, reachable only through fetch_one.
    """
    api.apartados = [HOME, ABOUT, BLOG, HIDDEN]
    api.children = {
        (EntityKind.APARTADO, "ap-home"): [
            Categoria(id="cat-h1", apartado_id="ap-home", name="Destacados"),
            Categoria(id="cat-h2", apartado_id="ap-home", name="Archivo", active=False),
        ],
        (EntityKind.APARTADO, "ap-about"): [
            Categoria(id="cat-a1", apartado_id="ap-about", name="Equipo"),
        ],
        (EntityKind.APARTADO, "ap-blog"): [
            Categoria(id="cat-b1", apartado_id="ap-blog", name="Primer post"),
        ],
        (EntityKind.APARTADO, "ap-hidden"): [
            Categoria(id="cat-x1", apartado_id="ap-hidden", name="Sin publicar"),
        ],
        (EntityKind.CATEGORIA, "cat-h1"): [
            Seccion(id="sec-h1a", categoria_id="cat-h1", title="Servicios", section_type="Cards"),
            Seccion(
                id="sec-h1b",
                categoria_id="cat-h1",
                title="Galeria",
                section_type="GalleryRounded",
            ),
            Seccion(id="sec-h1c", categoria_id="cat-h1", title="Oculta", active=False),
        ],
        (EntityKind.CATEGORIA, "cat-h2"): [
            Seccion(id="sec-h2a", categoria_id="cat-h2", title="Vieja"),
        ],
        (EntityKind.CATEGORIA, "cat-b1"): [
            Seccion(id="sec-b1a", categoria_id="cat-b1", title="Cuerpo", section_type="General"),
        ],
        (EntityKind.SECCION, "sec-h1a"): [
            Contenido(id="con-1", seccion_id="sec-h1a", title="Web", media_url="/img/web.png"),
            Contenido(id="con-2", seccion_id="sec-h1a", title="Apps", media_url="/img/apps.png"),
        ],
        (EntityKind.SECCION, "sec-h1b"): [
            Contenido(id="con-3", seccion_id="sec-h1b", media_url="/img/g1.png"),
        ],
        (EntityKind.SECCION, "sec-b1a"): [
            Contenido(id="con-4", seccion_id="sec-b1a", title="Hola", text="Primer texto"),
        ],
    }
    return api


@pytest.fixture
def fake_api() -> FakeContentApi:
    """Content backend seeded with the sample site."""
    return seed_site(FakeContentApi())


@pytest.fixture
def store() -> EntityStore:
    return EntityStore()


@pytest.fixture
def caches(fake_api: FakeContentApi, store: EntityStore):
    return build_children_caches(fake_api, store)


@pytest.fixture
def loader(store: EntityStore, caches, fake_api: FakeContentApi) -> HierarchyLoader:
    return HierarchyLoader(store, caches, api=fake_api)


@pytest.fixture
def navigation_builder(caches) -> NavigationBuilder:
    return NavigationBuilder(caches)


@pytest.fixture
async def client(
    loader: HierarchyLoader, navigation_builder: NavigationBuilder
) -> AsyncClient:
    """Async HTTP client against a fresh app whose loader reads the fake backend."""
    from site_content.main import create_app

    app = create_app()
    app.dependency_overrides[get_hierarchy_loader] = lambda: loader
    app.dependency_overrides[get_navigation_builder] = lambda: navigation_builder
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
