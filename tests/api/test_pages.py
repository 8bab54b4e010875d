"""Public page endpoints over the fake content backend."""

from httpx import AsyncClient

from site_content.core.constants import ROOT_PARENT_ID
from site_content.domain.enums import EntityKind
from site_content.domain.exceptions import ContentTransportException


async def test_home_page(client: AsyncClient) -> None:
    response = await client.get("/api/v1/pages")
    assert response.status_code == 200
    data = response.json()
    assert data["slug"] == "inicio"
    assert data["status"] == "ready"
    assert data["variant"] == "feature_list"
    assert data["apartado"]["id"] == "ap-home"
    # inactive categoria cat-h2 and inactive seccion sec-h1c are not rendered
    assert [c["id"] for c in data["categorias"]] == ["cat-h1"]
    assert [s["id"] for s in data["sections"]] == ["sec-h1a", "sec-h1b"]
    assert data["degraded"] == []


async def test_section_items_follow_variant(client: AsyncClient) -> None:
    data = (await client.get("/api/v1/pages/inicio")).json()
    cards, gallery = data["sections"]

    assert cards["variant"] == "cards"
    assert cards["items"][0] == {
        "img_src": "/img/web.png",
        "img_alt": "Web",
        "title": "Web",
        "text": "",
    }
    assert gallery["variant"] == "gallery_grid"
    assert gallery["items"] == ["/img/g1.png"]


async def test_alias_slug(client: AsyncClient) -> None:
    response = await client.get("/api/v1/pages/nosotros")
    assert response.status_code == 200
    assert response.json()["variant"] == "about"


async def test_blog_page_by_name(client: AsyncClient) -> None:
    data = (await client.get("/api/v1/pages/Blog")).json()
    assert data["slug"] == "blog"
    assert data["variant"] == "blog"
    assert data["sections"][0]["items"][0]["heading"] == "Hola"


async def test_unknown_slug_returns_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/pages/precios")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "SLUG_NOT_FOUND"
    assert body["details"] == {"slug": "precios"}


async def test_backend_failure_returns_502(client: AsyncClient, fake_api) -> None:
    fake_api.failures[("root", ROOT_PARENT_ID)] = ContentTransportException(
        "apartados", "connection refused"
    )
    response = await client.get("/api/v1/pages/blog")
    assert response.status_code == 502
    assert response.json()["error"] == "TRANSPORT_ERROR"


async def test_degraded_grandchildren_are_reported(client: AsyncClient, fake_api) -> None:
    fake_api.failures[(EntityKind.SECCION, "sec-h1a")] = ContentTransportException(
        "contenidos", "timeout", parent_id="sec-h1a"
    )
    response = await client.get("/api/v1/pages/inicio")
    assert response.status_code == 200
    data = response.json()
    assert data["sections"][0]["items"] == []
    assert data["degraded"] == [
        {
            "kind": "contenido",
            "parent_id": "sec-h1a",
            "reason": "Failed to fetch contenidos: timeout",
        }
    ]


async def test_refresh_refetches(client: AsyncClient, fake_api) -> None:
    await client.get("/api/v1/pages/blog")
    await client.get("/api/v1/pages/blog")
    assert fake_api.call_count((EntityKind.APARTADO, "ap-blog")) == 1

    response = await client.get("/api/v1/pages/blog", params={"refresh": "true"})
    assert response.status_code == 200
    assert fake_api.call_count((EntityKind.APARTADO, "ap-blog")) == 2


async def test_categoria_page_under_blog_is_blog_post(client: AsyncClient) -> None:
    response = await client.get("/api/v1/pages/categoria/cat-b1")
    assert response.status_code == 200
    data = response.json()
    assert data["slug"] == "categoria/cat-b1"
    assert data["variant"] == "blog_post"
    assert data["apartado"]["id"] == "ap-blog"
    assert [c["id"] for c in data["categorias"]] == ["cat-b1"]
    assert data["sections"][0]["items"][0]["heading"] == "Hola"


async def test_categoria_page_under_other_apartado(client: AsyncClient) -> None:
    data = (await client.get("/api/v1/pages/categoria/cat-h1")).json()
    assert data["variant"] == "category"
    assert [s["id"] for s in data["sections"]] == ["sec-h1a", "sec-h1b"]


async def test_unknown_categoria_page_returns_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/pages/categoria/cat-missing")
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_categoria_of_unlisted_apartado_returns_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/pages/categoria/cat-x1")
    assert response.status_code == 404
