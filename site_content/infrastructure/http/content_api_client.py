"""Content backend REST client (implements IContentApi).

All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Route layout follows the backend:

    GET    /apartados                 GET /apartado/{id}
    GET    /categorias/{apartado_id}  GET /categoria/{id}
    GET    /secciones/{categoria_id}  GET /seccion/{id}
    GET    /contenidos/{seccion_id}   GET /contenido/{id}
    POST   /apartadoCre, /categoriaCre/{parent}, /seccionCre/{parent}, /contenidoCre/{parent}
    PUT    /<kind>Upd/{id}
    DELETE /<kind>Del/{id}

A 404 on a collection means "no children" and on a single id means
"missing" (None). Network errors and any other non-2xx status raise
ContentTransportException. Nothing is retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from site_content.domain.entities import ENTITY_TYPES, Apartado, ContentEntity
from site_content.domain.enums import CHILD_KIND, EntityKind
from site_content.domain.exceptions import ContentTransportException, ValidationException
from site_content.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Routes:
    """Path templates for one entity kind ({parent} / {id} are URL-quoted)."""

    collection: str
    item: str
    create: str
    update: str
    delete: str


_ROUTES: dict[EntityKind, _Routes] = {
    EntityKind.APARTADO: _Routes(
        "/apartados", "/apartado/{id}", "/apartadoCre", "/apartadoUpd/{id}", "/apartadoDel/{id}"
    ),
    EntityKind.CATEGORIA: _Routes(
        "/categorias/{parent}",
        "/categoria/{id}",
        "/categoriaCre/{parent}",
        "/categoriaUpd/{id}",
        "/categoriaDel/{id}",
    ),
    EntityKind.SECCION: _Routes(
        "/secciones/{parent}",
        "/seccion/{id}",
        "/seccionCre/{parent}",
        "/seccionUpd/{id}",
        "/seccionDel/{id}",
    ),
    EntityKind.CONTENIDO: _Routes(
        "/contenidos/{parent}",
        "/contenido/{id}",
        "/contenidoCre/{parent}",
        "/contenidoUpd/{id}",
        "/contenidoDel/{id}",
    ),
}


def _path(template: str, *, parent: str | None = None, id: str | None = None) -> str:
    return template.format(
        parent=quote(parent or "", safe=""), id=quote(id or "", safe="")
    )


class ContentApiClient:
    """Async client for the content CRUD backend."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        """Initialize with a configured client (base_url, auth headers, timeout).

        The caller owns the client's lifecycle (see core.lifespan).
        """
        self._http = http

    @traced("content_api.fetch_top_level_entities")
    async def fetch_top_level_entities(self) -> list[Apartado]:
        data = await self._request("GET", _ROUTES[EntityKind.APARTADO].collection, "apartados")
        return self._parse_list(EntityKind.APARTADO, data)

    @traced("content_api.fetch_children")
    async def fetch_children(
        self, parent_kind: EntityKind, parent_id: str
    ) -> list[ContentEntity]:
        """Children of parent_id; a backend 404 yields []."""
        child_kind = CHILD_KIND.get(parent_kind)
        if child_kind is None:
            raise ValidationException(
                f"{parent_kind.value} has no children", field="parent_kind"
            )
        path = _path(_ROUTES[child_kind].collection, parent=parent_id)
        data = await self._request("GET", path, _plural(child_kind), parent_id=parent_id)
        return self._parse_list(child_kind, data)

    @traced("content_api.fetch_one")
    async def fetch_one(self, kind: EntityKind, entity_id: str) -> ContentEntity | None:
        data = await self._request("GET", _path(_ROUTES[kind].item, id=entity_id), kind.value)
        if data is None:
            return None
        return ENTITY_TYPES[kind].from_api(data)

    async def create(
        self, kind: EntityKind, parent_id: str | None, data: dict[str, Any]
    ) -> ContentEntity:
        path = _path(_ROUTES[kind].create, parent=parent_id)
        body = await self._request("POST", path, kind.value, parent_id=parent_id, json=data)
        return self._parse_one(kind, body, parent_id)

    async def update(
        self, kind: EntityKind, entity_id: str, data: dict[str, Any]
    ) -> ContentEntity:
        path = _path(_ROUTES[kind].update, id=entity_id)
        body = await self._request("PUT", path, kind.value, json=data)
        return self._parse_one(kind, body, None)

    async def delete(self, kind: EntityKind, entity_id: str) -> None:
        await self._request("DELETE", _path(_ROUTES[kind].delete, id=entity_id), kind.value)

    async def _request(
        self,
        method: str,
        path: str,
        resource: str,
        parent_id: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Perform one request. 404 returns None; other failures raise ContentTransportException."""
        try:
            resp = await self._http.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ContentTransportException(
                resource, str(e) or e.__class__.__name__, parent_id=parent_id
            ) from e
        if resp.status_code == 404:
            logger.debug("%s %s -> 404", method, path)
            return None
        if resp.is_error:
            logger.warning("%s %s -> %s", method, path, resp.status_code)
            raise ContentTransportException(
                resource,
                f"backend answered {resp.status_code}",
                parent_id=parent_id,
                status_code=resp.status_code,
            )
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise ContentTransportException(
                resource, "invalid JSON body", parent_id=parent_id, status_code=resp.status_code
            ) from e

    @staticmethod
    def _parse_list(kind: EntityKind, data: Any) -> list[Any]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise ContentTransportException(_plural(kind), "expected a JSON array")
        return [ENTITY_TYPES[kind].from_api(item) for item in data]

    @staticmethod
    def _parse_one(kind: EntityKind, data: Any, parent_id: str | None) -> ContentEntity:
        if not isinstance(data, dict) or not data:
            raise ContentTransportException(
                kind.value, "expected a JSON object", parent_id=parent_id
            )
        return ENTITY_TYPES[kind].from_api(data)


def _plural(kind: EntityKind) -> str:
    return {
        EntityKind.APARTADO: "apartados",
        EntityKind.CATEGORIA: "categorias",
        EntityKind.SECCION: "secciones",
        EntityKind.CONTENIDO: "contenidos",
    }[kind]
