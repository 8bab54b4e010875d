"""Content admin API: single-entity reads and CRUD that keep the cache in step.

Every route requires the X-Admin-Secret header (see get_content_admin).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from site_content.api.v1.dependencies import get_content_admin
from site_content.application.services import ContentAdminService
from site_content.domain.enums import EntityKind
from site_content.schemas.admin import EntityCreateRequest, EntityResponse, EntityUpdateRequest

router = APIRouter()

AdminService = Annotated[ContentAdminService, Depends(get_content_admin)]


@router.get("/{kind}/{entity_id}", response_model=EntityResponse)
async def get_entity(kind: EntityKind, entity_id: str, admin: AdminService):
    """Fetch one entity from the backend and make it the current selection."""
    return EntityResponse.from_entity(await admin.load_one(kind, entity_id))


@router.post("/{kind}", response_model=EntityResponse, status_code=201)
async def create_entity(kind: EntityKind, body: EntityCreateRequest, admin: AdminService):
    entity = await admin.create(kind, body.parent_id, body.data)
    return EntityResponse.from_entity(entity)


@router.patch("/{kind}/{entity_id}", response_model=EntityResponse)
async def update_entity(
    kind: EntityKind, entity_id: str, body: EntityUpdateRequest, admin: AdminService
):
    """Partial update of a cached entity; 404 when it was never loaded."""
    return EntityResponse.from_entity(await admin.update(kind, entity_id, body.changes))


@router.delete("/{kind}/{entity_id}", status_code=204)
async def delete_entity(kind: EntityKind, entity_id: str, admin: AdminService):
    await admin.delete(kind, entity_id)
    return Response(status_code=204)
