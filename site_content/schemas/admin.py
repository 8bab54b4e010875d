"""Content admin API schemas.

Create bodies use backend wire names (nombre_apartado, id_plantilla, ...);
update bodies use entity attribute names (name, template_id, ...).
"""

import dataclasses
from typing import Any

from pydantic import BaseModel, Field

from site_content.domain.entities import ContentEntity


class EntityCreateRequest(BaseModel):
    parent_id: str | None = Field(
        default=None, description="Owning entity id; required for everything below apartado"
    )
    data: dict[str, Any] = Field(default_factory=dict, description="Fields in backend wire names")


class EntityUpdateRequest(BaseModel):
    changes: dict[str, Any] = Field(..., description="Entity attributes to change")


class EntityResponse(BaseModel):
    kind: str
    parent_id: str | None
    entity: dict[str, Any]

    @classmethod
    def from_entity(cls, entity: ContentEntity) -> "EntityResponse":
        return cls(
            kind=entity.KIND.value,
            parent_id=entity.parent_id,
            entity=dataclasses.asdict(entity),
        )
