"""Site navigation API: header and footer links built from the content cache."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from site_content.api.v1.dependencies import get_navigation_builder
from site_content.application.services import NavigationBuilder
from site_content.schemas.navigation import NavigationResponse

router = APIRouter()


@router.get("", response_model=NavigationResponse)
async def get_navigation(
    builder: Annotated[NavigationBuilder, Depends(get_navigation_builder)],
    refresh: bool = Query(False, description="Re-fetch apartados and categorias"),
):
    """Header menus, about dropdown and footer groups. 502 when apartados cannot be loaded."""
    return NavigationResponse.from_navigation(await builder.build(refresh=refresh))
