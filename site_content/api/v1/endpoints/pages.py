"""Public page API: thin routes delegating to the hierarchy loader and dispatcher."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from site_content.api.v1.dependencies import get_hierarchy_loader, get_template_dispatcher
from site_content.application.dtos.page import PageResolution
from site_content.application.services import HierarchyLoader, TemplateDispatcher
from site_content.domain.enums import PageVariant, ResolutionStatus
from site_content.domain.exceptions import SlugNotFoundException
from site_content.schemas.page import PageResponse

router = APIRouter()


def _page_response(
    resolution: PageResolution,
    dispatcher: TemplateDispatcher,
    variant: PageVariant | None = None,
) -> PageResponse:
    if resolution.status is ResolutionStatus.READY and resolution.data is not None:
        plan = dispatcher.build_plan(resolution.data, variant)
        return PageResponse.from_plan(resolution, plan)
    if resolution.error is not None:
        raise resolution.error
    raise SlugNotFoundException(resolution.slug)


@router.get("", response_model=PageResponse)
async def get_home_page(
    loader: Annotated[HierarchyLoader, Depends(get_hierarchy_loader)],
    dispatcher: Annotated[TemplateDispatcher, Depends(get_template_dispatcher)],
    refresh: bool = Query(False, description="Re-fetch every level"),
):
    """Resolve the home page (no slug)."""
    return _page_response(await loader.resolve(None, refresh=refresh), dispatcher)


@router.get("/categoria/{categoria_id}", response_model=PageResponse)
async def get_categoria_page(
    categoria_id: str,
    loader: Annotated[HierarchyLoader, Depends(get_hierarchy_loader)],
    dispatcher: Annotated[TemplateDispatcher, Depends(get_template_dispatcher)],
    refresh: bool = Query(False, description="Re-fetch the categoria and its secciones"),
):
    """Resolve a single categoria page (blog post or categoria detail). 404 when unknown."""
    resolution = await loader.resolve_categoria(categoria_id, refresh=refresh)
    variant = None
    if resolution.data is not None:
        variant = dispatcher.categoria_page_variant(resolution.data.apartado)
    return _page_response(resolution, dispatcher, variant)


@router.get("/{slug}", response_model=PageResponse)
async def get_page(
    slug: str,
    loader: Annotated[HierarchyLoader, Depends(get_hierarchy_loader)],
    dispatcher: Annotated[TemplateDispatcher, Depends(get_template_dispatcher)],
    refresh: bool = Query(False, description="Re-fetch every level"),
):
    """Resolve a page by slug. 404 when the slug matches nothing, 502 on backend failure."""
    return _page_response(await loader.resolve(slug, refresh=refresh), dispatcher)
