"""Explore endpoints: nearby place search and the category catalogue."""
from fastapi import APIRouter, Depends

from cityexplore.core.dependencies import get_explore_service
from cityexplore.schemas.explore import (
    CategoryListResponse,
    CategoryOut,
    CategorySectionOut,
    ExploreRequest,
    ExploreResponse,
)
from cityexplore.services.category_resolver import (
    CATEGORY_SECTIONS,
    CATEGORY_TO_OSM_TAGS,
    category_label,
)
from cityexplore.services.explore_service import ExploreService

router = APIRouter(prefix="/api/explore", tags=["explore"])


@router.post("", response_model=ExploreResponse)
async def explore(
    request: ExploreRequest,
    service: ExploreService = Depends(get_explore_service),
):
    """
    Search for named places near the caller, widening the radius until enough
    are found or ``maxRadius`` has been searched.

    An empty ``places`` list is a valid answer. Validation problems return 400,
    an Overpass outage across every mirror returns 502 and an expired overall
    deadline returns 504.
    """
    return await service.explore(request)


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories():
    return CategoryListResponse(
        sections=[
            CategorySectionOut(label=section.label, items=list(section.items))
            for section in CATEGORY_SECTIONS
        ],
        categories=[
            CategoryOut(label=label, osm_tags=list(tags))
            for label, tags in CATEGORY_TO_OSM_TAGS.items()
        ],
        tag_labels={
            tag: category_label(tag)
            for tags in CATEGORY_TO_OSM_TAGS.values()
            for tag in tags
        },
    )
