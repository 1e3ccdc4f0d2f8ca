from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal, Optional, Union


class ExploreRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_lat: float = Field(..., alias="currentLat")
    current_lng: float = Field(..., alias="currentLng")
    radius: Optional[float] = None
    max_radius: Optional[float] = Field(default=None, alias="maxRadius")
    radius_step: Optional[float] = Field(default=None, alias="radiusStep")
    osm_tags: List[str] = Field(default_factory=list, alias="osmTags")
    categories: List[str] = Field(default_factory=list)
    direction: Optional[Union[float, str]] = None
    direction_range: Optional[float] = Field(default=None, alias="directionRange")


class PlaceOut(BaseModel):
    name: str
    lat: float
    lng: float
    distance: int
    bearing: float
    category: str


class DirectionOut(BaseModel):
    angle: float
    range: float


class ExploreResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["success"] = "success"
    searched_radius: float = Field(..., alias="searchedRadius")
    direction: Optional[DirectionOut] = None
    places: List[PlaceOut]


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["error"] = "error"
    message: str
    detail: Optional[str] = None
    error_code: str = Field(..., alias="errorCode")
    request_id: str = Field(..., alias="requestId")


class CategorySectionOut(BaseModel):
    label: str
    items: List[str]


class CategoryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    osm_tags: List[str] = Field(..., alias="osmTags")


class CategoryListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sections: List[CategorySectionOut]
    categories: List[CategoryOut]
    tag_labels: Dict[str, str] = Field(default_factory=dict, alias="tagLabels")
