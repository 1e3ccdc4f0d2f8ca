"""
Explore service: validates an explore request, runs the radius escalation and
shapes the response.

Stateless per request; the only shared resource is the HTTP client owned by
the application lifespan.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional, Union

import httpx

from cityexplore.config.settings import Settings, get_settings
from cityexplore.core.exceptions import ValidationError
from cityexplore.core.metrics_explore import record_search_latency
from cityexplore.core.validation import normalize_osm_tags, validate_radius
from cityexplore.models.place import Coordinate, DirectionFilter, SearchRequest
from cityexplore.schemas.explore import ExploreRequest
from cityexplore.services.category_resolver import tags_for_categories
from cityexplore.services.mirror_racer import MirrorQueryRacer
from cityexplore.services.radius_escalation import QueryRacer, RadiusEscalationController

logger = logging.getLogger(__name__)

# Compass names, clockwise from true north
COMPASS_DIRECTIONS = {
    "north": 0.0,
    "northeast": 45.0,
    "east": 90.0,
    "southeast": 135.0,
    "south": 180.0,
    "southwest": 225.0,
    "west": 270.0,
    "northwest": 315.0,
}


def parse_direction(value: Union[float, int, str, None]) -> Optional[float]:
    """Turn a compass name or an angle in degrees into a bearing in [0, 360)."""
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text in COMPASS_DIRECTIONS:
            return COMPASS_DIRECTIONS[text]
        try:
            value = float(text)
        except ValueError:
            raise ValidationError(
                f"Unknown direction '{value}'",
                details={"direction": value, "allowed": sorted(COMPASS_DIRECTIONS)},
            )
    angle = float(value)
    if not math.isfinite(angle):
        raise ValidationError("direction must be finite")
    return angle % 360.0


class ExploreService:
    def __init__(
        self,
        racer: Optional[QueryRacer] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        overpass = self.settings.overpass
        self.racer = racer or MirrorQueryRacer(
            mirrors=overpass.mirrors,
            http_client=http_client,
            per_request_timeout=overpass.per_request_timeout_seconds,
            query_timeout_seconds=overpass.query_timeout_seconds,
            user_agent=overpass.user_agent,
        )
        self.controller = RadiusEscalationController(
            self.racer,
            target_count=self.settings.search.target_count,
            max_results=self.settings.search.max_results,
        )

    def build_search_request(self, req: ExploreRequest) -> SearchRequest:
        """
        Validate the wire request and convert it to a SearchRequest.

        Raises:
            ValidationError: on bad coordinates, radii, tags, categories or direction
        """
        search = self.settings.search
        origin = Coordinate(req.current_lat, req.current_lng)

        # A zero or missing radius falls back to the default
        initial = validate_radius(req.radius or search.default_radius_m, search.max_allowed_radius_m, "radius")
        maximum = validate_radius(req.max_radius or search.default_max_radius_m, search.max_allowed_radius_m, "maxRadius")
        step = validate_radius(req.radius_step or search.default_radius_step_m, search.max_allowed_radius_m, "radiusStep")

        tags = normalize_osm_tags(list(req.osm_tags) + tags_for_categories(req.categories))
        if not tags:
            raise ValidationError("At least one OSM tag or category is required")

        direction_filter = None
        target = parse_direction(req.direction)
        if target is not None:
            half_angle = req.direction_range or search.default_direction_range
            if not 0.0 < half_angle <= 180.0:
                raise ValidationError(
                    f"directionRange {half_angle:g} out of range (must be in (0, 180])"
                )
            direction_filter = DirectionFilter(target, half_angle)

        return SearchRequest(
            origin=origin,
            initial_radius_m=initial,
            max_radius_m=maximum,
            radius_step_m=step,
            tags=tuple(tags),
            direction_filter=direction_filter,
        )

    async def explore(self, req: ExploreRequest) -> dict[str, Any]:
        search_request = self.build_search_request(req)
        logger.info(
            f"Explore around ({search_request.origin.lat}, {search_request.origin.lng}) "
            f"for {len(search_request.tags)} tags",
            extra={"tags": list(search_request.tags)},
        )
        with record_search_latency():
            result = await self.controller.run(
                search_request, deadline_seconds=self.settings.search.overall_deadline_seconds
            )

        direction = search_request.direction_filter
        return {
            "status": "success",
            "searchedRadius": result.searched_radius_m,
            "direction": (
                {"angle": direction.target_bearing_deg, "range": direction.half_angle_deg}
                if direction is not None else None
            ),
            "places": [place.to_dict() for place in result.places],
        }
