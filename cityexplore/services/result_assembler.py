"""Turns raw Overpass elements into ranked Place records."""
import logging
from typing import Iterable, Optional, Sequence

from cityexplore.core.geo import bearing_degrees, distance_meters, is_within_direction
from cityexplore.models.place import Place, RawGeoElement, SearchRequest

logger = logging.getLogger(__name__)


def resolve_category(element: RawGeoElement, tags: Sequence[str]) -> Optional[str]:
    """First requested ``key=value`` tag present on the element, or None."""
    for tag in tags:
        key, value = tag.split("=", 1)
        if element.tags.get(key) == value:
            return tag
    return None


def assemble_places(
    elements: Iterable[RawGeoElement],
    request: SearchRequest,
    max_results: int = 10,
) -> list[Place]:
    """
    Build the ranked place list for one search attempt.

    Elements without a name or a usable coordinate (node position or way/relation
    centre) are dropped, as are elements carrying none of the requested tags.
    The remaining places are direction-filtered when requested, sorted by
    distance (stable, so ties keep upstream order) and truncated. Duplicates are
    kept; the client cache de-duplicates.
    """
    places = []
    skipped = 0
    direction = request.direction_filter
    for element in elements:
        name = element.name
        coordinate = element.coordinate
        category = resolve_category(element, request.tags)
        if name is None or coordinate is None or category is None:
            skipped += 1
            continue
        bearing = bearing_degrees(request.origin, coordinate)
        if direction is not None and not is_within_direction(
            bearing, direction.target_bearing_deg, direction.half_angle_deg
        ):
            continue
        places.append(Place(
            name=name,
            coordinate=coordinate,
            distance_m=distance_meters(request.origin, coordinate),
            bearing_deg=bearing,
            category=category,
        ))

    if skipped:
        logger.debug(f"Skipped {skipped} unusable Overpass elements")

    places.sort(key=lambda p: p.distance_m)
    return places[:max_results]
