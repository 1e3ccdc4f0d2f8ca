"""
Input validation utilities for search requests.
"""
import math
import re
from typing import Iterable, List

from cityexplore.core.exceptions import ValidationError

_TAG_PATTERN = re.compile(r'^([^=\s][^=]*)=(.+)$')


def _require_finite(value: float, name: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number", details={"field": name, "value": value})
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite", details={"field": name})
    return value


def validate_latitude(lat: float) -> float:
    """
    Validate latitude coordinate

    Args:
        lat: Latitude value

    Returns:
        Validated latitude

    Raises:
        ValidationError: If latitude is out of range
    """
    lat = _require_finite(lat, "latitude")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError(f"Latitude {lat} out of range (must be -90 to 90)")

    return lat


def validate_longitude(lon: float) -> float:
    """
    Validate longitude coordinate

    180 is accepted and folded onto -180 so stored longitudes stay in [-180, 180).

    Raises:
        ValidationError: If longitude is out of range
    """
    lon = _require_finite(lon, "longitude")
    if not -180.0 <= lon <= 180.0:
        raise ValidationError(f"Longitude {lon} out of range (must be -180 to 180)")

    return -180.0 if lon == 180.0 else lon


def validate_radius(radius: float, max_radius: float = 50000.0, name: str = "radius") -> float:
    """
    Validate search radius (in meters)

    Args:
        radius: Search radius
        max_radius: Maximum allowed radius (default 50km)
        name: Field name used in the error message

    Returns:
        Validated radius

    Raises:
        ValidationError: If radius is invalid
    """
    radius = _require_finite(radius, name)
    if radius <= 0:
        raise ValidationError(f"{name} must be positive")

    if radius > max_radius:
        raise ValidationError(f"{name} {radius:g}m exceeds maximum {max_radius:g}m")

    return radius


def validate_osm_tag(tag: str) -> str:
    """Validate a ``key=value`` OSM tag and return it stripped."""
    if not isinstance(tag, str):
        raise ValidationError("OSM tag must be a string", details={"tag": tag})
    tag = tag.strip()
    match = _TAG_PATTERN.match(tag)
    if not match or not match.group(1).strip() or not match.group(2).strip():
        raise ValidationError(f"Invalid OSM tag '{tag}' (expected key=value)", details={"tag": tag})
    return f"{match.group(1).strip()}={match.group(2).strip()}"


def normalize_osm_tags(tags: Iterable[str]) -> List[str]:
    """Validate tags, dropping duplicates while keeping first-seen order."""
    seen = set()
    result = []
    for tag in tags:
        tag = validate_osm_tag(tag)
        if tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result
