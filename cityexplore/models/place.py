"""
Domain models for proximity place discovery.

These are plain dataclasses shared by the server-side search pipeline and the
client-side result cache. Pydantic request/response schemas live in
``cityexplore.schemas``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from cityexplore.core.exceptions import ValidationError
from cityexplore.core.validation import validate_latitude, validate_longitude

# 6 decimal places is about 0.11 m, sub-meter everywhere
PLACE_KEY_PRECISION = 6


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point in degrees, lat in [-90, 90] and lng in [-180, 180)."""
    lat: float
    lng: float

    def __post_init__(self):
        object.__setattr__(self, "lat", validate_latitude(self.lat))
        object.__setattr__(self, "lng", validate_longitude(self.lng))


@dataclass(frozen=True)
class DirectionFilter:
    """Keep only places whose bearing is within half_angle_deg of target_bearing_deg."""
    target_bearing_deg: float
    half_angle_deg: float = 45.0


@dataclass(frozen=True)
class SearchRequest:
    origin: Coordinate
    initial_radius_m: float
    max_radius_m: float
    radius_step_m: float
    tags: tuple[str, ...]
    direction_filter: Optional[DirectionFilter] = None


@dataclass
class RawGeoElement:
    """One element of an Overpass ``elements`` array."""
    type: str
    id: int
    lat: Optional[float] = None
    lon: Optional[float] = None
    tags: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_overpass(cls, data: dict[str, Any]) -> "RawGeoElement":
        """Build from raw JSON, taking ``center`` for ways and relations."""
        lat, lon = data.get("lat"), data.get("lon")
        center = data.get("center")
        if (lat is None or lon is None) and isinstance(center, dict):
            lat, lon = center.get("lat"), center.get("lon")
        tags = data.get("tags")
        return cls(
            type=str(data.get("type", "")),
            id=data.get("id", 0),
            lat=lat,
            lon=lon,
            tags=dict(tags) if isinstance(tags, dict) else {},
        )

    @property
    def coordinate(self) -> Optional[Coordinate]:
        if self.lat is None or self.lon is None:
            return None
        try:
            return Coordinate(float(self.lat), float(self.lon))
        except (TypeError, ValueError, ValidationError):
            return None

    @property
    def name(self) -> Optional[str]:
        name = self.tags.get("name")
        if isinstance(name, str) and name.strip():
            return name.strip()
        return None


@dataclass(frozen=True)
class PlaceKey:
    """Identity of a place for de-duplication: name plus rounded coordinate."""
    name: str
    lat: float
    lng: float

    @classmethod
    def for_place(cls, place: "Place") -> "PlaceKey":
        return cls(
            name=place.name,
            lat=round(place.coordinate.lat, PLACE_KEY_PRECISION),
            lng=round(place.coordinate.lng, PLACE_KEY_PRECISION),
        )


@dataclass(frozen=True)
class Place:
    name: str
    coordinate: Coordinate
    distance_m: float
    bearing_deg: float
    category: str

    @property
    def key(self) -> PlaceKey:
        return PlaceKey.for_place(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire shape used by the explore endpoint."""
        return {
            "name": self.name,
            "lat": self.coordinate.lat,
            "lng": self.coordinate.lng,
            "distance": int(round(self.distance_m)),
            "bearing": round(self.bearing_deg, 1) % 360.0,
            "category": self.category,
        }


class EscalationOutcome(str, Enum):
    FOUND = "found"
    EXHAUSTED = "exhausted"


@dataclass
class EscalationResult:
    places: list[Place]
    searched_radius_m: float
    attempts: list[float]
    outcome: EscalationOutcome
