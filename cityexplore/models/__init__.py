"""
Models package for the city explore backend.

Plain dataclasses describing coordinates, search requests, raw Overpass
elements and the places produced from them.
"""

from .place import (
    Coordinate,
    DirectionFilter,
    SearchRequest,
    RawGeoElement,
    Place,
    PlaceKey,
    EscalationOutcome,
    EscalationResult,
    PLACE_KEY_PRECISION,
)

__all__ = [
    "Coordinate",
    "DirectionFilter",
    "SearchRequest",
    "RawGeoElement",
    "Place",
    "PlaceKey",
    "EscalationOutcome",
    "EscalationResult",
    "PLACE_KEY_PRECISION",
]
