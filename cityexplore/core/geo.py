"""Geodesic helpers: haversine distance, forward azimuth and sector tests."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cityexplore.models.place import Coordinate

EARTH_RADIUS_M = 6371000.0


def haversine(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in meters between two points given in degrees."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi, dlam = math.radians(lat2 - lat1), math.radians(lng2 - lng1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    return haversine(a.lat, a.lng, b.lat, b.lng)


def bearing_degrees(a: Coordinate, b: Coordinate) -> float:
    """
    Initial bearing from ``a`` to ``b``, clockwise from true north, in [0, 360).

    The bearing of a point to itself is 0.
    """
    if a.lat == b.lat and a.lng == b.lng:
        return 0.0
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dlam = math.radians(b.lng - a.lng)
    y = math.sin(dlam) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlam)
    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if bearing >= 360.0 else bearing


def angular_difference(bearing: float, target: float) -> float:
    """Signed shortest arc from ``target`` to ``bearing``, in (-180, 180]."""
    diff = (bearing - target) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def is_within_direction(bearing: float, target: float, half_angle: float) -> bool:
    return abs(angular_difference(bearing, target)) <= half_angle
