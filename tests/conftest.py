"""Shared fixtures for the city explore test suite."""
import pytest

from cityexplore.core.metrics_explore import reset_metrics
from cityexplore.models.place import Coordinate, Place, RawGeoElement

# Meters per degree of latitude on the haversine sphere (R * pi / 180)
METERS_PER_DEG_LAT = 111194.92664455873


def offset_north(origin: Coordinate, meters: float) -> Coordinate:
    return Coordinate(origin.lat + meters / METERS_PER_DEG_LAT, origin.lng)


def node(id, lat, lon, name=None, **tags):
    data = {"type": "node", "id": id, "lat": lat, "lon": lon, "tags": dict(tags)}
    if name is not None:
        data["tags"]["name"] = name
    return data


def raw(id, lat, lon, name=None, **tags):
    return RawGeoElement.from_overpass(node(id, lat, lon, name, **tags))


def place_at(origin: Coordinate, meters_north: float, name: str) -> Place:
    return Place(
        name=name,
        coordinate=offset_north(origin, meters_north),
        distance_m=meters_north,
        bearing_deg=0.0,
        category="amenity=cafe",
    )


@pytest.fixture(autouse=True)
def clean_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def origin():
    return Coordinate(35.0, 135.0)
