import math

import pytest

from cityexplore.core.exceptions import ErrorCode, ValidationError
from cityexplore.core.validation import (
    normalize_osm_tags,
    validate_latitude,
    validate_longitude,
    validate_osm_tag,
    validate_radius,
)
from cityexplore.models.place import Coordinate


@pytest.mark.parametrize("lat", [-90.0, 0.0, 35.5, 90.0])
def test_latitude_accepts_range(lat):
    assert validate_latitude(lat) == lat


@pytest.mark.parametrize("lat", [-90.01, 91, math.nan, math.inf, "north", None])
def test_latitude_rejects_bad_values(lat):
    with pytest.raises(ValidationError) as exc:
        validate_latitude(lat)
    assert exc.value.status_code == 400
    assert exc.value.error_code == ErrorCode.VALIDATION_ERROR


def test_longitude_folds_180_onto_minus_180():
    assert validate_longitude(180.0) == -180.0
    assert validate_longitude(-180.0) == -180.0
    assert validate_longitude(179.5) == 179.5


@pytest.mark.parametrize("lng", [-180.5, 181, math.nan])
def test_longitude_rejects_bad_values(lng):
    with pytest.raises(ValidationError):
        validate_longitude(lng)


def test_coordinate_validates_on_construction():
    with pytest.raises(ValidationError):
        Coordinate(100.0, 0.0)
    assert Coordinate(0.0, 180.0).lng == -180.0


def test_radius_bounds():
    assert validate_radius(3000) == 3000.0
    with pytest.raises(ValidationError):
        validate_radius(0)
    with pytest.raises(ValidationError):
        validate_radius(-5)
    with pytest.raises(ValidationError) as exc:
        validate_radius(60000, max_radius=50000, name="maxRadius")
    assert "maxRadius" in exc.value.message


def test_osm_tag_is_stripped():
    assert validate_osm_tag("  amenity = cafe ") == "amenity=cafe"
    assert validate_osm_tag("name:en=Tokyo Tower") == "name:en=Tokyo Tower"


@pytest.mark.parametrize("tag", ["amenity", "=cafe", "amenity=", " = ", "", 42])
def test_osm_tag_rejects_malformed(tag):
    with pytest.raises(ValidationError):
        validate_osm_tag(tag)


def test_normalize_drops_duplicates_in_order():
    tags = ["shop=books", "amenity=cafe", " shop=books", "amenity=cafe"]
    assert normalize_osm_tags(tags) == ["shop=books", "amenity=cafe"]
