"""
Geodesic math: haversine distance, forward azimuth and sector tests.
"""
import itertools

import pytest

from cityexplore.core.geo import (
    angular_difference,
    bearing_degrees,
    distance_meters,
    is_within_direction,
)
from cityexplore.models.place import Coordinate

POINTS = [
    Coordinate(35.0, 135.0),
    Coordinate(35.001, 135.001),
    Coordinate(-33.8688, 151.2093),
    Coordinate(51.5074, -0.1278),
    Coordinate(0.0, -179.9),
    Coordinate(0.0, 179.9),
    Coordinate(89.9, 10.0),
    Coordinate(-89.9, -10.0),
]


class TestDistance:
    @pytest.mark.parametrize("point", POINTS)
    def test_distance_to_self_is_zero(self, point):
        assert distance_meters(point, point) == 0

    def test_distance_is_symmetric(self):
        for a, b in itertools.combinations(POINTS, 2):
            assert distance_meters(a, b) == pytest.approx(distance_meters(b, a), abs=1e-6)

    def test_walking_scale_distance(self):
        d = distance_meters(Coordinate(35.0, 135.0), Coordinate(35.001, 135.001))
        assert d == pytest.approx(143.7, abs=0.5)

    def test_across_antimeridian_is_short(self):
        d = distance_meters(Coordinate(0.0, -179.9), Coordinate(0.0, 179.9))
        assert d == pytest.approx(22239, rel=0.01)


class TestBearing:
    def test_bearing_range_for_distinct_points(self):
        for a, b in itertools.permutations(POINTS, 2):
            bearing = bearing_degrees(a, b)
            assert 0.0 <= bearing < 360.0

    def test_bearing_to_self_is_zero(self):
        p = Coordinate(35.0, 135.0)
        assert bearing_degrees(p, p) == 0.0

    @pytest.mark.parametrize("target,expected", [
        (Coordinate(35.01, 135.0), 0.0),
        (Coordinate(35.0, 135.01), 90.0),
        (Coordinate(34.99, 135.0), 180.0),
        (Coordinate(35.0, 134.99), 270.0),
    ])
    def test_cardinal_bearings(self, target, expected):
        assert bearing_degrees(Coordinate(35.0, 135.0), target) == pytest.approx(expected, abs=0.01)

    def test_bearing_across_antimeridian_points_east(self):
        assert bearing_degrees(Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)) == pytest.approx(90.0, abs=0.01)


class TestSector:
    def test_sector_wraps_through_north(self):
        assert is_within_direction(5.0, 350.0, 20.0)
        assert not is_within_direction(40.0, 350.0, 20.0)

    def test_sector_boundary_is_inclusive(self):
        assert is_within_direction(10.0, 350.0, 20.0)
        assert is_within_direction(330.0, 350.0, 20.0)
        assert not is_within_direction(329.0, 350.0, 20.0)

    def test_full_circle_sector_admits_everything(self):
        assert all(is_within_direction(b, 123.0, 180.0) for b in range(0, 360, 15))

    @pytest.mark.parametrize("bearing,target,expected", [
        (10.0, 350.0, 20.0),
        (350.0, 10.0, -20.0),
        (180.0, 0.0, 180.0),
        (90.0, 90.0, 0.0),
    ])
    def test_angular_difference(self, bearing, target, expected):
        assert angular_difference(bearing, target) == pytest.approx(expected)
