import pytest

from cityexplore.models.place import DirectionFilter, RawGeoElement, SearchRequest
from cityexplore.services.result_assembler import assemble_places, resolve_category

from conftest import offset_north, raw


def make_request(origin, tags=("amenity=cafe",), direction=None):
    return SearchRequest(
        origin=origin,
        initial_radius_m=1000,
        max_radius_m=1000,
        radius_step_m=1000,
        tags=tuple(tags),
        direction_filter=direction,
    )


def test_resolve_category_uses_first_requested_tag():
    element = raw(1, 35.0, 135.0, "Mixed", amenity="cafe", shop="books")
    assert resolve_category(element, ["shop=books", "amenity=cafe"]) == "shop=books"
    assert resolve_category(element, ["amenity=bar"]) is None


def test_skips_unnamed_unlocated_and_unmatched(origin):
    elements = [
        raw(1, 35.001, 135.0, None, amenity="cafe"),
        raw(2, 35.001, 135.0, "   ", amenity="cafe"),
        RawGeoElement(type="way", id=3, tags={"name": "No Centre", "amenity": "cafe"}),
        raw(4, 35.001, 135.0, "Bookshop", shop="books"),
        raw(5, 35.002, 135.0, "Kept", amenity="cafe"),
    ]
    places = assemble_places(elements, make_request(origin))
    assert [p.name for p in places] == ["Kept"]
    assert places[0].category == "amenity=cafe"


def test_way_center_is_used():
    element = RawGeoElement.from_overpass({
        "type": "way",
        "id": 9,
        "center": {"lat": 35.001, "lon": 135.001},
        "tags": {"name": "Park", "leisure": "park"},
    })
    assert element.coordinate is not None
    assert element.coordinate.lat == 35.001


def test_sorted_by_distance_and_truncated(origin):
    elements = []
    for i, meters in enumerate([900, 100, 500, 300, 700]):
        point = offset_north(origin, meters)
        elements.append(raw(i, point.lat, point.lng, f"Cafe {meters}", amenity="cafe"))

    places = assemble_places(elements, make_request(origin), max_results=3)
    assert [p.name for p in places] == ["Cafe 100", "Cafe 300", "Cafe 500"]
    assert places[0].distance_m == pytest.approx(100, abs=0.5)
    assert places[0].bearing_deg == pytest.approx(0.0, abs=0.01)


def test_ties_keep_upstream_order(origin):
    point = offset_north(origin, 200)
    elements = [
        raw(1, point.lat, point.lng, "First", amenity="cafe"),
        raw(2, point.lat, point.lng, "Second", amenity="cafe"),
    ]
    places = assemble_places(elements, make_request(origin))
    assert [p.name for p in places] == ["First", "Second"]


def test_duplicates_are_not_merged(origin):
    elements = [raw(1, 35.001, 135.0, "Same", amenity="cafe"), raw(2, 35.001, 135.0, "Same", amenity="cafe")]
    assert len(assemble_places(elements, make_request(origin))) == 2


def test_direction_filter(origin):
    elements = [
        raw(1, 35.001, 135.0, "North", amenity="cafe"),
        raw(2, 34.999, 135.0, "South", amenity="cafe"),
        raw(3, 35.0, 135.001, "East", amenity="cafe"),
    ]
    places = assemble_places(elements, make_request(origin, direction=DirectionFilter(0.0, 45.0)))
    assert [p.name for p in places] == ["North"]


def test_empty_input_gives_empty_list(origin):
    assert assemble_places([], make_request(origin)) == []
