import pytest

from cityexplore.core.exceptions import ValidationError
from cityexplore.core.validation import validate_osm_tag
from cityexplore.services.category_resolver import (
    CATEGORY_SECTIONS,
    CATEGORY_TO_OSM_TAGS,
    DEFAULT_LABEL,
    all_categories,
    category_label,
    tags_for_categories,
)


def test_every_listed_category_has_tags():
    for label in all_categories():
        assert CATEGORY_TO_OSM_TAGS[label], label


def test_all_mapped_tags_are_well_formed():
    for tags in CATEGORY_TO_OSM_TAGS.values():
        for tag in tags:
            assert validate_osm_tag(tag) == tag


def test_sections_keep_display_order():
    assert CATEGORY_SECTIONS[0].label == "Food & Drink"
    assert all_categories()[0] == "Restaurant"


def test_tags_for_categories_dedupes():
    tags = tags_for_categories(["Restaurant", "Ramen & Noodles", "Cafe"])
    assert tags == ["amenity=restaurant", "amenity=cafe"]


def test_unknown_category_is_rejected():
    with pytest.raises(ValidationError) as exc:
        tags_for_categories(["Cafe", "Nightclub"])
    assert exc.value.details["category"] == "Nightclub"


def test_unknown_category_skipped_when_lenient():
    assert tags_for_categories(["Nightclub", "Park"], strict=False) == ["leisure=park", "leisure=playground"]


def test_category_label_fallback():
    assert category_label("amenity=cafe") == "Cafe"
    assert category_label("amenity=parking") == DEFAULT_LABEL
