"""
Category resolver: maps user-facing category labels to OSM ``key=value`` tags.

The settings screen lets a user pick categories by label; the explore endpoint
queries Overpass by tag. Labels are grouped into sections for display.
"""
from dataclasses import dataclass
from typing import Iterable

from cityexplore.core.exceptions import ValidationError


@dataclass(frozen=True)
class CategorySection:
    label: str
    items: tuple[str, ...]


CATEGORY_SECTIONS: tuple[CategorySection, ...] = (
    CategorySection("Food & Drink", (
        "Restaurant", "Cafe", "Pub & Bar", "Ramen & Noodles",
        "Fast Food", "Bakery", "Sweets",
    )),
    CategorySection("Shopping", (
        "Bookstore", "Gifts & Goods", "Florist", "Market",
        "Department Store & Mall", "Stationery",
    )),
    CategorySection("Parks & Nature", (
        "Park", "Plaza", "Spring", "Landmark Tree", "Waterside", "Peak",
    )),
    CategorySection("Sightseeing", (
        "Viewpoint", "Lighthouse", "Monument", "Shrine & Temple",
        "Castle", "Fountain", "Museum", "Zoo & Aquarium",
    )),
    CategorySection("Entertainment", (
        "Cinema", "Theatre", "Theme Park", "Library", "Public Bath",
    )),
)

CATEGORY_TO_OSM_TAGS: dict[str, tuple[str, ...]] = {
    # Food & Drink
    "Restaurant": ("amenity=restaurant",),
    "Cafe": ("amenity=cafe",),
    "Pub & Bar": ("amenity=pub", "amenity=bar", "amenity=biergarten"),
    "Ramen & Noodles": ("amenity=restaurant",),
    "Fast Food": ("amenity=fast_food",),
    "Bakery": ("shop=bakery",),
    "Sweets": ("shop=confectionery",),
    # Shopping
    "Bookstore": ("shop=books",),
    "Gifts & Goods": ("shop=variety_store", "shop=gift", "shop=general"),
    "Florist": ("shop=florist", "shop=garden_centre"),
    "Market": ("amenity=marketplace",),
    "Department Store & Mall": ("shop=department_store", "shop=mall"),
    "Stationery": ("shop=stationery",),
    # Parks & Nature
    "Park": ("leisure=park", "leisure=playground"),
    "Plaza": ("leisure=common", "leisure=plaza", "leisure=pitch"),
    "Spring": ("natural=spring",),
    "Landmark Tree": ("natural=tree",),
    "Waterside": ("natural=coastline", "natural=bay", "natural=water", "waterway=riverbank"),
    "Peak": ("natural=peak",),
    # Sightseeing
    "Viewpoint": ("tourism=viewpoint",),
    "Lighthouse": ("man_made=lighthouse", "man_made=beacon"),
    "Monument": ("historic=monument", "historic=memorial", "historic=wayside_cross"),
    "Shrine & Temple": (
        "amenity=place_of_worship", "historic=wayside_shrine", "historic=archaeological_site",
    ),
    "Castle": ("historic=castle", "historic=ruins"),
    "Fountain": ("amenity=fountain",),
    "Museum": ("tourism=museum", "tourism=artwork"),
    "Zoo & Aquarium": ("tourism=zoo", "tourism=aquarium"),
    # Entertainment
    "Cinema": ("amenity=cinema",),
    "Theatre": ("amenity=theatre",),
    "Theme Park": ("tourism=theme_park", "leisure=water_park"),
    "Library": ("amenity=library",),
    "Public Bath": ("amenity=public_bath", "amenity=spa"),
}

OSM_TAG_TO_LABEL: dict[str, str] = {
    "amenity=restaurant": "Restaurant",
    "amenity=cafe": "Cafe",
    "amenity=pub": "Pub",
    "amenity=bar": "Bar",
    "amenity=biergarten": "Beer Garden",
    "amenity=fast_food": "Fast Food",
    "shop=bakery": "Bakery",
    "shop=confectionery": "Sweets",
    "shop=books": "Bookstore",
    "shop=variety_store": "Variety Store",
    "shop=gift": "Gift Shop",
    "shop=general": "General Store",
    "shop=florist": "Florist",
    "shop=garden_centre": "Garden Centre",
    "amenity=marketplace": "Market",
    "shop=department_store": "Department Store",
    "shop=mall": "Mall",
    "shop=stationery": "Stationery",
    "leisure=park": "Park",
    "leisure=playground": "Park",
    "leisure=common": "Plaza",
    "leisure=plaza": "Plaza",
    "natural=spring": "Spring",
    "natural=tree": "Landmark Tree",
    "natural=coastline": "Coast",
    "natural=water": "Waterside",
    "natural=peak": "Peak",
    "tourism=viewpoint": "Viewpoint",
    "man_made=lighthouse": "Lighthouse",
    "historic=monument": "Monument",
    "historic=memorial": "Memorial",
    "amenity=place_of_worship": "Shrine & Temple",
    "historic=castle": "Castle",
    "historic=ruins": "Historic Site",
    "amenity=fountain": "Fountain",
    "tourism=museum": "Museum",
    "tourism=artwork": "Artwork",
    "tourism=zoo": "Zoo",
    "tourism=aquarium": "Aquarium",
    "amenity=cinema": "Cinema",
    "amenity=theatre": "Theatre",
    "tourism=theme_park": "Theme Park",
    "amenity=library": "Library",
    "amenity=public_bath": "Public Bath",
    "amenity=spa": "Spa",
}

DEFAULT_LABEL = "Spot"


def all_categories() -> list[str]:
    return [item for section in CATEGORY_SECTIONS for item in section.items]


def tags_for_categories(categories: Iterable[str], strict: bool = True) -> list[str]:
    """
    Resolve category labels to a de-duplicated tag list, keeping first-seen order.

    Raises:
        ValidationError: if ``strict`` and a label is unknown
    """
    tags: list[str] = []
    seen = set()
    for label in categories:
        osm_tags = CATEGORY_TO_OSM_TAGS.get(label)
        if osm_tags is None:
            if strict:
                raise ValidationError(
                    f"Unknown category '{label}'",
                    details={"category": label, "known": all_categories()},
                )
            continue
        for tag in osm_tags:
            if tag not in seen:
                seen.add(tag)
                tags.append(tag)
    return tags


def category_label(osm_tag: str) -> str:
    return OSM_TAG_TO_LABEL.get(osm_tag, DEFAULT_LABEL)
