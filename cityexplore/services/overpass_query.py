"""Overpass QL query construction for ``around`` searches."""
from typing import Sequence

from cityexplore.core.validation import validate_osm_tag
from cityexplore.models.place import Coordinate


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_around_query(
    origin: Coordinate,
    radius_m: float,
    tags: Sequence[str],
    timeout_seconds: int = 20,
) -> str:
    """
    Build a union query matching any of ``tags`` within ``radius_m`` of ``origin``.

    Nodes, ways and relations are all matched; ``out center tags`` makes
    Overpass attach a centroid to ways and relations.
    """
    statements = []
    for tag in tags:
        key, value = validate_osm_tag(tag).split("=", 1)
        statements.append(
            f'  nwr["{_escape(key)}"="{_escape(value)}"]'
            f'(around:{radius_m:g},{origin.lat},{origin.lng});'
        )
    body = "\n".join(statements)
    return f"[out:json][timeout:{timeout_seconds}];\n(\n{body}\n);\nout center tags;\n"
