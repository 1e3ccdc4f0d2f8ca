# Business logic services

from .mirror_racer import MirrorQueryRacer, MirrorResponseError
from .radius_escalation import RadiusEscalationController
from .result_assembler import assemble_places, resolve_category
from .explore_service import ExploreService, parse_direction

__all__ = [
    "MirrorQueryRacer",
    "MirrorResponseError",
    "RadiusEscalationController",
    "assemble_places",
    "resolve_category",
    "ExploreService",
    "parse_direction",
]
