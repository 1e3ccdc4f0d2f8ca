"""
Radius escalation.

Searches at a starting radius and widens it step by step until enough places
are found or the maximum radius has been searched. Every attempt replaces the
previous one; results are never merged across radii. When the next step would
overshoot the maximum, the final attempt is clamped to exactly the maximum.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol, Sequence

from cityexplore.core.exceptions import SearchTimeoutError
from cityexplore.models.place import (
    Coordinate,
    EscalationOutcome,
    EscalationResult,
    Place,
    RawGeoElement,
    SearchRequest,
)
from cityexplore.services.result_assembler import assemble_places

logger = logging.getLogger(__name__)


class QueryRacer(Protocol):
    async def race(
        self, origin: Coordinate, radius_m: float, tags: Sequence[str]
    ) -> list[RawGeoElement]: ...


Assembler = Callable[[list[RawGeoElement], SearchRequest, int], list[Place]]


class RadiusEscalationController:
    def __init__(
        self,
        racer: QueryRacer,
        target_count: int = 5,
        max_results: int = 10,
        assembler: Assembler = assemble_places,
    ):
        self.racer = racer
        self.target_count = target_count
        self.max_results = max_results
        self.assembler = assembler

    async def run(
        self,
        request: SearchRequest,
        deadline_seconds: Optional[float] = None,
    ) -> EscalationResult:
        """
        Run the escalation loop, optionally bounded by an overall deadline.

        Raises:
            UpstreamUnavailableError: a mirror race failed; no partial result is returned
            SearchTimeoutError: the deadline expired before a terminal state
        """
        attempts: list[float] = []
        if deadline_seconds is None:
            return await self._escalate(request, attempts)
        try:
            return await asyncio.wait_for(self._escalate(request, attempts), timeout=deadline_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                f"Radius escalation exceeded {deadline_seconds:g}s after radii {attempts}",
                extra={"attempts": attempts},
            )
            raise SearchTimeoutError(deadline_seconds, list(attempts))

    async def _escalate(self, request: SearchRequest, attempts: list[float]) -> EscalationResult:
        radius = request.initial_radius_m
        while True:
            attempts.append(radius)
            logger.info(f"Searching radius {radius:g}m (attempt {len(attempts)})")

            elements = await self.racer.race(request.origin, radius, request.tags)
            places = self.assembler(elements, request, self.max_results)

            if len(places) >= self.target_count:
                logger.info(f"Found {len(places)} places at radius {radius:g}m")
                return EscalationResult(places, radius, attempts, EscalationOutcome.FOUND)

            if radius >= request.max_radius_m:
                logger.info(f"Reached max radius {radius:g}m with {len(places)} places")
                return EscalationResult(places, radius, attempts, EscalationOutcome.EXHAUSTED)

            logger.info(f"Only {len(places)} places at {radius:g}m, widening search")
            radius = min(radius + request.radius_step_m, request.max_radius_m)
