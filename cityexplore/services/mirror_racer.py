"""
Mirror query racer.

Sends one Overpass query to every configured mirror at once and keeps the
first structurally valid answer. Slower requests are cancelled as soon as a
winner is known so their connections go back to the pool.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence

import httpx

from cityexplore.core.exceptions import UpstreamUnavailableError
from cityexplore.core.metrics_explore import (
    record_mirror_failure,
    record_mirror_win,
    record_upstream_outage,
)
from cityexplore.models.place import Coordinate, RawGeoElement
from cityexplore.services.overpass_query import build_around_query

logger = logging.getLogger(__name__)


class MirrorResponseError(Exception):
    """A single mirror answered, but not with a usable payload."""


class MirrorQueryRacer:
    def __init__(
        self,
        mirrors: Sequence[str],
        http_client: Optional[httpx.AsyncClient] = None,
        per_request_timeout: float = 8.0,
        query_timeout_seconds: int = 20,
        user_agent: str = "CityExplorationHackathonApp/1.0",
    ):
        if not mirrors:
            raise ValueError("MirrorQueryRacer needs at least one mirror")
        self.mirrors = list(mirrors)
        self.http_client = http_client
        self.per_request_timeout = per_request_timeout
        self.query_timeout_seconds = query_timeout_seconds
        self.user_agent = user_agent

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": self.user_agent,
        }

    async def race(
        self,
        origin: Coordinate,
        radius_m: float,
        tags: Sequence[str],
    ) -> list[RawGeoElement]:
        """
        Query every mirror concurrently and return the first valid element list.

        Raises:
            UpstreamUnavailableError: if every mirror failed or timed out
        """
        query = build_around_query(origin, radius_m, tags, self.query_timeout_seconds)
        if self.http_client is not None:
            return await self._race(self.http_client, query, radius_m)
        async with httpx.AsyncClient(timeout=self.per_request_timeout) as client:
            return await self._race(client, query, radius_m)

    async def _race(
        self,
        client: httpx.AsyncClient,
        query: str,
        radius_m: float,
    ) -> list[RawGeoElement]:
        tasks = {
            asyncio.create_task(self._query_mirror(client, url, query)): url
            for url in self.mirrors
        }
        pending = set(tasks)
        failures: list[str] = []
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                # Several may finish in the same tick; prefer configured mirror order.
                for task in sorted(done, key=lambda t: self.mirrors.index(tasks[t])):
                    url = tasks[task]
                    exc = task.exception()
                    if exc is None:
                        elements = task.result()
                        record_mirror_win(url)
                        logger.info(
                            f"Overpass mirror won (radius {radius_m:g}m): {url}",
                            extra={"mirror": url, "radius_m": radius_m, "elements": len(elements)},
                        )
                        return [RawGeoElement.from_overpass(e) for e in elements if isinstance(e, dict)]
                    record_mirror_failure(url)
                    failures.append(f"{url}: {self._describe(exc)}")
                    logger.warning(
                        f"Overpass mirror failed (radius {radius_m:g}m): {url}: {self._describe(exc)}",
                        extra={"mirror": url, "radius_m": radius_m},
                    )
        finally:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        record_upstream_outage()
        logger.error(
            f"All {len(self.mirrors)} Overpass mirrors failed at radius {radius_m:g}m",
            extra={"radius_m": radius_m, "failures": failures},
        )
        raise UpstreamUnavailableError(radius_m, failures)

    async def _query_mirror(
        self,
        client: httpx.AsyncClient,
        url: str,
        query: str,
    ) -> list[dict[str, Any]]:
        logger.info(f"Querying Overpass mirror: {url}", extra={"mirror": url})
        response = await asyncio.wait_for(
            client.post(
                url,
                data={"data": query},
                headers=self._headers(),
                timeout=self.per_request_timeout,
            ),
            timeout=self.per_request_timeout,
        )
        if not response.is_success:
            raise MirrorResponseError(
                f"status {response.status_code}: {response.text[:200]}"
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise MirrorResponseError(f"invalid JSON: {e}") from e
        if not isinstance(payload, dict) or not isinstance(payload.get("elements"), list):
            raise MirrorResponseError("response has no 'elements' list")
        return payload["elements"]

    def _describe(self, exc: BaseException) -> str:
        if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)):
            return f"timed out after {self.per_request_timeout:g}s"
        return str(exc) or type(exc).__name__
