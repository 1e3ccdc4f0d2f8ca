"""
HTTP client for the explore endpoint, used by device-side sessions.
"""

import logging
from typing import Optional, Sequence

import httpx

from cityexplore.config.settings import Settings, get_settings
from cityexplore.core.exceptions import ValidationError
from cityexplore.models.place import Coordinate, Place

logger = logging.getLogger(__name__)


class ExploreClientError(Exception):
    """Base class for explore client failures."""


class NetworkError(ExploreClientError):
    """The explore endpoint could not be reached (connect, read or timeout)."""


class ExploreResponseError(ExploreClientError):
    """The endpoint answered with an error envelope or an unreadable body."""

    def __init__(self, message: str, status_code: int, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class ExploreClient:
    """Posts explore requests and decodes the returned places."""

    def __init__(
        self,
        base_url: str,
        osm_tags: Sequence[str],
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 30.0,
        radius_m: float = 3000.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.osm_tags = list(osm_tags)
        self.http_client = http_client
        self.timeout_seconds = timeout_seconds
        self.radius_m = radius_m

    @classmethod
    def from_settings(
        cls,
        base_url: str,
        osm_tags: Sequence[str],
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None,
    ) -> "ExploreClient":
        settings = settings or get_settings()
        return cls(
            base_url,
            osm_tags,
            http_client=http_client,
            timeout_seconds=settings.client_cache.request_timeout_seconds,
            radius_m=settings.search.default_radius_m,
        )

    async def __call__(self, origin: Coordinate) -> list[Place]:
        return await self.search(origin)

    async def search(self, origin: Coordinate) -> list[Place]:
        """
        Run one explore request around ``origin``.

        Raises:
            NetworkError: on transport failure
            ExploreResponseError: on an error envelope or malformed response
        """
        body = {
            "currentLat": origin.lat,
            "currentLng": origin.lng,
            "radius": self.radius_m,
            "osmTags": self.osm_tags,
        }
        try:
            if self.http_client is not None:
                response = await self._post(self.http_client, body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await self._post(client, body)
        except httpx.TransportError as e:
            logger.warning(f"Explore request failed: {e!r}")
            raise NetworkError(str(e) or type(e).__name__) from e

        try:
            data = response.json()
        except ValueError:
            raise ExploreResponseError(
                "Explore endpoint returned a non-JSON body", response.status_code
            )

        if not isinstance(data, dict) or data.get("status") != "success":
            data = data if isinstance(data, dict) else {}
            raise ExploreResponseError(
                data.get("message") or "Failed to fetch places",
                response.status_code,
                data.get("detail"),
            )

        try:
            return [
                Place(
                    name=item["name"],
                    coordinate=Coordinate(item["lat"], item["lng"]),
                    distance_m=float(item["distance"]),
                    bearing_deg=float(item["bearing"]),
                    category=item.get("category") or "",
                )
                for item in data.get("places") or []
            ]
        except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as e:
            raise ExploreResponseError(
                "Explore endpoint returned a malformed place", response.status_code, str(e)
            ) from e

    async def _post(self, client: httpx.AsyncClient, body: dict) -> httpx.Response:
        return await client.post(
            f"{self.base_url}/api/explore", json=body, timeout=self.timeout_seconds
        )
