"""
Per-session cache of discovered places.

A ClientResultCache belongs to exactly one device session. It decides when
movement warrants a new search, merges new places by PlaceKey, and evicts the
places farthest from the device once the capacity bound is exceeded.

Cached places keep the distance and bearing measured when they were first
discovered; only ordering and eviction use live distance from the latest
device position.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from cityexplore.client.explore_client import ExploreClientError
from cityexplore.config.settings import Settings, get_settings
from cityexplore.core.geo import distance_meters
from cityexplore.models.place import Coordinate, Place, PlaceKey

logger = logging.getLogger(__name__)

PlaceFetcher = Callable[[Coordinate], Awaitable[list[Place]]]

REFETCH_THRESHOLD_M = 300.0
CAPACITY_MAX = 150


class ClientResultCache:
    def __init__(
        self,
        fetcher: PlaceFetcher,
        refetch_threshold_m: float = REFETCH_THRESHOLD_M,
        capacity_max: int = CAPACITY_MAX,
    ):
        if capacity_max < 1:
            raise ValueError("capacity_max must be at least 1")
        self._fetcher = fetcher
        self.refetch_threshold_m = refetch_threshold_m
        self.capacity_max = capacity_max
        self._places: dict[PlaceKey, Place] = {}
        self._last_fetch_origin: Optional[Coordinate] = None
        self._current_origin: Optional[Coordinate] = None
        self._in_flight = False
        self._generation = 0
        self.last_error: Optional[str] = None

    @classmethod
    def from_settings(cls, fetcher: PlaceFetcher, settings: Optional[Settings] = None) -> "ClientResultCache":
        cache_settings = (settings or get_settings()).client_cache
        return cls(
            fetcher,
            refetch_threshold_m=cache_settings.refetch_threshold_m,
            capacity_max=cache_settings.capacity_max,
        )

    @property
    def last_fetch_origin(self) -> Optional[Coordinate]:
        return self._last_fetch_origin

    @property
    def is_loading(self) -> bool:
        return self._in_flight

    def should_fetch(self, origin: Coordinate) -> bool:
        if self._last_fetch_origin is None:
            return True
        return distance_meters(self._last_fetch_origin, origin) >= self.refetch_threshold_m

    async def on_location_update(self, new_origin: Coordinate) -> bool:
        """
        Handle a device location update.

        Returns True when a search was issued for this update. Updates that
        arrive while a search is in flight never start a second one.
        """
        self._current_origin = new_origin
        if self._in_flight:
            logger.debug("Search already in flight, ignoring location update")
            return False
        if not self.should_fetch(new_origin):
            return False

        self._in_flight = True
        generation = self._generation
        try:
            places = await self._fetcher(new_origin)
        except ExploreClientError as e:
            # lastFetchOrigin stays put so the next qualifying move retries
            self.last_error = str(e)
            logger.warning(f"Place search failed, will retry on next move: {e}")
            return True
        finally:
            self._in_flight = False

        if generation != self._generation:
            logger.debug("Cache was reset during search, dropping results")
            return True

        added = self._merge(places)
        evicted = self._evict(new_origin)
        self._last_fetch_origin = new_origin
        self.last_error = None
        logger.info(
            f"Merged {added} new places ({evicted} evicted), {len(self._places)} cached"
        )
        return True

    def _merge(self, places: list[Place]) -> int:
        added = 0
        for place in places:
            key = place.key
            if key not in self._places:
                self._places[key] = place
                added += 1
        return added

    def _evict(self, origin: Coordinate) -> int:
        overflow = len(self._places) - self.capacity_max
        if overflow <= 0:
            return 0
        farthest = sorted(
            self._places,
            key=lambda k: distance_meters(origin, self._places[k].coordinate),
            reverse=True,
        )[:overflow]
        for key in farthest:
            del self._places[key]
        return overflow

    def places(self) -> list[Place]:
        """Cached places, nearest first relative to the latest device position."""
        if self._current_origin is None:
            return list(self._places.values())
        origin = self._current_origin
        return sorted(self._places.values(), key=lambda p: distance_meters(origin, p.coordinate))

    def nearest(self) -> Optional[Place]:
        places = self.places()
        return places[0] if places else None

    def reset(self) -> None:
        """Forget everything, e.g. on logout or navigation away from the map."""
        self._generation += 1
        self._places.clear()
        self._last_fetch_origin = None
        self._current_origin = None
        self.last_error = None

    def __len__(self) -> int:
        return len(self._places)

    def __contains__(self, key: PlaceKey) -> bool:
        return key in self._places
