"""
Device-side pieces: the explore HTTP client and the per-session result cache.
"""

from .explore_client import (
    ExploreClient,
    ExploreClientError,
    ExploreResponseError,
    NetworkError,
)
from .result_cache import ClientResultCache, PlaceFetcher

__all__ = [
    "ExploreClient",
    "ExploreClientError",
    "ExploreResponseError",
    "NetworkError",
    "ClientResultCache",
    "PlaceFetcher",
]
