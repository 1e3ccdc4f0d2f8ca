"""
Dependency injection setup for FastAPI.
Owns the shared HTTP client and the explore service for the application lifetime.
"""

from fastapi import Request
from typing import Optional
import logging
import asyncio

import httpx

from cityexplore.config.settings import get_settings
from cityexplore.services.explore_service import ExploreService


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for application services with lifecycle management.
    """

    def __init__(self):
        self._http_client: Optional[httpx.AsyncClient] = None
        self._explore_service: Optional[ExploreService] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    async def initialize_services(self) -> None:
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info("Initializing service container")
            settings = get_settings()
            mirror_count = len(settings.overpass.mirrors)
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(settings.overpass.per_request_timeout_seconds),
                limits=httpx.Limits(max_connections=max(10, mirror_count * 4)),
                follow_redirects=True,
            )
            self._explore_service = ExploreService(http_client=self._http_client, settings=settings)
            self._initialized = True
            logger.info(f"Service container ready with {mirror_count} Overpass mirrors")

    async def cleanup_services(self) -> None:
        logger.info("Cleaning up service container")

        try:
            if self._http_client is not None:
                await self._http_client.aclose()
        except Exception as e:
            logger.error(f"Service container cleanup failed: {e}", exc_info=True)
        finally:
            self._http_client = None
            self._explore_service = None
            self._initialized = False

    def get_explore_service(self) -> ExploreService:
        if not self._initialized or self._explore_service is None:
            raise RuntimeError("Service container not initialized")
        return self._explore_service

    @property
    def initialized(self) -> bool:
        return self._initialized


service_container = ServiceContainer()


def get_explore_service(request: Request) -> ExploreService:
    """FastAPI dependency returning the lifespan-owned ExploreService."""
    container = getattr(request.app.state, "service_container", service_container)
    return container.get_explore_service()
