# API endpoints and routers

from .explore_endpoints import router as explore_router
from .metrics_endpoints import router as metrics_router

__all__ = [
    "explore_router",
    "metrics_router",
]
