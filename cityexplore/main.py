"""
FastAPI application setup with dependency injection.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from cityexplore.config import get_settings
from cityexplore.core.logging import configure_logging
from cityexplore.core.error_handlers import setup_error_handlers, error_handler
from cityexplore.core.dependencies import service_container
from cityexplore.middleware import RequestContextMiddleware

# Get application settings
settings = get_settings()

configure_logging(settings.log_level.value, settings.log_format)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management with service container.
    Opens the shared Overpass HTTP client on startup and closes it on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    try:
        await service_container.initialize_services()
        app.state.service_container = service_container

        logger.info("Application startup complete")

        yield

    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise

    finally:
        logger.info("Shutting down application")
        await service_container.cleanup_services()
        logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    from cityexplore.api import explore_router, metrics_router
    app.include_router(explore_router)
    app.include_router(metrics_router)

    @app.get("/")
    async def root():
        """Root endpoint for basic health check."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        """Liveness plus the configured mirror count and error statistics."""
        container = getattr(app.state, "service_container", None)
        ready = container is not None and container.initialized
        return {
            "status": "healthy" if ready else "unhealthy",
            "version": settings.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": {
                "overpass_mirrors": len(settings.overpass.mirrors),
                "services_initialized": ready,
            },
            "error_statistics": error_handler.get_error_statistics(),
        }

    return app


# Create application instance
app = create_app()
