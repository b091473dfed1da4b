"""FastAPI application factory."""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI

from route_resolver import __version__
from route_resolver.api.routes import definitions_router, health_router
from route_resolver.config import get_settings
from route_resolver.logging import configure_logging, get_logger
from route_resolver.services import DefinitionService

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # Configure logging first
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        logger.info("application_starting", version=__version__)
        # One service per process: it owns the manifest cache
        app.state.definition_service = DefinitionService(settings=settings)
        yield
        logger.info(
            "application_stopped",
            cached_manifests=len(app.state.definition_service.manifest_cache),
        )

    app = FastAPI(
        title="Route Resolver API",
        description="Go-to-definition for AdonisJS route files",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.include_router(health_router)
    app.include_router(definitions_router, prefix="/api/v1")

    logger.info(
        "application_configured",
        debug=settings.debug,
        manifest_name=settings.manifest_name,
    )

    return app
