"""API route modules."""

from route_resolver.api.routes.definitions import router as definitions_router
from route_resolver.api.routes.health import router as health_router

__all__ = [
    "definitions_router",
    "health_router",
]
