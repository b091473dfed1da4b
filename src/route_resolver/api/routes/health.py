"""Health check endpoints."""

from fastapi import APIRouter

from route_resolver import __version__
from route_resolver.api.dependencies import DefinitionSvc
from route_resolver.api.schemas import HealthResponse
from route_resolver.parsers import get_parser_registry

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(service: DefinitionSvc) -> HealthResponse:
    """Service status, cached manifests and loaded grammars."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        cached_manifests=len(service.manifest_cache),
        languages=[lang.value for lang in get_parser_registry().supported_languages],
    )


@router.get("/live")
def liveness_check() -> dict:
    """Returns 200 if the service is alive."""
    return {"alive": True}
