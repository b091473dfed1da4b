"""FastAPI dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from route_resolver.services import DefinitionService


def get_definition_service(request: Request) -> DefinitionService:
    """The process-wide service created by the application lifespan."""
    return request.app.state.definition_service


DefinitionSvc = Annotated[DefinitionService, Depends(get_definition_service)]
