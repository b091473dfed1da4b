"""Definition lookup endpoints."""

from fastapi import APIRouter

from route_resolver.api.dependencies import DefinitionSvc
from route_resolver.api.schemas import (
    ClickContextResponse,
    ContextResponse,
    DefinitionRequestBody,
    DefinitionResponse,
    LocationResponse,
)
from route_resolver.services import DefinitionRequest

router = APIRouter(tags=["definitions"])


def _to_request(body: DefinitionRequestBody) -> DefinitionRequest:
    return DefinitionRequest(
        file_path=body.file_path,
        text=body.text,
        offset=body.offset,
        open_documents=body.open_documents,
    )


@router.post("/definition", response_model=DefinitionResponse)
def find_definition(body: DefinitionRequestBody, service: DefinitionSvc) -> DefinitionResponse:
    """
    Resolve the symbol under the cursor to its definition.

    Always answers 200; ``found`` is false when the click is not on a
    controller, method, controller import path or routes module, or when
    the target cannot be located.
    """
    target = service.resolve(_to_request(body))
    if target is None:
        return DefinitionResponse(found=False)
    return DefinitionResponse(found=True, result=LocationResponse.from_target(target))


@router.post("/context", response_model=ContextResponse)
def classify_click(body: DefinitionRequestBody, service: DefinitionSvc) -> ContextResponse:
    """Report how the click was classified, without touching the file system."""
    context = service.classify(_to_request(body))
    if context is None:
        return ContextResponse()
    return ContextResponse(context=ClickContextResponse.from_context(context))
