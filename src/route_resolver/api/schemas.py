"""Pydantic schemas for API request/response models."""

from typing import Literal

from pydantic import BaseModel, Field

from route_resolver.core import (
    ClickContext,
    ControllerImportPath,
    ControllerVariable,
    MethodString,
    Range,
    ResolvedTarget,
    RoutesModule,
)


# ============== Request Schemas ==============


class DefinitionRequestBody(BaseModel):
    """A click in a routes file."""

    file_path: str = Field(
        ...,
        description="Absolute path of the routes file being edited",
        examples=["/home/user/app/start/routes.ts"],
    )
    text: str = Field(..., description="Current text of the routes file")
    offset: int = Field(..., ge=0, description="Cursor offset in characters")
    open_documents: dict[str, str] = Field(
        default_factory=dict,
        description="Text of other buffers open in the editor, keyed by absolute path",
    )


# ============== Response Schemas ==============


class PositionResponse(BaseModel):
    """Zero-based line/column position."""

    line: int
    col: int


class RangeResponse(BaseModel):
    start: PositionResponse
    end: PositionResponse

    @classmethod
    def from_range(cls, value: Range) -> "RangeResponse":
        return cls(
            start=PositionResponse(line=value.start.line, col=value.start.col),
            end=PositionResponse(line=value.end.line, col=value.end.col),
        )


class LocationResponse(BaseModel):
    """Resolved definition location."""

    target_path: str
    range: RangeResponse
    origin_range: RangeResponse | None = None

    @classmethod
    def from_target(cls, target: ResolvedTarget) -> "LocationResponse":
        return cls(
            target_path=target.target_path,
            range=RangeResponse.from_range(target.range),
            origin_range=(
                RangeResponse.from_range(target.origin_range) if target.origin_range else None
            ),
        )


class DefinitionResponse(BaseModel):
    """Definition lookup result; ``result`` is null when nothing matched."""

    found: bool
    result: LocationResponse | None = None


class ClickContextResponse(BaseModel):
    """Classified click, flattened for transport."""

    type: Literal["controller_variable", "method_string", "controller_import_path", "routes_module"]
    variable_name: str | None = None
    controller_name: str | None = None
    method_name: str | None = None
    import_path: str | None = None
    module_name: str | None = None

    @classmethod
    def from_context(cls, context: ClickContext) -> "ClickContextResponse":
        match context:
            case ControllerVariable():
                return cls(
                    type="controller_variable",
                    variable_name=context.variable_name,
                    method_name=context.method_name,
                )
            case MethodString():
                return cls(
                    type="method_string",
                    controller_name=context.controller_name,
                    method_name=context.method_name,
                )
            case ControllerImportPath():
                return cls(type="controller_import_path", import_path=context.import_path)
            case RoutesModule():
                return cls(type="routes_module", module_name=context.module_name)
        raise TypeError(f"Unknown click context: {context!r}")


class ContextResponse(BaseModel):
    context: ClickContextResponse | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    cached_manifests: int
    languages: list[str]
