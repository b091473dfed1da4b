"""Core domain layer - pure Python business logic."""

from route_resolver.core.models import (
    ClickContext,
    ControllerHandler,
    ControllerImportPath,
    ControllerVariable,
    ControllerVariableHandler,
    HandlerInfo,
    Language,
    MethodString,
    NodeKind,
    Position,
    Range,
    ResolvedTarget,
    RoutesModule,
    Span,
)
from route_resolver.core.tree import SyntaxNode, SyntaxTree

__all__ = [
    "ClickContext",
    "ControllerHandler",
    "ControllerImportPath",
    "ControllerVariable",
    "ControllerVariableHandler",
    "HandlerInfo",
    "Language",
    "MethodString",
    "NodeKind",
    "Position",
    "Range",
    "ResolvedTarget",
    "RoutesModule",
    "Span",
    "SyntaxNode",
    "SyntaxTree",
]
