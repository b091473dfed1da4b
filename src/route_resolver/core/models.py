"""Core domain models - pure Python dataclasses with no framework dependencies."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Self


class Language(StrEnum):
    """Source languages the syntax indexer understands."""

    TYPESCRIPT = "typescript"
    TSX = "tsx"
    JAVASCRIPT = "javascript"


class NodeKind(StrEnum):
    """Closed set of node shapes the resolver distinguishes."""

    PROGRAM = "program"
    IDENTIFIER = "identifier"
    STRING_LITERAL = "string_literal"
    CALL_EXPRESSION = "call_expression"
    DYNAMIC_IMPORT = "dynamic_import"  # import('...')
    MEMBER_ACCESS = "member_access"  # object.property
    ARGUMENTS = "arguments"
    ARRAY_LITERAL = "array_literal"
    ARROW_FUNCTION = "arrow_function"
    FUNCTION_EXPRESSION = "function_expression"
    AWAIT_EXPRESSION = "await_expression"
    STATEMENT_BLOCK = "statement_block"
    RETURN_STATEMENT = "return_statement"
    VARIABLE_DECLARATION = "variable_declaration"
    CLASS_DECLARATION = "class_declaration"
    METHOD_DECLARATION = "method_declaration"
    FUNCTION_DECLARATION = "function_declaration"
    PROPERTY_DECLARATION = "property_declaration"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)`` in a source text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("Span start must be >= 0")
        if self.end < self.start:
            raise ValueError("Span end must be >= start")

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based line/column position."""

    line: int
    col: int


@dataclass(frozen=True, slots=True)
class Range:
    """A start/end pair of positions."""

    start: Position
    end: Position

    @classmethod
    def top_of_file(cls) -> Self:
        """The (0,0) range used when no specific symbol is known."""
        origin = Position(0, 0)
        return cls(origin, origin)


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    """
    Where a click resolves to.

    ``origin_range`` is only set when resolution followed a variable
    bound to a dynamic import, so the host can highlight the clicked token.
    """

    target_path: str
    range: Range
    origin_range: Range | None = None


# ============== Click contexts ==============


@dataclass(frozen=True, slots=True)
class ControllerVariable:
    """Cursor on an identifier naming a controller in a routing call."""

    variable_name: str
    origin: Span
    method_name: str | None = None


@dataclass(frozen=True, slots=True)
class MethodString:
    """Cursor on the method string of a ``[Controller, 'method']`` tuple."""

    controller_name: str
    method_name: str
    origin: Span


@dataclass(frozen=True, slots=True)
class ControllerImportPath:
    """Cursor on a string literal that is a controller alias path."""

    import_path: str
    origin: Span


@dataclass(frozen=True, slots=True)
class RoutesModule:
    """Cursor on an identifier inside a route group naming a routes file."""

    module_name: str
    origin: Span


ClickContext = ControllerVariable | MethodString | ControllerImportPath | RoutesModule


# ============== Handler shapes ==============


@dataclass(frozen=True, slots=True)
class ControllerHandler:
    """Inline ``[Controller, 'method']`` handler argument."""

    controller_name: str
    method_name: str
    controller_node: int
    method_node: int


@dataclass(frozen=True, slots=True)
class ControllerVariableHandler:
    """Bare identifier handler argument."""

    variable_name: str
    node: int


HandlerInfo = ControllerHandler | ControllerVariableHandler
