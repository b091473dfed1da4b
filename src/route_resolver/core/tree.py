"""Position-annotated syntax tree stored as an index-addressed arena."""

from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass, field

from route_resolver.core.models import NodeKind, Position, Range, Span


@dataclass(frozen=True, slots=True, eq=False)
class SyntaxNode:
    """
    A node of a parsed source file.

    Nodes refer to their parent and children by index into the owning
    SyntaxTree, so a tree holds no reference cycles.
    """

    index: int
    kind: NodeKind
    start: int
    end: int
    parent: int | None
    children: tuple[int, ...] = ()
    # Identifier text, literal value, callee/property name or declared name
    text: str | None = None
    # Named sub-nodes: name, value, body, callee, arguments, object, property
    fields: dict[str, int] = field(default_factory=dict)
    param_count: int | None = None
    exported: bool = False
    default_export: bool = False

    @property
    def span(self) -> Span:
        return Span(self.start, self.end)

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


class SyntaxTree:
    """
    Read-only arena of SyntaxNodes for one source text.

    Index 0 is the root. Nodes are stored in document (pre-)order, so
    iterating ``nodes`` visits declarations in the order they appear.
    """

    def __init__(self, source: str, nodes: list[SyntaxNode]) -> None:
        if not nodes:
            raise ValueError("SyntaxTree requires at least a root node")
        self.source = source
        self._nodes = tuple(nodes)
        self._line_starts = [0]
        for i, char in enumerate(source):
            if char == "\n":
                self._line_starts.append(i + 1)

    @property
    def root(self) -> SyntaxNode:
        return self._nodes[0]

    @property
    def nodes(self) -> tuple[SyntaxNode, ...]:
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, index: int) -> SyntaxNode:
        return self._nodes[index]

    def parent(self, node: SyntaxNode) -> SyntaxNode | None:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def children(self, node: SyntaxNode) -> list[SyntaxNode]:
        return [self._nodes[i] for i in node.children]

    def field(self, node: SyntaxNode, name: str) -> SyntaxNode | None:
        """Get a named sub-node, or None when the source lacks it."""
        index = node.fields.get(name)
        if index is None:
            return None
        return self._nodes[index]

    def ancestors(self, node: SyntaxNode) -> Iterator[SyntaxNode]:
        """Yield the node's ancestors, innermost first, ending at the root."""
        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield every node in document order."""
        return iter(self._nodes)

    def text_of(self, node: SyntaxNode) -> str:
        """Raw source text covered by a node."""
        return self.source[node.start : node.end]

    def position_at(self, offset: int) -> Position:
        """Convert a character offset to a zero-based line/column."""
        offset = max(0, min(offset, len(self.source)))
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])

    def range_of(self, span: Span) -> Range:
        return Range(self.position_at(span.start), self.position_at(span.end))
