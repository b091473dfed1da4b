"""Locate a method or function declaration inside a target file."""

from dataclasses import dataclass

from route_resolver.core import NodeKind, Range, SyntaxNode, SyntaxTree

# Lower value wins
PRIORITY_DEFAULT_EXPORT_METHOD = 1
PRIORITY_CLASS_MEMBER = 2
PRIORITY_EXPORTED_FUNCTION = 3

_SCOPE_KINDS = frozenset({
    NodeKind.CLASS_DECLARATION,
    NodeKind.METHOD_DECLARATION,
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.ARROW_FUNCTION,
})


@dataclass(frozen=True, slots=True)
class MemberCandidate:
    """A declaration named like the requested member."""

    node: SyntaxNode
    name_node: SyntaxNode
    priority: int


def collect_candidates(tree: SyntaxTree, member_name: str) -> list[MemberCandidate]:
    """All declarations of ``member_name`` in document order, with priorities."""
    candidates: list[MemberCandidate] = []
    for node in tree.walk():
        if node.text != member_name:
            continue
        name_node = tree.field(node, "name")
        if name_node is None:
            continue

        priority: int | None = None
        match node.kind:
            case NodeKind.METHOD_DECLARATION:
                priority = _method_priority(tree, node)
            case NodeKind.PROPERTY_DECLARATION:
                priority = PRIORITY_CLASS_MEMBER
            case NodeKind.FUNCTION_DECLARATION if node.exported and _is_top_level(tree, node):
                priority = PRIORITY_EXPORTED_FUNCTION

        if priority is not None:
            candidates.append(MemberCandidate(node=node, name_node=name_node, priority=priority))
    return candidates


def locate_member(tree: SyntaxTree, member_name: str) -> Range | None:
    """
    Range of the best declaration name token for ``member_name``.

    A method of the default-exported class beats methods of other classes
    and class properties, which beat exported top-level functions. Ties go
    to the first declaration in the file. Returns None when nothing matches.
    """
    candidates = collect_candidates(tree, member_name)
    if not candidates:
        return None
    # min() keeps the first of equal priorities
    best = min(candidates, key=lambda c: c.priority)
    return tree.range_of(best.name_node.span)


def _method_priority(tree: SyntaxTree, method: SyntaxNode) -> int:
    for ancestor in tree.ancestors(method):
        if ancestor.kind == NodeKind.CLASS_DECLARATION:
            if ancestor.exported and ancestor.default_export:
                return PRIORITY_DEFAULT_EXPORT_METHOD
            return PRIORITY_CLASS_MEMBER
    return PRIORITY_CLASS_MEMBER


def _is_top_level(tree: SyntaxTree, node: SyntaxNode) -> bool:
    return not any(a.kind in _SCOPE_KINDS for a in tree.ancestors(node))
