"""Find the innermost syntax node under a cursor offset."""

from route_resolver.core import SyntaxNode, SyntaxTree


def find_node_at(tree: SyntaxTree, offset: int) -> SyntaxNode | None:
    """
    Return the most specific node whose span contains ``offset``.

    The offset is clamped to ``[0, len(text)]``. Descends into the single
    child containing the offset until a leaf, or a node none of whose
    children contain it, is reached.
    """
    offset = max(0, min(offset, len(tree.source)))
    node = tree.root
    if not node.contains(offset):
        return None

    while True:
        for child in tree.children(node):
            if child.contains(offset):
                node = child
                break
        else:
            return node
