"""Base parser abstraction for language-specific implementations."""

from abc import ABC, abstractmethod

from tree_sitter import Node

from route_resolver.core import Language, NodeKind, SyntaxNode, SyntaxTree

# tree-sitter node types mapped straight onto a NodeKind
_KIND_BY_TYPE: dict[str, NodeKind] = {
    "program": NodeKind.PROGRAM,
    "identifier": NodeKind.IDENTIFIER,
    "property_identifier": NodeKind.IDENTIFIER,
    "type_identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
    "private_property_identifier": NodeKind.IDENTIFIER,
    "string": NodeKind.STRING_LITERAL,
    "member_expression": NodeKind.MEMBER_ACCESS,
    "arguments": NodeKind.ARGUMENTS,
    "array": NodeKind.ARRAY_LITERAL,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    "function": NodeKind.FUNCTION_EXPRESSION,
    "await_expression": NodeKind.AWAIT_EXPRESSION,
    "statement_block": NodeKind.STATEMENT_BLOCK,
    "return_statement": NodeKind.RETURN_STATEMENT,
    "variable_declarator": NodeKind.VARIABLE_DECLARATION,
    "class_declaration": NodeKind.CLASS_DECLARATION,
    "abstract_class_declaration": NodeKind.CLASS_DECLARATION,
    "class": NodeKind.CLASS_DECLARATION,
    "method_definition": NodeKind.METHOD_DECLARATION,
    "public_field_definition": NodeKind.PROPERTY_DECLARATION,
    "field_definition": NodeKind.PROPERTY_DECLARATION,
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION,
}

# tree-sitter field names carried over onto SyntaxNode.fields
_FIELD_NAMES: dict[str, str] = {
    "name": "name",
    "property": "property",
    "object": "object",
    "value": "value",
    "body": "body",
    "function": "callee",
    "arguments": "arguments",
}

_DECLARATION_KINDS = frozenset({
    NodeKind.CLASS_DECLARATION,
    NodeKind.FUNCTION_DECLARATION,
})

_SKIPPED_TYPES = frozenset({"comment", "html_comment"})


class LanguageParser(ABC):
    """
    Abstract base class for language-specific parsers.

    Each implementation uses a tree-sitter grammar to parse source code
    and converts the concrete syntax tree into a SyntaxTree arena.
    tree-sitter recovers from syntax errors, so malformed input still
    yields a best-effort tree instead of raising.
    """

    @property
    @abstractmethod
    def language(self) -> Language:
        """The language this parser handles."""
        ...

    @property
    @abstractmethod
    def file_extensions(self) -> frozenset[str]:
        """File extensions this parser can handle (e.g., {'.ts'})."""
        ...

    @abstractmethod
    def parse(self, source_code: str) -> SyntaxTree:
        """
        Parse source code into a position-annotated tree.

        Args:
            source_code: The raw source text.

        Returns:
            SyntaxTree whose spans are character offsets into source_code.
        """
        ...

    def _build_tree(self, root: Node, source_code: str, source_bytes: bytes) -> SyntaxTree:
        """Convert a tree-sitter root node into a SyntaxTree."""
        builder = TreeBuilder(source_code, source_bytes)
        return builder.build(root)


class TreeBuilder:
    """
    Converts one tree-sitter tree into arena nodes.

    Conversion is iterative so deeply nested files cannot exhaust the
    interpreter's recursion limit.
    """

    def __init__(self, source_code: str, source_bytes: bytes) -> None:
        self.source_code = source_code
        self.source_bytes = source_bytes
        self._char_offsets = _byte_to_char_table(source_code, source_bytes)

    def build(self, root: Node) -> SyntaxTree:
        records: list[dict] = []
        index_by_id: dict[int, int] = {}
        stack: list[tuple[Node, int | None]] = [(root, None)]

        while stack:
            ts_node, parent_index = stack.pop()
            index = len(records)
            index_by_id[ts_node.id] = index
            kind = self._kind_for(ts_node)
            records.append({
                "node": ts_node,
                "kind": kind,
                "parent": parent_index,
                "children": [],
            })
            if parent_index is not None:
                records[parent_index]["children"].append(index)

            if kind == NodeKind.STRING_LITERAL:
                continue
            children = [c for c in ts_node.named_children if self._keep(c)]
            for child in reversed(children):
                stack.append((child, index))

        nodes = [
            self._make_node(i, record, index_by_id)
            for i, record in enumerate(records)
        ]
        return SyntaxTree(self.source_code, nodes)

    def _make_node(self, index: int, record: dict, index_by_id: dict[int, int]) -> SyntaxNode:
        ts_node: Node = record["node"]
        kind: NodeKind = record["kind"]

        if index == 0:
            start, end = 0, len(self.source_code)
        else:
            start = self._char(ts_node.start_byte)
            end = self._char(ts_node.end_byte)

        fields: dict[str, int] = {}
        for ts_field, name in _FIELD_NAMES.items():
            child = ts_node.child_by_field_name(ts_field)
            if child is not None and child.id in index_by_id:
                fields[name] = index_by_id[child.id]
        # JavaScript field_definition names its key "property"
        if kind == NodeKind.PROPERTY_DECLARATION and "name" not in fields and "property" in fields:
            fields["name"] = fields["property"]

        exported = default_export = False
        if kind in _DECLARATION_KINDS:
            exported, default_export = _export_flags(ts_node)

        return SyntaxNode(
            index=index,
            kind=kind,
            start=start,
            end=end,
            parent=record["parent"],
            children=tuple(record["children"]),
            text=self._text_for(ts_node, kind),
            fields=fields,
            param_count=self._param_count(ts_node, kind),
            exported=exported,
            default_export=default_export,
        )

    def _kind_for(self, ts_node: Node) -> NodeKind:
        match ts_node.type:
            case "call_expression":
                callee = ts_node.child_by_field_name("function")
                if callee is not None and callee.type == "import":
                    return NodeKind.DYNAMIC_IMPORT
                return NodeKind.CALL_EXPRESSION
            case "template_string":
                # Only substitution-free templates behave like plain strings
                if any(c.type == "template_substitution" for c in ts_node.named_children):
                    return NodeKind.OTHER
                return NodeKind.STRING_LITERAL
            case node_type:
                return _KIND_BY_TYPE.get(node_type, NodeKind.OTHER)

    def _keep(self, ts_node: Node) -> bool:
        if ts_node.type in _SKIPPED_TYPES:
            return False
        return not ts_node.is_missing

    def _text_for(self, ts_node: Node, kind: NodeKind) -> str | None:
        match kind:
            case NodeKind.IDENTIFIER:
                return self._node_text(ts_node)
            case NodeKind.STRING_LITERAL:
                return _unquote(self._node_text(ts_node))
            case NodeKind.MEMBER_ACCESS:
                prop = ts_node.child_by_field_name("property")
                return self._node_text(prop) if prop is not None else None
            case NodeKind.CALL_EXPRESSION:
                callee = ts_node.child_by_field_name("function")
                if callee is None:
                    return None
                if callee.type == "member_expression":
                    prop = callee.child_by_field_name("property")
                    return self._node_text(prop) if prop is not None else None
                if callee.type == "identifier":
                    return self._node_text(callee)
                return None
            case (
                NodeKind.VARIABLE_DECLARATION
                | NodeKind.CLASS_DECLARATION
                | NodeKind.METHOD_DECLARATION
                | NodeKind.FUNCTION_DECLARATION
                | NodeKind.PROPERTY_DECLARATION
            ):
                name = ts_node.child_by_field_name("name")
                if name is None:
                    name = ts_node.child_by_field_name("property")
                if name is None:
                    return None
                text = self._node_text(name)
                return _unquote(text) if name.type == "string" else text
            case _:
                return None

    def _param_count(self, ts_node: Node, kind: NodeKind) -> int | None:
        if kind not in (NodeKind.ARROW_FUNCTION, NodeKind.FUNCTION_EXPRESSION):
            return None
        # Single unparenthesised arrow parameter: x => ...
        if ts_node.child_by_field_name("parameter") is not None:
            return 1
        params = ts_node.child_by_field_name("parameters")
        if params is None:
            return 0
        return sum(1 for c in params.named_children if self._keep(c))

    def _node_text(self, ts_node: Node) -> str:
        return self.source_bytes[ts_node.start_byte : ts_node.end_byte].decode("utf-8", errors="replace")

    def _char(self, byte_offset: int) -> int:
        if self._char_offsets is None:
            return byte_offset
        return self._char_offsets[min(byte_offset, len(self._char_offsets) - 1)]


def _byte_to_char_table(source_code: str, source_bytes: bytes) -> list[int] | None:
    """Map UTF-8 byte offsets to character offsets; None for pure ASCII."""
    if len(source_code) == len(source_bytes):
        return None
    table: list[int] = []
    for char_index, char in enumerate(source_code):
        table.extend([char_index] * len(char.encode("utf-8")))
    table.append(len(source_code))
    return table


def _export_flags(ts_node: Node) -> tuple[bool, bool]:
    """Return (exported, default_export) for a declaration node."""
    parent = ts_node.parent
    if parent is None or parent.type != "export_statement":
        return False, False
    is_default = any(child.type == "default" for child in parent.children)
    return True, is_default


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text
