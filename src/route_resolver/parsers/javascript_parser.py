"""JavaScript language parser using tree-sitter."""

import tree_sitter_javascript as ts_javascript
from tree_sitter import Language, Parser

from route_resolver.core import Language as CodeLanguage, SyntaxTree
from route_resolver.parsers.base import LanguageParser


class JavaScriptParser(LanguageParser):
    """
    Parser for JavaScript source code.

    Used for compiled or hand-written `.js` controllers and route files.
    """

    def __init__(self) -> None:
        self._language = Language(ts_javascript.language())
        self._parser = Parser(self._language)

    @property
    def language(self) -> CodeLanguage:
        return CodeLanguage.JAVASCRIPT

    @property
    def file_extensions(self) -> frozenset[str]:
        return frozenset({".js", ".mjs", ".cjs", ".jsx"})

    def parse(self, source_code: str) -> SyntaxTree:
        """Parse JavaScript source code into a SyntaxTree."""
        source_bytes = source_code.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        return self._build_tree(tree.root_node, source_code, source_bytes)
