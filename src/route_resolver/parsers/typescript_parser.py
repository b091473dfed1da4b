"""TypeScript language parsers using tree-sitter."""

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser

from route_resolver.core import Language as CodeLanguage, SyntaxTree
from route_resolver.parsers.base import LanguageParser


class TypeScriptParser(LanguageParser):
    """
    Parser for TypeScript source code.

    Route files and controllers of an AdonisJS application are usually
    TypeScript, so this parser also serves files with unknown extensions.
    """

    def __init__(self) -> None:
        self._language = Language(ts_typescript.language_typescript())
        self._parser = Parser(self._language)

    @property
    def language(self) -> CodeLanguage:
        return CodeLanguage.TYPESCRIPT

    @property
    def file_extensions(self) -> frozenset[str]:
        return frozenset({".ts", ".mts", ".cts"})

    def parse(self, source_code: str) -> SyntaxTree:
        """Parse TypeScript source code into a SyntaxTree."""
        source_bytes = source_code.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        return self._build_tree(tree.root_node, source_code, source_bytes)


class TsxParser(LanguageParser):
    """Parser for TypeScript files containing JSX."""

    def __init__(self) -> None:
        self._language = Language(ts_typescript.language_tsx())
        self._parser = Parser(self._language)

    @property
    def language(self) -> CodeLanguage:
        return CodeLanguage.TSX

    @property
    def file_extensions(self) -> frozenset[str]:
        return frozenset({".tsx"})

    def parse(self, source_code: str) -> SyntaxTree:
        source_bytes = source_code.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        return self._build_tree(tree.root_node, source_code, source_bytes)
