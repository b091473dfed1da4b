"""Source parsers using tree-sitter for syntax trees."""

from route_resolver.parsers.base import LanguageParser
from route_resolver.parsers.registry import ParserRegistry, get_parser_registry

__all__ = [
    "LanguageParser",
    "ParserRegistry",
    "get_parser_registry",
]
