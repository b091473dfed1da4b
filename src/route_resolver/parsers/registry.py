"""Parser registry for managing language-specific parsers."""

from functools import lru_cache

from route_resolver.core import Language
from route_resolver.logging import get_logger
from route_resolver.parsers.base import LanguageParser
from route_resolver.parsers.javascript_parser import JavaScriptParser
from route_resolver.parsers.typescript_parser import TsxParser, TypeScriptParser

logger = get_logger(__name__)


class ParserRegistry:
    """
    Registry of language-specific parsers.

    Provides factory methods for obtaining the appropriate parser
    based on language or file extension.
    """

    def __init__(self, default_language: Language = Language.TYPESCRIPT) -> None:
        self._parsers: dict[Language, LanguageParser] = {}
        self._extension_map: dict[str, Language] = {}
        self._default_language = default_language

    def register(self, parser: LanguageParser) -> None:
        """Register a parser for its language."""
        self._parsers[parser.language] = parser
        for ext in parser.file_extensions:
            self._extension_map[ext] = parser.language
        logger.debug(
            "parser_registered",
            language=parser.language.value,
            extensions=sorted(parser.file_extensions),
        )

    def get_parser_for_file(self, file_path: str) -> LanguageParser | None:
        """
        Get parser based on file extension.

        Files with an unknown extension (e.g. unsaved editor buffers) get
        the default language's parser.
        """
        language = self._extension_map.get(self._get_extension(file_path))
        if language is None:
            language = self._default_language
        return self._parsers.get(language)

    @property
    def supported_languages(self) -> list[Language]:
        """List of all supported languages."""
        return list(self._parsers.keys())

    def _get_extension(self, file_path: str) -> str:
        """Extract file extension from path."""
        parts = file_path.replace("\\", "/").rsplit("/", 1)[-1].split(".")
        if len(parts) >= 2:
            return f".{parts[-1].lower()}"
        return ""


def _create_default_registry() -> ParserRegistry:
    """Create and configure the default parser registry."""
    registry = ParserRegistry()

    registry.register(TypeScriptParser())
    registry.register(TsxParser())
    registry.register(JavaScriptParser())

    logger.info(
        "parser_registry_initialized",
        languages=[lang.value for lang in registry.supported_languages],
    )

    return registry


@lru_cache
def get_parser_registry() -> ParserRegistry:
    """Get the singleton parser registry instance."""
    return _create_default_registry()
