"""Turns alias strings and controller names into existing file paths."""

import os
import re

from route_resolver.config import Settings, get_settings
from route_resolver.logging import get_logger
from route_resolver.services.alias_table import WILDCARD, AliasTable
from route_resolver.services.workspace import CancellationToken, FileSystem

logger = get_logger(__name__)

# Compiled output extension -> the source extension to try first
_SOURCE_EXTENSIONS = {
    ".js": ".ts",
    ".mjs": ".mts",
    ".cjs": ".cts",
    ".jsx": ".tsx",
}
_KNOWN_EXTENSIONS = frozenset({*_SOURCE_EXTENSIONS, *_SOURCE_EXTENSIONS.values()})

_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def to_snake_case(name: str) -> str:
    """
    Derive a file name from a class name.

    ``UserPostController`` -> ``user_post_controller``. Only lower-to-upper
    boundaries split, so ``HTTPController`` becomes ``httpcontroller``.
    """
    return _CASE_BOUNDARY.sub(r"\1_\2", name).lower()


def candidate_paths(resolved: str) -> list[str]:
    """
    Files that may back a resolved alias path, in probing order.

    A path with a JS/TS extension tries the TypeScript source first, then
    the path itself, then directory index files. An extensionless path
    tries ``.ts``, ``.js`` and the index files.
    """
    stem, ext = os.path.splitext(resolved)
    if ext in _KNOWN_EXTENSIONS:
        candidates = [
            stem + _SOURCE_EXTENSIONS.get(ext, ext),
            resolved,
            os.path.join(stem, "index.ts"),
            os.path.join(stem, "index.js"),
        ]
    else:
        candidates = [
            resolved + ".ts",
            resolved + ".js",
            os.path.join(resolved, "index.ts"),
            os.path.join(resolved, "index.js"),
        ]
    return list(dict.fromkeys(candidates))


class TargetResolver:
    """
    Resolves import paths, controller names and routes modules to files.

    Every existence probe first checks the cancellation token, so a
    cancelled request stops before touching the disk again.
    """

    def __init__(
        self,
        fs: FileSystem,
        settings: Settings | None = None,
        token: CancellationToken | None = None,
    ) -> None:
        self._fs = fs
        self._settings = settings or get_settings()
        self._token = token

    def import_candidates(self, import_path: str, table: AliasTable) -> list[str]:
        """Candidate files for an aliased import path, without probing."""
        exact = table.get(import_path)
        if exact is not None:
            return candidate_paths(self._absolute(table, exact))

        match = table.match_wildcard(import_path)
        if match is None:
            return []
        if WILDCARD in match.pattern:
            resolved = match.pattern.replace(WILDCARD, match.remainder, 1)
            return candidate_paths(self._absolute(table, resolved))

        # Pattern without a wildcard: join the remainder onto its directory
        base = match.pattern.rstrip("/")
        if os.path.splitext(base)[1] in _KNOWN_EXTENSIONS:
            base = os.path.dirname(base)
        return candidate_paths(self._absolute(table, os.path.join(base, match.remainder)))

    def resolve_import(self, import_path: str, table: AliasTable) -> str | None:
        """Resolve an alias such as ``#controllers/user_controller``."""
        path = self._probe(self.import_candidates(import_path, table))
        logger.debug("import_resolved", import_path=import_path, path=path)
        return path

    def controller_candidates(self, controller_name: str, table: AliasTable) -> list[str]:
        """Candidate files for a bare controller class name."""
        base = table.wildcard_base(self._settings.controller_alias)
        if base is None:
            return []
        snake = to_snake_case(controller_name)
        return [
            os.path.join(base, f"{snake}.ts"),
            os.path.join(base, f"{snake}.js"),
            os.path.join(base, controller_name, "index.ts"),
            os.path.join(base, controller_name, "index.js"),
            os.path.join(base, f"{controller_name}.ts"),
            os.path.join(base, f"{controller_name}.js"),
        ]

    def resolve_controller_name(self, controller_name: str, table: AliasTable) -> str | None:
        """Resolve a controller class name through the controllers alias."""
        return self._probe(self.controller_candidates(controller_name, table))

    def resolve_routes_module(
        self, module_name: str, table: AliasTable, source_path: str
    ) -> str | None:
        """
        Resolve a routes module named inside a route group.

        Tries the routes alias directory, then a sibling of the clicked file.
        """
        candidates: list[str] = []
        base = table.wildcard_base(self._settings.routes_alias)
        if base is not None:
            candidates += [
                os.path.join(base, f"{module_name}.ts"),
                os.path.join(base, f"{module_name}.js"),
            ]
        local_dir = os.path.dirname(os.path.abspath(source_path))
        candidates += [
            os.path.join(local_dir, f"{module_name}.ts"),
            os.path.join(local_dir, f"{module_name}.js"),
        ]
        return self._probe(candidates)

    def _probe(self, candidates: list[str]) -> str | None:
        for path in candidates:
            if self._token is not None:
                self._token.raise_if_cancelled()
            if self._fs.is_file(path):
                return path
        return None

    def _absolute(self, table: AliasTable, relative: str) -> str:
        return os.path.normpath(os.path.join(table.project_root, relative))
