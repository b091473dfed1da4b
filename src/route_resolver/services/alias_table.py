"""Project import aliases read from the manifest's ``imports`` field."""

import json
import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from route_resolver.logging import get_logger
from route_resolver.services.workspace import FileSystem

logger = get_logger(__name__)

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class WildcardMatch:
    """A wildcard alias key that matched an import path."""

    key: str
    pattern: str
    remainder: str


class AliasTable:
    """
    Immutable alias -> path-pattern mapping for one project.

    Keys are exact (``#start/kernel``) or contain one ``*`` segment
    (``#controllers/*``); patterns are relative to ``project_root``.
    """

    def __init__(self, project_root: str, entries: Mapping[str, str] | None = None) -> None:
        self.project_root = project_root
        self._entries = MappingProxyType(dict(entries or {}))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def match_wildcard(self, import_path: str) -> WildcardMatch | None:
        """
        Find the wildcard key matching an import path.

        When several keys match, the one with the longest literal prefix
        wins, as Node.js does for ``imports`` subpath patterns.
        """
        best: WildcardMatch | None = None
        best_prefix = -1
        for key, pattern in self._entries.items():
            if key.count(WILDCARD) != 1:
                continue
            prefix, suffix = key.split(WILDCARD)
            if not import_path.startswith(prefix) or not import_path.endswith(suffix):
                continue
            if len(import_path) < len(prefix) + len(suffix):
                continue
            if len(prefix) > best_prefix:
                remainder = import_path[len(prefix) : len(import_path) - len(suffix)]
                best = WildcardMatch(key=key, pattern=pattern, remainder=remainder)
                best_prefix = len(prefix)
        return best

    def wildcard_base(self, key: str) -> str | None:
        """
        Absolute directory a wildcard alias points into.

        ``"./app/controllers/*.js"`` -> ``<root>/app/controllers``.
        """
        pattern = self.get(key)
        if pattern is None:
            return None
        if WILDCARD in pattern:
            base = pattern.split(WILDCARD, 1)[0]
        else:
            base = pattern
        return os.path.normpath(os.path.join(self.project_root, base))


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    mtime: int
    table: AliasTable


class ManifestCache:
    """
    Caches each project's AliasTable keyed by manifest path.

    An entry is reused while the manifest's modification time is unchanged
    and replaced as a whole when it advances. Entries are immutable, so
    two requests racing on a refresh each see one complete table.
    """

    def __init__(self, fs: FileSystem | None = None, manifest_name: str = "package.json") -> None:
        self._fs = fs or FileSystem()
        self._manifest_name = manifest_name
        self._entries: dict[str, _CacheEntry] = {}
        self.loads = 0

    def __len__(self) -> int:
        return len(self._entries)

    def load(self, project_root: str) -> AliasTable | None:
        """
        Get the alias table for a project root.

        Returns None when the manifest does not exist. An unreadable or
        malformed manifest yields an empty table. The manifest is always
        read from disk, never from an open editor buffer, so a cached
        table matches the file as of its recorded timestamp.
        """
        fs = self._fs
        manifest_path = os.path.abspath(os.path.join(project_root, self._manifest_name))
        mtime = fs.mtime(manifest_path)
        if mtime is None:
            logger.debug("manifest_missing", path=manifest_path)
            return None

        cached = self._entries.get(manifest_path)
        if cached is not None and cached.mtime == mtime:
            return cached.table

        content = fs.read_text(manifest_path)
        if content is None:
            # Not cached, so the next request retries the read
            logger.warning("manifest_unreadable", path=manifest_path)
            return AliasTable(project_root)

        self.loads += 1
        table = AliasTable(project_root, parse_imports(content, manifest_path))
        self._entries[manifest_path] = _CacheEntry(mtime=mtime, table=table)
        logger.debug("manifest_loaded", path=manifest_path, aliases=len(table))
        return table


def parse_imports(content: str, manifest_path: str = "<manifest>") -> dict[str, str]:
    """Extract the string-to-string ``imports`` mapping from manifest JSON."""
    try:
        data = json.loads(content)
    except ValueError as e:
        logger.warning("manifest_invalid_json", path=manifest_path, error=str(e))
        return {}

    if not isinstance(data, dict):
        return {}
    imports = data.get("imports")
    if not isinstance(imports, dict):
        return {}
    return {
        key: value
        for key, value in imports.items()
        if isinstance(key, str) and isinstance(value, str)
    }
