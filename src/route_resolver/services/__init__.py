"""Resolution services."""

from route_resolver.services.alias_table import AliasTable, ManifestCache
from route_resolver.services.definition_service import DefinitionRequest, DefinitionService
from route_resolver.services.target_resolver import TargetResolver
from route_resolver.services.workspace import (
    CancellationToken,
    FileSystem,
    OverlayFileSystem,
    ResolutionCancelled,
)

__all__ = [
    "AliasTable",
    "CancellationToken",
    "DefinitionRequest",
    "DefinitionService",
    "FileSystem",
    "ManifestCache",
    "OverlayFileSystem",
    "ResolutionCancelled",
    "TargetResolver",
]
