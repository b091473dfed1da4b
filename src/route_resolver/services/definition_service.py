"""Go-to-definition orchestration for routes files."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from route_resolver.config import Settings, get_settings
from route_resolver.core import (
    ClickContext,
    ControllerImportPath,
    ControllerVariable,
    MethodString,
    Range,
    ResolvedTarget,
    RoutesModule,
    Span,
    SyntaxTree,
)
from route_resolver.logging import get_logger
from route_resolver.parsers import ParserRegistry, get_parser_registry
from route_resolver.services.alias_table import AliasTable, ManifestCache
from route_resolver.services.classifier import classify_click
from route_resolver.services.locator import find_node_at
from route_resolver.services.member_locator import locate_member
from route_resolver.services.project_root import find_project_root
from route_resolver.services.target_resolver import TargetResolver
from route_resolver.services.tracer import trace_import
from route_resolver.services.workspace import (
    CancellationToken,
    FileSystem,
    OverlayFileSystem,
    ResolutionCancelled,
)

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DefinitionRequest:
    """A click in a routes file."""

    file_path: str
    text: str
    offset: int
    # Text of buffers open in the editor, by absolute path
    open_documents: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class _Resolution:
    """Request-scoped collaborators shared by the resolve steps."""

    request: DefinitionRequest
    tree: SyntaxTree
    table: AliasTable
    fs: FileSystem
    targets: TargetResolver


class DefinitionService:
    """
    Resolves clicks in routes files to controller and routes-module files.

    The service owns the manifest cache, so one instance should live for
    the whole process; everything else is rebuilt per request.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        registry: ParserRegistry | None = None,
        manifest_cache: ManifestCache | None = None,
        fs: FileSystem | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._registry = registry or get_parser_registry()
        self._fs = fs
        self.manifest_cache = manifest_cache or ManifestCache(
            fs=fs, manifest_name=self._settings.manifest_name
        )

    def is_route_file(self, file_path: str) -> bool:
        """True for files under a ``routes`` directory or ``start/routes.*``."""
        parts = os.path.normpath(file_path).replace("\\", "/").split("/")
        if "routes" in parts[:-1]:
            return True
        return len(parts) >= 2 and parts[-2] == "start" and os.path.splitext(parts[-1])[0] == "routes"

    def classify(self, request: DefinitionRequest) -> ClickContext | None:
        """
        Parse the routes file and classify the clicked node.

        Never raises: a failure to parse is logged and ends in None.
        """
        try:
            tree = self._parse(request.file_path, request.text)
            return self._classify(tree, request.offset)
        except Exception:
            logger.exception("classify_failed", file_path=request.file_path, offset=request.offset)
            return None

    def resolve(
        self, request: DefinitionRequest, token: CancellationToken | None = None
    ) -> ResolvedTarget | None:
        """
        Resolve a click to a target location.

        Never raises: every failure, including cancellation, ends in None.
        """
        try:
            return self._resolve(request, token)
        except ResolutionCancelled:
            logger.debug("definition_cancelled", file_path=request.file_path)
            return None
        except Exception:
            logger.exception("definition_failed", file_path=request.file_path, offset=request.offset)
            return None

    def _resolve(
        self, request: DefinitionRequest, token: CancellationToken | None
    ) -> ResolvedTarget | None:
        if self._settings.restrict_to_route_files and not self.is_route_file(request.file_path):
            return None

        tree = self._parse(request.file_path, request.text)
        context = self._classify(tree, request.offset)
        if context is None:
            return None

        fs = self._fs or OverlayFileSystem(request.open_documents)
        project_root = find_project_root(request.file_path, fs, self._settings.manifest_name)
        if project_root is None:
            logger.debug("project_root_not_found", file_path=request.file_path)
            return None

        table = self.manifest_cache.load(project_root)
        if table is None:
            return None

        res = _Resolution(
            request=request,
            tree=tree,
            table=table,
            fs=fs,
            targets=TargetResolver(fs, self._settings, token),
        )

        match context:
            case ControllerVariable(variable_name=name, method_name=method, origin=origin):
                result = self._resolve_controller(res, name, method, origin)
            case MethodString(controller_name=name, method_name=method, origin=origin):
                result = self._resolve_controller(res, name, method, origin)
            case ControllerImportPath(import_path=import_path):
                path = res.targets.resolve_import(import_path, table)
                result = ResolvedTarget(path, Range.top_of_file()) if path else None
            case RoutesModule(module_name=name, origin=origin):
                result = self._resolve_routes_module(res, name, origin)
            case _:
                result = None

        logger.debug(
            "definition_resolved",
            context=type(context).__name__,
            target=result.target_path if result else None,
        )
        return result

    def _resolve_controller(
        self, res: _Resolution, name: str, method: str | None, origin: Span
    ) -> ResolvedTarget | None:
        origin_range: Range | None = None
        path: str | None = None

        import_path = trace_import(res.tree, name)
        if import_path is not None:
            path = res.targets.resolve_import(import_path, res.table)
            if path is not None:
                origin_range = res.tree.range_of(origin)
        if path is None:
            path = res.targets.resolve_controller_name(name, res.table)
        if path is None:
            return None

        target_range = Range.top_of_file()
        if method:
            target_range = self._locate_method(res.fs, path, method) or target_range
        return ResolvedTarget(path, target_range, origin_range)

    def _resolve_routes_module(
        self, res: _Resolution, name: str, origin: Span
    ) -> ResolvedTarget | None:
        import_path = trace_import(res.tree, name)
        if import_path is not None:
            path = res.targets.resolve_import(import_path, res.table)
            if path is not None:
                return ResolvedTarget(path, Range.top_of_file(), res.tree.range_of(origin))

        path = res.targets.resolve_routes_module(name, res.table, res.request.file_path)
        if path is None:
            return None
        return ResolvedTarget(path, Range.top_of_file())

    def _locate_method(self, fs: FileSystem, path: str, method: str) -> Range | None:
        size = fs.size(path)
        if size is not None and size > self._settings.max_file_size_bytes:
            logger.info("target_too_large", path=path, size_bytes=size)
            return None
        text = fs.read_text(path)
        if text is None:
            return None
        return locate_member(self._parse(path, text), method)

    def _parse(self, file_path: str, text: str) -> SyntaxTree:
        parser = self._registry.get_parser_for_file(file_path)
        if parser is None:
            raise ValueError(f"No parser available for {file_path}")
        return parser.parse(text)

    def _classify(self, tree: SyntaxTree, offset: int) -> ClickContext | None:
        node = find_node_at(tree, offset)
        if node is None:
            return None
        return classify_click(node, tree, self._settings)
