"""
Classify what a click in a routes file points at.

Each rule is a pure function of the clicked node and its tree returning a
ClickContext or None. Rules are tried in a fixed order and the first match
wins:

    string literal  -> MethodString, then ControllerImportPath
    identifier      -> ControllerVariable, then RoutesModule
"""

from collections.abc import Callable

from route_resolver.config import Settings, get_settings
from route_resolver.core import (
    ClickContext,
    ControllerHandler,
    ControllerImportPath,
    ControllerVariable,
    ControllerVariableHandler,
    HandlerInfo,
    MethodString,
    NodeKind,
    RoutesModule,
    SyntaxNode,
    SyntaxTree,
)

Rule = Callable[[SyntaxNode, SyntaxTree, Settings], ClickContext | None]


def arguments_of(tree: SyntaxTree, call: SyntaxNode) -> list[SyntaxNode]:
    """Argument nodes of a call expression, in order."""
    args = tree.field(call, "arguments")
    if args is None or args.kind != NodeKind.ARGUMENTS:
        return []
    return tree.children(args)


def find_enclosing_call(
    tree: SyntaxTree, node: SyntaxNode, method_names: frozenset[str]
) -> SyntaxNode | None:
    """
    Innermost ancestor call of the form ``<object>.<method>(...)``.

    Only calls whose callee is a member access with one of
    ``method_names`` qualify.
    """
    for ancestor in tree.ancestors(node):
        if ancestor.kind != NodeKind.CALL_EXPRESSION:
            continue
        callee = tree.field(ancestor, "callee")
        if callee is None or callee.kind != NodeKind.MEMBER_ACCESS:
            continue
        if callee.text in method_names:
            return ancestor
    return None


def parse_handler(tree: SyntaxTree, arg: SyntaxNode) -> HandlerInfo | None:
    """
    Classify a routing call's handler argument.

    ``[Controller, 'method']`` and a bare identifier are navigable;
    inline arrow or function handlers are not.
    """
    match arg.kind:
        case NodeKind.ARRAY_LITERAL:
            elements = tree.children(arg)
            if len(elements) != 2:
                return None
            controller, method = elements
            if controller.kind == NodeKind.IDENTIFIER and method.kind == NodeKind.STRING_LITERAL:
                return ControllerHandler(
                    controller_name=controller.text or "",
                    method_name=method.text or "",
                    controller_node=controller.index,
                    method_node=method.index,
                )
            return None
        case NodeKind.IDENTIFIER:
            return ControllerVariableHandler(variable_name=arg.text or "", node=arg.index)
        case _:
            return None


def method_string_rule(
    node: SyntaxNode, tree: SyntaxTree, settings: Settings
) -> ClickContext | None:
    """The string is the second element of ``[Identifier, 'method']``."""
    parent = tree.parent(node)
    if parent is None or parent.kind != NodeKind.ARRAY_LITERAL:
        return None
    elements = tree.children(parent)
    if len(elements) != 2 or elements[1].index != node.index:
        return None
    controller = elements[0]
    if controller.kind != NodeKind.IDENTIFIER or not controller.text:
        return None
    return MethodString(
        controller_name=controller.text,
        method_name=node.text or "",
        origin=node.span,
    )


def controller_import_path_rule(
    node: SyntaxNode, tree: SyntaxTree, settings: Settings
) -> ClickContext | None:
    """The string is itself a controller alias such as ``#controllers/x``."""
    if node.text and node.text.startswith(settings.controller_prefix):
        return ControllerImportPath(import_path=node.text, origin=node.span)
    return None


def controller_variable_rule(
    node: SyntaxNode, tree: SyntaxTree, settings: Settings
) -> ClickContext | None:
    """The identifier is the handler (or its controller) of a routing call."""
    call = find_enclosing_call(tree, node, settings.routing_verbs)
    if call is None:
        return None
    args = arguments_of(tree, call)
    if len(args) < 2:
        return None

    match parse_handler(tree, args[1]):
        case ControllerHandler(controller_name=name, method_name=method, controller_node=index) if (
            index == node.index
        ):
            return ControllerVariable(variable_name=name, method_name=method, origin=node.span)
        case ControllerVariableHandler(variable_name=name, node=index) if index == node.index:
            return ControllerVariable(variable_name=name, origin=node.span)
        case _:
            return None


def routes_module_rule(
    node: SyntaxNode, tree: SyntaxTree, settings: Settings
) -> ClickContext | None:
    """The identifier sits inside a route group call."""
    if not node.text:
        return None
    call = find_enclosing_call(tree, node, frozenset({settings.group_verb}))
    if call is None:
        return None
    return RoutesModule(module_name=node.text, origin=node.span)


STRING_RULES: tuple[Rule, ...] = (method_string_rule, controller_import_path_rule)
IDENTIFIER_RULES: tuple[Rule, ...] = (controller_variable_rule, routes_module_rule)


def classify_click(
    node: SyntaxNode, tree: SyntaxTree, settings: Settings | None = None
) -> ClickContext | None:
    """Classify the clicked node, or return None if it is not navigable."""
    settings = settings or get_settings()

    match node.kind:
        case NodeKind.STRING_LITERAL:
            rules = STRING_RULES
        case NodeKind.IDENTIFIER:
            rules = IDENTIFIER_RULES
        case _:
            return None

    for rule in rules:
        context = rule(node, tree, settings)
        if context is not None:
            return context
    return None
