"""Trace a variable to the dynamic import it is bound to."""

from route_resolver.core import NodeKind, SyntaxNode, SyntaxTree


def trace_import(tree: SyntaxTree, variable_name: str) -> str | None:
    """
    Find the module path a variable lazily imports.

    Recognises, at any nesting depth::

        const UsersController = () => import('#controllers/users_controller')
        const UsersController = function () { return import('...') }
        const routes = await import('#routes/users')

    The first declaration of the name in document order decides; there is
    no scope analysis, so a shadowing declaration later in the file is
    ignored.
    """
    for node in tree.walk():
        if node.kind != NodeKind.VARIABLE_DECLARATION or node.text != variable_name:
            continue
        name = tree.field(node, "name")
        if name is None or name.kind != NodeKind.IDENTIFIER:
            continue
        value = tree.field(node, "value")
        if value is None:
            return None
        return _import_specifier(tree, value)
    return None


def _import_specifier(tree: SyntaxTree, value: SyntaxNode) -> str | None:
    match value.kind:
        case NodeKind.DYNAMIC_IMPORT | NodeKind.AWAIT_EXPRESSION:
            return _imported_path(tree, value)
        case NodeKind.ARROW_FUNCTION | NodeKind.FUNCTION_EXPRESSION if value.param_count == 0:
            body = tree.field(value, "body")
            if body is None:
                return None
            if body.kind == NodeKind.STATEMENT_BLOCK:
                statements = tree.children(body)
                if len(statements) != 1 or statements[0].kind != NodeKind.RETURN_STATEMENT:
                    return None
                returned = tree.children(statements[0])
                if len(returned) != 1:
                    return None
                body = returned[0]
            return _imported_path(tree, body)
        case _:
            return None


def _imported_path(tree: SyntaxTree, expr: SyntaxNode) -> str | None:
    """The string argument of ``import('...')``, optionally awaited."""
    if expr.kind == NodeKind.AWAIT_EXPRESSION:
        inner = tree.children(expr)
        if len(inner) != 1:
            return None
        expr = inner[0]
    if expr.kind != NodeKind.DYNAMIC_IMPORT:
        return None
    args = tree.field(expr, "arguments")
    if args is None:
        return None
    elements = tree.children(args)
    if not elements or elements[0].kind != NodeKind.STRING_LITERAL:
        return None
    return elements[0].text
