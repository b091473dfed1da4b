"""Tests for node location and click classification."""

import pytest

from route_resolver.config import Settings
from route_resolver.core import (
    ControllerImportPath,
    ControllerVariable,
    MethodString,
    NodeKind,
    RoutesModule,
)
from route_resolver.services.classifier import classify_click, parse_handler
from route_resolver.services.locator import find_node_at

from tests.conftest import offset_of


def _classify(parser, settings: Settings, text: str, offset: int):
    tree = parser.parse(text)
    node = find_node_at(tree, offset)
    assert node is not None
    return classify_click(node, tree, settings)


class TestFindNodeAt:
    """Tests for the position locator."""

    def test_innermost_identifier(self, ts_parser, routes_source: str):
        tree = ts_parser.parse(routes_source)
        offset = offset_of(routes_source, "UsersController, 'index'", delta=3)

        node = find_node_at(tree, offset)
        assert node.kind == NodeKind.IDENTIFIER
        assert node.text == "UsersController"

    def test_string_literal_is_a_leaf(self, ts_parser, routes_source: str):
        tree = ts_parser.parse(routes_source)

        node = find_node_at(tree, offset_of(routes_source, "'index'", delta=2))
        assert node.kind == NodeKind.STRING_LITERAL
        assert node.text == "index"

    def test_offset_at_token_end_is_outside_token(self, ts_parser):
        text = "foo(bar)"
        tree = ts_parser.parse(text)

        node = find_node_at(tree, text.index(")"))
        assert node.text != "bar"

    def test_end_of_text_is_outside_root(self, ts_parser):
        text = "const a = 1"
        tree = ts_parser.parse(text)

        assert find_node_at(tree, len(text)) is None
        assert find_node_at(tree, len(text) + 50) is None

    def test_negative_offset_is_clamped(self, ts_parser):
        tree = ts_parser.parse("const a = 1")

        assert find_node_at(tree, -10) is not None


class TestStringClicks:
    """Tests for clicks on string literals."""

    def test_method_string(self, ts_parser, settings, routes_source):
        context = _classify(ts_parser, settings, routes_source, offset_of(routes_source, "'index'", delta=2))

        assert isinstance(context, MethodString)
        assert context.controller_name == "UsersController"
        assert context.method_name == "index"

    def test_method_string_echoes_tokens(self, ts_parser, settings):
        text = "router.patch('/a', [AccountsController, 'updateEmail'])"
        context = _classify(ts_parser, settings, text, offset_of(text, "updateEmail"))

        assert context == MethodString(
            controller_name="AccountsController",
            method_name="updateEmail",
            origin=context.origin,
        )
        assert text[context.origin.start : context.origin.end] == "'updateEmail'"

    def test_first_tuple_element_is_not_a_method(self, ts_parser, settings, routes_source):
        offset = offset_of(routes_source, "['index', 'show']", delta=3)
        context = _classify(ts_parser, settings, routes_source, offset)

        assert context is None

    def test_three_element_array_is_not_a_tuple(self, ts_parser, settings):
        text = "router.get('/a', [A, 'index', 'extra'])"
        assert _classify(ts_parser, settings, text, offset_of(text, "'index'", delta=2)) is None

    def test_controller_import_path(self, ts_parser, settings, routes_source):
        offset = offset_of(routes_source, "#controllers/users_controller")
        context = _classify(ts_parser, settings, routes_source, offset)

        assert isinstance(context, ControllerImportPath)
        assert context.import_path == "#controllers/users_controller"

    def test_custom_controller_prefix(self, ts_parser):
        settings = Settings(controller_prefix="#handlers/")
        text = "const A = () => import('#handlers/a')"

        context = _classify(ts_parser, settings, text, offset_of(text, "#handlers"))
        assert isinstance(context, ControllerImportPath)

    def test_other_strings_are_inert(self, ts_parser, settings, routes_source):
        offset = offset_of(routes_source, "'/users'", delta=2)
        assert _classify(ts_parser, settings, routes_source, offset) is None


class TestIdentifierClicks:
    """Tests for clicks on identifiers."""

    def test_tuple_controller(self, ts_parser, settings, routes_source):
        offset = offset_of(routes_source, "UsersController, 'index'")
        context = _classify(ts_parser, settings, routes_source, offset)

        assert isinstance(context, ControllerVariable)
        assert context.variable_name == "UsersController"
        assert context.method_name == "index"

    def test_bare_identifier_handler(self, ts_parser, settings, routes_source):
        offset = offset_of(routes_source, "UsersController)")
        context = _classify(ts_parser, settings, routes_source, offset)

        assert isinstance(context, ControllerVariable)
        assert context.variable_name == "UsersController"
        assert context.method_name is None

    def test_chained_route_call(self, ts_parser, settings, routes_source):
        offset = offset_of(routes_source, "PostsController, 'show'")
        context = _classify(ts_parser, settings, routes_source, offset)

        assert isinstance(context, ControllerVariable)
        assert context.method_name == "show"

    @pytest.mark.parametrize("verb", ["get", "post", "put", "patch", "delete", "route", "resource"])
    def test_routing_verbs(self, ts_parser, settings, verb):
        text = f"router.{verb}('/a', [AController, 'run'])"
        context = _classify(ts_parser, settings, text, offset_of(text, "AController"))

        assert isinstance(context, ControllerVariable)

    def test_unknown_verb_is_inert(self, ts_parser, settings):
        text = "router.options('/a', [AController, 'run'])"
        assert _classify(ts_parser, settings, text, offset_of(text, "AController")) is None

    def test_router_object_is_not_a_controller(self, ts_parser, settings):
        text = "router.get('/a', [AController, 'run'])"
        assert _classify(ts_parser, settings, text, 1) is None

    def test_routes_module_in_group(self, ts_parser, settings, routes_source):
        offset = offset_of(routes_source, "adminRoutes")
        context = _classify(ts_parser, settings, routes_source, offset)

        assert context == RoutesModule(module_name="adminRoutes", origin=context.origin)

    def test_arrow_handler_inside_group_falls_back_to_group(self, ts_parser, settings):
        text = "router.group(() => {\n  router.get('/', () => helper)\n})"
        context = _classify(ts_parser, settings, text, offset_of(text, "helper"))

        assert isinstance(context, RoutesModule)
        assert context.module_name == "helper"

    def test_tuple_inside_group_prefers_controller(self, ts_parser, settings):
        text = "router.group(() => {\n  router.get('/', [UsersController, 'index'])\n})"
        context = _classify(ts_parser, settings, text, offset_of(text, "UsersController"))

        assert isinstance(context, ControllerVariable)

    def test_identifier_outside_routing_calls(self, ts_parser, settings):
        text = "const value = compute(other)"
        assert _classify(ts_parser, settings, text, offset_of(text, "other")) is None

    def test_non_identifier_nodes_are_inert(self, ts_parser, settings):
        text = "router.get('/a', [AController, 'run'])"
        assert _classify(ts_parser, settings, text, text.index(",")) is None


class TestParseHandler:
    """Tests for handler argument shapes."""

    def _handler_arg(self, parser, text: str):
        tree = parser.parse(text)
        call = next(n for n in tree.walk() if n.kind == NodeKind.CALL_EXPRESSION)
        args = tree.children(tree.field(call, "arguments"))
        return tree, args[1]

    def test_tuple(self, ts_parser):
        tree, arg = self._handler_arg(ts_parser, "router.get('/', [A, 'b'])")
        handler = parse_handler(tree, arg)
        assert (handler.controller_name, handler.method_name) == ("A", "b")

    def test_identifier(self, ts_parser):
        tree, arg = self._handler_arg(ts_parser, "router.get('/', A)")
        assert parse_handler(tree, arg).variable_name == "A"

    def test_arrow_function(self, ts_parser):
        tree, arg = self._handler_arg(ts_parser, "router.get('/', () => 'hi')")
        assert parse_handler(tree, arg) is None

    def test_function_expression(self, ts_parser):
        tree, arg = self._handler_arg(ts_parser, "router.get('/', function () { return 1 })")
        assert parse_handler(tree, arg) is None
