"""Tests for roost.controller — the Controller base class."""

from typing import Any

from roost.app import App
from roost.controller import Controller
from roost.routing.resolver import is_action


class Blog(Controller):
    title = "The <Blog>"
    routes = {":id/edit": "edit", ":id": "show"}

    def show(self, args: Any) -> None: ...

    def edit(self, args: Any) -> None: ...


class TestController:
    def test_get_routes_copy(self) -> None:
        app = App()
        controller = Blog(app, app.view)
        routes = controller.get_routes()
        assert list(routes) == [":id/edit", ":id"]
        routes["x"] = "y"
        assert "x" not in Blog.routes

    def test_compiled_routes_cached_per_class(self) -> None:
        first = Blog.compiled_routes()
        assert first is Blog.compiled_routes()
        assert [r.action for r in first] == ["edit", "show"]

    def test_subclass_compiles_its_own_table(self) -> None:
        class Other(Blog):
            routes = {"latest": "show"}

        Blog.compiled_routes()
        assert [r.pattern for r in Other.compiled_routes()] == ["latest"]

    def test_empty_routes(self) -> None:
        class Plain(Controller):
            pass

        assert Plain.compiled_routes() == ()

    def test_title_sets_escaped_page_title(self) -> None:
        app = App()
        Blog(app, app.view)
        assert str(app.view["page_title"]) == "The &lt;Blog&gt;"

    def test_base_helpers_are_not_actions(self) -> None:
        app = App()
        controller = Blog(app, app.view)
        for name in ("get_routes", "compiled_routes", "get_app", "get_view"):
            assert is_action(controller, name) is False

    def test_declared_actions(self) -> None:
        app = App()
        controller = Blog(app, app.view)
        assert is_action(controller, "show") is True
