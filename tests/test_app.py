"""Tests for roost.app — end-to-end dispatch through the App."""

import warnings
from collections.abc import Callable
from pathlib import Path
from typing import Any, final

import pytest

from roost.app import App
from roost.config import AppConfig
from roost.controller import Controller
from roost.controllers.error404 import Error404
from roost.errors import WarningError

WriteListener = Callable[[str, str], Path]


def _app(**config: Any) -> App:
    app = App(AppConfig(vendor="_no_such_vendor", **config))

    @app.controller()
    class Index(Controller):
        def index(self, args: Any) -> None:
            self.view["called"] = ("Index", "index", args)

    @app.controller()
    class Blog(Controller):
        routes = {
            ":id/edit": "edit",
            ":id/:slug": "show",
            ":id/comments": "comments",
        }

        def index(self, args: Any) -> None:
            self.view["called"] = ("Blog", "index", args)

        def show(self, args: Any) -> None:
            self.view["called"] = ("Blog", "show", args)

        def edit(self, args: Any) -> None:
            self.view["called"] = ("Blog", "edit", args)

        def comments(self, args: Any) -> None:
            self.view["called"] = ("Blog", "comments", args)

        def archive(self, args: Any) -> None:
            self.view["called"] = ("Blog", "archive", args)

        def _secret(self, args: Any) -> None:
            self.view["called"] = ("Blog", "_secret", args)

        @final
        def sealed(self, args: Any) -> None:
            self.view["called"] = ("Blog", "sealed", args)

        def noisy(self, args: Any) -> None:
            warnings.warn("deprecated thing", DeprecationWarning, stacklevel=1)
            self.view["called"] = ("Blog", "noisy", args)

    return app


class TestDefaultRouting:
    def test_empty_path(self) -> None:
        app = _app().dispatch_controller("")
        assert app.view["called"] == ("Index", "index", ())
        assert app.resolved is not None
        assert (app.resolved.controller, app.resolved.action) == ("Index", "index")

    def test_controller_only(self) -> None:
        app = _app().dispatch_controller("blog")
        assert app.view["called"] == ("Blog", "index", ())

    def test_action_and_positional_args(self) -> None:
        app = _app().dispatch_controller("blog/archive/2024/0/05")
        assert app.view["called"] == ("Blog", "archive", ("2024", "05"))

    def test_invalid_action_falls_back(self) -> None:
        app = _app().dispatch_controller("blog/42")
        assert "called" not in app.view
        assert app.resolved is not None
        assert app.resolved.not_found is True
        assert app.view.template == Error404.template

    @pytest.mark.parametrize(
        "action",
        [
            "_secret",
            "sealed",
            "__init__",
            "get_routes",
            "compiled_routes",
            "app",
            "view",
            "get_app",
        ],
    )
    def test_non_invocable_falls_back(self, action: str) -> None:
        app = _app().dispatch_controller(f"blog/{action}")
        assert "called" not in app.view
        assert app.resolved is not None
        assert app.resolved.not_found is True

    def test_zero_segments_use_defaults(self) -> None:
        app = _app().dispatch_controller("0/0")
        assert app.view["called"] == ("Index", "index", ())

    def test_zero_action_uses_default(self) -> None:
        app = _app().dispatch_controller("blog/0")
        assert app.view["called"] == ("Blog", "index", ())

    def test_unknown_controller_falls_back(self) -> None:
        app = _app().dispatch_controller("nowhere/index")
        assert app.resolved is not None
        assert app.resolved.not_found is True

    def test_constructor_failure_propagates(self) -> None:
        app = _app()

        @app.controller()
        class Broken(Controller):
            def __init__(self, app: App, view: Any) -> None:
                msg = "cannot build"
                raise RuntimeError(msg)

            def index(self, args: Any) -> None: ...

        with pytest.raises(RuntimeError, match="cannot build"):
            app.dispatch_controller("broken")

    def test_public_prefix(self) -> None:
        app = _app().dispatch_controller("/public/blog/archive/")
        assert app.view["called"] == ("Blog", "archive", ())


class TestCustomRoutes:
    def test_named_params(self) -> None:
        app = _app().dispatch_controller("blog/42/edit")
        assert app.view["called"] == ("Blog", "edit", {"id": "42"})

    def test_declaration_order_wins(self) -> None:
        app = _app().dispatch_controller("blog/42/comments")
        assert app.view["called"] == ("Blog", "show", {"id": "42", "slug": "comments"})

    def test_unmatched_route_uses_default_policy(self) -> None:
        app = _app().dispatch_controller("blog/archive/1/2/3")
        assert app.view["called"] == ("Blog", "archive", ("1", "2", "3"))


class TestEvents:
    def test_before_and_after_logged(self) -> None:
        app = _app().dispatch_controller("blog")
        assert app.events == ("actionBefore", "actionAfter")

    def test_fired_for_not_found(self) -> None:
        app = _app().dispatch_controller("blog/42")
        assert app.events == ("actionBefore", "actionAfter")

    def test_log_is_append_only(self) -> None:
        app = _app()
        app.dispatch_controller("blog").dispatch_controller("")
        app.trigger("custom")
        assert app.events == ("actionBefore", "actionAfter") * 2 + ("custom",)

    def test_trigger_without_listeners(self) -> None:
        app = _app()
        assert app.trigger("nothing", 1, 2) is app
        assert app.events == ("nothing",)

    def test_listeners_receive_controller_and_view(
        self, listeners_dir: Path, write_listener: WriteListener
    ) -> None:
        write_listener(
            "audit.py",
            """
            class Audit(Listener):
                def actionBefore(self, controller, view):
                    log = self.app.get_config("log") or []
                    log.append(("before", type(controller).__name__, view is self.app.view))
                    self.app.set_config("log", log)

                def actionAfter(self, controller, view):
                    self.app.get_config("log").append(("after", "called" in view))
            """,
        )
        app = _app().load_listeners(listeners_dir)
        app.dispatch_controller("blog")
        assert app.get_config("log") == [("before", "Blog", True), ("after", True)]

    def test_listener_sees_not_found_controller(
        self, listeners_dir: Path, write_listener: WriteListener
    ) -> None:
        write_listener(
            "seen.py",
            """
            class Seen(Listener):
                def actionBefore(self, controller, view):
                    self.app.set_config("controller", type(controller).__name__)
            """,
        )
        app = _app().load_listeners(listeners_dir)
        app.dispatch_controller("blog/missing")
        assert app.get_config("controller") == "Error404"

    def test_listener_failure_propagates(
        self, listeners_dir: Path, write_listener: WriteListener
    ) -> None:
        write_listener(
            "broken.py",
            """
            class Broken(Listener):
                def actionAfter(self, controller, view):
                    raise LookupError("listener broke")
            """,
        )
        app = _app().load_listeners(listeners_dir)
        with pytest.raises(LookupError, match="listener broke"):
            app.dispatch_controller("blog")
        assert app.view["called"] == ("Blog", "index", ())

    def test_load_listeners_rebuilds(self, listeners_dir: Path, write_listener: WriteListener) -> None:
        app = _app().load_listeners(listeners_dir)
        assert len(app.listeners) == 0
        write_listener(
            "late.py",
            """
            class Late(Listener):
                def ping(self):
                    pass
            """,
        )
        app.load_listeners(listeners_dir)
        assert list(app.listeners) == ["late"]

    def test_configured_listeners_dir(self, listeners_dir: Path, write_listener: WriteListener) -> None:
        write_listener(
            "audit.py",
            """
            class Audit(Listener):
                def ping(self):
                    pass
            """,
        )
        app = _app(listeners_dir=listeners_dir).load_listeners()
        assert list(app.listeners) == ["audit"]


class TestWarnings:
    def test_warning_escalated(self) -> None:
        app = _app()
        with pytest.raises(WarningError) as exc_info:
            app.dispatch_controller("blog/noisy")
        err = exc_info.value
        assert err.category is DeprecationWarning
        assert err.message == "deprecated thing"
        assert err.filename.endswith("test_app.py")
        assert err.lineno > 0

    def test_escalation_disabled(self) -> None:
        app = _app(escalate_warnings=False)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            app.dispatch_controller("blog/noisy")
        assert app.view["called"] == ("Blog", "noisy", ())


class TestConfigAndVendor:
    def test_config_get_set(self) -> None:
        app = _app()
        assert app.get_config("missing") is None
        assert app.set_config("key", {"a": 1}) is app
        assert app.get_config("key") == {"a": 1}

    def test_vendor(self) -> None:
        app = App(AppConfig(vendor="shop", vendor_path="lib/"))
        assert app.get_vendor() == "shop"
        assert app.get_vendor_path() == "lib/"
        assert str(app.view["vendor"]) == "shop"
        assert str(app.view["vendor_path"]) == "lib/"

    def test_vendor_escaped_in_view(self) -> None:
        app = App(AppConfig(vendor="<shop>"))
        assert str(app.view["vendor"]) == "&lt;shop&gt;"


class TestRootPath:
    def test_without_request_uri(self) -> None:
        app = _app().dispatch_controller("blog")
        assert app.get_root_path() == ""

    def test_from_request_uri(self) -> None:
        app = _app()
        app.set_request_uri("/site/blog/archive?x=1")
        app.dispatch_controller("blog/archive")
        assert app.get_root_path() == "/site/"
        assert str(app.view["root_path"]) == "/site/"


class TestRendering:
    def test_not_found_page_renders(self) -> None:
        app = _app().dispatch_controller("blog/42")
        html = app.view.render()
        assert "Page not found" in html

    def test_body_rendered(self) -> None:
        app = _app()

        @app.controller("hello")
        class Hello(Controller):
            def index(self, args: Any) -> None:
                self.view.body = "Hello"

        app.dispatch_controller("hello")
        assert app.view.render() == "Hello"
