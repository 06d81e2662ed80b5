"""Roost — a minimal MVC front controller.

Resolves a request path to a controller action, rewrites it through
declarative route patterns, invokes the action and notifies listeners
before and after.

Basic usage::

    from roost import App, AppConfig, Controller

    app = App(AppConfig(vendor="shop"))

    @app.controller()
    class Blog(Controller):
        routes = {":slug": "show"}

        def show(self, args):
            self.view.body = f"Post {args['slug']}"

    app.load_listeners()
    app.dispatch_controller("blog/hello-world")
    print(app.view.render())
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "Config",
    "ConfigurationError",
    "Controller",
    "ControllerFactory",
    "ControllerNotFound",
    "Listener",
    "ListenerRegistry",
    "RoostError",
    "View",
    "WarningError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from roost.app import App

        return App

    if name in ("AppConfig", "Config"):
        from roost import config as _config

        return getattr(_config, name)

    if name == "Controller":
        from roost.controller import Controller

        return Controller

    if name == "ControllerFactory":
        from roost.controllers.factory import ControllerFactory

        return ControllerFactory

    if name == "Listener":
        from roost.events.listener import Listener

        return Listener

    if name == "ListenerRegistry":
        from roost.events.registry import ListenerRegistry

        return ListenerRegistry

    if name == "View":
        from roost.view import View

        return View

    if name in ("ConfigurationError", "ControllerNotFound", "RoostError", "WarningError"):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
