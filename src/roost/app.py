"""Roost application class — the front controller.

One ``dispatch_controller()`` call handles one request:

    parse path -> build controller -> match routes -> resolve action
    -> trigger ``actionBefore`` -> invoke action -> trigger ``actionAfter``

Listener discovery happens at startup (``load_listeners()``) and can be
re-run on demand. The event log, listener registry and runtime config
are fields of the App instance, never module globals.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida import Environment

from roost._internal.asgi import HTTPScope, Receive, Scope, Send
from roost._internal.escalate import escalate_warnings
from roost.config import AppConfig, Config
from roost.controller import Controller
from roost.controllers.factory import ControllerFactory
from roost.errors import ControllerNotFound
from roost.events.discovery import discover_listeners
from roost.events.registry import ListenerRegistry, trigger
from roost.routing.path import parse_path, resolve_target, root_path
from roost.routing.resolver import resolve_action, split_path
from roost.routing.route import (
    NOT_FOUND_ACTION,
    NOT_FOUND_CONTROLLER,
    RequestPath,
    ResolvedAction,
)
from roost.view import View, create_environment

logger = logging.getLogger("roost.dispatch")


class App:
    """The roost application.

    Usage::

        app = App(AppConfig(vendor="shop"))
        app.load_listeners()

        @app.controller()
        class Index(Controller):
            def index(self, args):
                self.view.body = "Hello"

        app.dispatch_controller("blog/42")
        print(app.view.render())

    A single App handles one request at a time; run one App per worker
    when serving requests in parallel.
    """

    __slots__ = (
        "_args",
        "_config",
        "_events",
        "_factory",
        "_listeners",
        "_request_uri",
        "config",
        "env",
        "resolved",
        "view",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        view: View | None = None,
        kida_env: Environment | None = None,
        request_uri: str | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        if kida_env is None:
            kida_env = view.env if view is not None else create_environment(self.config)
        self.env: Environment | None = kida_env
        self.view: View = view or View(self.env)

        self._config = Config()
        self._events: list[str] = []
        self._listeners: ListenerRegistry = ListenerRegistry()
        self._factory = ControllerFactory(self.config.vendor)
        self._args: RequestPath = ()
        self._request_uri = request_uri
        self.resolved: ResolvedAction | None = None

        self._publish_view_globals()

    # -- Controllers --

    def controller(self, name: str | None = None) -> Callable[[type[Controller]], type[Controller]]:
        """Register a controller class via decorator."""

        def decorator(cls: type[Controller]) -> type[Controller]:
            self._factory.register(name, cls)
            return cls

        return decorator

    @property
    def controllers(self) -> ControllerFactory:
        return self._factory

    # -- Dispatch --

    def dispatch_controller(self, target: str | None = None) -> App:
        """Dispatch the controller for *target*, or for the current args.

        Fatal conditions (a controller constructor raising, a listener
        raising, an escalated warning) propagate to the caller. Unknown
        controllers and actions fall back to the not-found controller.
        """
        if target is not None:
            self.set_args(target)
        args = self.get_args()

        with escalate_warnings(self.config.escalate_warnings):
            name, _, _ = split_path(
                args,
                default_controller=self.config.default_controller,
                default_action=self.config.default_action,
            )
            try:
                controller_cls = self._factory.resolve(name)
            except ControllerNotFound as exc:
                logger.debug("%s, using not-found controller", exc.detail)
                controller_cls = None

            if controller_cls is None:
                resolved = ResolvedAction(controller=NOT_FOUND_CONTROLLER, action=NOT_FOUND_ACTION)
            else:
                controller = controller_cls(self, self.view)
                resolved = resolve_action(
                    controller,
                    args,
                    controller.compiled_routes(),
                    default_controller=self.config.default_controller,
                    default_action=self.config.default_action,
                )

            if resolved.not_found:
                controller = self._factory.build(NOT_FOUND_CONTROLLER, self, self.view)
            self.resolved = resolved

            logger.debug(
                "Dispatching %s.%s(%r) for %r",
                type(controller).__name__,
                resolved.action,
                resolved.args,
                "/".join(args),
            )

            self.trigger("actionBefore", controller, self.view)

            getattr(controller, resolved.action)(resolved.args)

            self.trigger("actionAfter", controller, self.view)

        return self

    def set_args(self, target: str) -> App:
        """Set the request target for the next dispatch."""
        self._args = parse_path(target)
        self.view["root_path"] = self.view.escape(self.get_root_path())
        return self

    def get_args(self) -> RequestPath:
        """Return the parsed request path segments."""
        return self._args

    def set_request_uri(self, request_uri: str | None) -> App:
        """Set the raw request URI the root path is derived from."""
        self._request_uri = request_uri
        self.view["root_path"] = self.view.escape(self.get_root_path())
        return self

    def get_root_path(self) -> str:
        """Return the client-side path to the application root."""
        return root_path(self._request_uri, self._args)

    # -- Events --

    def load_listeners(self, listeners_dir: str | Path | None = None) -> App:
        """Discover listeners, replacing any previously loaded registry."""
        directory = listeners_dir or self.config.resolve_listeners_dir()
        self._listeners = discover_listeners(directory)
        logger.debug("Loaded %d listeners from %s", len(self._listeners), directory)
        return self

    @property
    def listeners(self) -> ListenerRegistry:
        return self._listeners

    def trigger(self, event: str, *payload: Any) -> App:
        """Record *event* and call every listener that handles it."""
        self._events.append(event)
        trigger(self._listeners, self, event, *payload)
        return self

    @property
    def events(self) -> tuple[str, ...]:
        """Every event triggered so far, in order."""
        return tuple(self._events)

    # -- Config --

    def get_config(self, key: str) -> Any:
        return self._config.get(key)

    def set_config(self, key: str, value: Any) -> App:
        self._config.set(key, value)
        return self

    def get_vendor(self) -> str:
        return self.config.vendor

    def get_vendor_path(self) -> str:
        return str(self.config.vendor_path).rstrip("/") + "/"

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Lifespan startup loads listeners. HTTP requests dispatch the
        ``q`` query parameter and respond with the rendered view.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        http = HTTPScope.from_scope(scope)
        self._request_uri = http.request_uri
        self.view = View(self.env)
        self._publish_view_globals()

        self.dispatch_controller(resolve_target(None, http.query_param("q")))
        body = self.view.render().encode("utf-8")
        status = 404 if self.resolved is not None and self.resolved.not_found else 200

        await send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": [
                    (b"content-type", b"text/html; charset=utf-8"),
                    (b"content-length", str(len(body)).encode("latin-1")),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self.load_listeners()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _publish_view_globals(self) -> None:
        self.view["vendor"] = self.view.escape(self.get_vendor())
        self.view["vendor_path"] = self.view.escape(self.get_vendor_path())
        self.view["root_path"] = self.view.escape(self.get_root_path())
