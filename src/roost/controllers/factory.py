"""Controller construction by name.

Controllers are looked up in two places, in order:

1. Explicit registrations (``factory.register("Blog", Blog)`` or the
   ``@factory.register()`` decorator).
2. The vendor namespace: ``<vendor>.controllers.<module>`` is imported
   and the class named after the controller is taken from it.

URL-style names are normalised first: ``error-404`` -> ``Error404``,
``user-profile`` -> ``UserProfile`` (module ``user_profile``).

Unknown names fall back to the built-in not-found controller. Errors
raised while importing a controller module or running a controller
constructor are not caught.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from roost._internal.names import class_name, module_name
from roost.controller import Controller
from roost.controllers.error404 import Error404
from roost.errors import ControllerNotFound
from roost.routing.route import NOT_FOUND_CONTROLLER

if TYPE_CHECKING:
    from roost.app import App
    from roost.view import View

logger = logging.getLogger("roost.controllers")


class ControllerFactory:
    """Registry of controller classes, keyed by class name.

    Usage::

        factory = ControllerFactory("shop")

        @factory.register()
        class Index(Controller):
            def index(self, args): ...

        controller = factory.build("index", app, view)
    """

    __slots__ = ("_registry", "vendor")

    def __init__(self, vendor: str | None = None) -> None:
        self.vendor = vendor
        self._registry: dict[str, type[Controller]] = {NOT_FOUND_CONTROLLER: Error404}

    def register(
        self,
        name: str | None = None,
        controller: type[Controller] | None = None,
    ) -> Callable[[type[Controller]], type[Controller]] | type[Controller]:
        """Register a controller class, directly or as a decorator."""

        def decorator(cls: type[Controller]) -> type[Controller]:
            key = class_name(name or cls.__name__)
            self._registry[key] = cls
            logger.debug("Registered controller %s -> %s", key, cls.__qualname__)
            return cls

        if controller is not None:
            return decorator(controller)
        return decorator

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._registry))

    def resolve(self, name: str) -> type[Controller]:
        """Return the controller class for *name*.

        Raises ``ControllerNotFound`` when neither the registry nor the
        vendor namespace provides a :class:`Controller` subclass.
        """
        key = class_name(name)
        if not key.isidentifier():
            raise ControllerNotFound(name, f"Invalid controller name {name!r}")

        cls = self._registry.get(key)
        if cls is None:
            cls = self._import(name, key)

        if not (isinstance(cls, type) and issubclass(cls, Controller)):
            raise ControllerNotFound(name, f"{key!r} is not a Controller subclass")
        return cls

    def _import(self, name: str, key: str) -> type[Controller]:
        if not self.vendor:
            raise ControllerNotFound(name)

        path = f"{self.vendor}.controllers.{module_name(name)}"
        try:
            module = importlib.import_module(path)
        except ModuleNotFoundError as exc:
            # Only a missing controller module means "not found"; a
            # missing dependency inside it is a real defect.
            if exc.name is not None and (path == exc.name or path.startswith(exc.name + ".")):
                raise ControllerNotFound(name) from exc
            raise

        cls = getattr(module, key, None)
        if cls is None:
            raise ControllerNotFound(name, f"Module {path!r} has no class {key!r}")
        return cls

    def build(self, name: str, app: App, view: View) -> Controller:
        """Instantiate the controller for *name*, falling back to not-found."""
        try:
            cls = self.resolve(name)
        except ControllerNotFound as exc:
            logger.debug("%s, using %s", exc.detail, NOT_FOUND_CONTROLLER)
            cls = self._registry[NOT_FOUND_CONTROLLER]
        return cls(app, view)
