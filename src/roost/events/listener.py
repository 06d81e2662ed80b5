"""Listener base class."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, ClassVar, final

if TYPE_CHECKING:
    from roost.app import App


class Listener:
    """Base for event listeners.

    Every public method a subclass adds is an event handler, named after
    the event it handles. Methods inherited from the base do not count.
    Set ``events`` to declare the handled events explicitly instead::

        class Audit(Listener):
            def actionBefore(self, controller, view):
                self.app.set_config("last_controller", type(controller).__name__)

        class Quiet(Listener):
            events = ("actionAfter",)

            def actionAfter(self, controller, view): ...
            def helper(self): ...

    A fresh instance is created for every triggered event, so listeners
    must not rely on state kept between events.
    """

    events: ClassVar[Iterable[str] | None] = None

    def __init__(self) -> None:
        self.app: App | None = None

    @final
    def set_app(self, app: App) -> Listener:
        self.app = app
        return self

    @final
    def get_app(self) -> App | None:
        return self.app
