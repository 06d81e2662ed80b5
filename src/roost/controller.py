"""Controller base class.

Concrete controllers subclass :class:`Controller`, declare an ordered
``routes`` table and expose actions as public methods. Helpers on the
base class are marked ``@final`` so they can never be dispatched to as
actions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, final

from roost.routing.matcher import compile_routes
from roost.routing.route import CompiledRoute, RouteTable

if TYPE_CHECKING:
    from roost.app import App
    from roost.view import View


class Controller:
    """Base for all controllers.

    Usage::

        class User(Controller):
            routes = {
                ":id/edit": "edit",
                ":id": "show",
            }

            def index(self, args):
                self.view["users"] = ...

            def edit(self, args):
                self.view["user_id"] = args["id"]

    Routes are matched against the path following the controller
    segment, in declaration order; the first match wins.
    """

    routes: ClassVar[RouteTable] = {}
    title: ClassVar[str] = ""

    def __init__(self, app: App, view: View) -> None:
        self.app = app
        self.view = view
        if self.title:
            view["page_title"] = view.escape(self.title)

    @final
    def get_routes(self) -> RouteTable:
        """Return the declared route table (possibly empty)."""
        return dict(self.routes)

    @classmethod
    @final
    def compiled_routes(cls) -> tuple[CompiledRoute, ...]:
        """Return the route table compiled once per controller class."""
        cached = cls.__dict__.get("_compiled_routes")
        if cached is None:
            cached = compile_routes(cls.routes)
            setattr(cls, "_compiled_routes", cached)  # noqa: B010
        return cached

    @final
    def get_app(self) -> App:
        return self.app

    @final
    def get_view(self) -> View:
        return self.view

    def __repr__(self) -> str:
        return f"<{type(self).__name__} controller>"
