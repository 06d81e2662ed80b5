"""Built-in not-found controller.

Always registered with every :class:`ControllerFactory`, so dispatch can
fall back to it when a controller or action cannot be resolved.
"""

from typing import Any

from roost.controller import Controller


class Error404(Controller):
    """Renders the not-found page."""

    title = "Page not found"
    template = "error404.html"

    def index(self, args: Any = ()) -> None:
        self.view["status"] = 404
        self.view.template = self.template
