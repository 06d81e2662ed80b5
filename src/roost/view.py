"""View — render variables, output escaping and kida rendering.

Controllers and listeners write named variables onto the view; the App
renders it once the action has run. Variables are reachable both as
attributes (``view.vendor``) and as mapping keys (``view["vendor"]``).
"""

import html
from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader
from kida.template import Markup

from roost.config import AppConfig


def create_environment(
    config: AppConfig,
    filters: dict[str, Callable[..., Any]] | None = None,
) -> Environment:
    """Create a kida Environment from app configuration.

    Searches ``config.template_dir`` first, when it exists, then
    roost's built-in templates (the not-found page).
    """
    loaders = []
    if Path(config.template_dir).is_dir():
        loaders.append(FileSystemLoader(str(config.template_dir)))
    loaders.append(PackageLoader("roost", "templates"))

    loader = ChoiceLoader(loaders)
    env = Environment(
        loader=loader,
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )
    if filters:
        env.update_filters(filters)
    return env


class View:
    """Named render variables plus the template that renders them.

    Usage::

        view = View(env)
        view.title = view.escape(user_input)
        view.template = "blog/show.html"
        html = view.render()

    Set ``body`` to bypass templating entirely.
    """

    __slots__ = ("_env", "_variables", "body", "template")

    def __init__(self, env: Environment | None = None) -> None:
        object.__setattr__(self, "_env", env)
        object.__setattr__(self, "_variables", {})
        object.__setattr__(self, "template", None)
        object.__setattr__(self, "body", None)

    @property
    def env(self) -> Environment | None:
        return self._env

    # -- Escaping --

    def escape(self, value: Any) -> Markup:
        """HTML-escape *value* for safe output."""
        if isinstance(value, Markup):
            return value
        return Markup(html.escape(str(value), quote=True))

    # -- Variables --

    @property
    def variables(self) -> dict[str, Any]:
        """A copy of the current render variables."""
        return dict(self._variables)

    def get(self, name: str, default: Any = None) -> Any:
        return self._variables.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self._variables[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._variables[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __getattr__(self, name: str) -> Any:
        try:
            return self._variables[name]
        except KeyError:
            msg = f"View has no variable {name!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in View.__slots__:
            object.__setattr__(self, name, value)
        else:
            self._variables[name] = value

    # -- Rendering --

    def render(self, template: str | None = None) -> str:
        """Render the view to a string.

        Returns ``body`` when set, otherwise renders *template* (or the
        view's own ``template``) with the current variables. A view with
        neither renders as the empty string.
        """
        if self.body is not None:
            return str(self.body)

        name = template or self.template
        if name is None:
            return ""
        if self._env is None:
            msg = f"Cannot render {name!r}: view has no template environment"
            raise RuntimeError(msg)
        return self._env.get_template(name).render(self._variables)

    def __repr__(self) -> str:
        return f"<View {self._variables!r}>"
