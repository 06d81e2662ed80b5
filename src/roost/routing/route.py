"""RouteSegment, CompiledRoute and ResolvedAction frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

# Ordered pattern -> action name, declaration order is match order
RouteTable: TypeAlias = Mapping[str, str]

# Request path segments, never containing empty strings
RequestPath: TypeAlias = tuple[str, ...]

PARAM_MARKER = ":"

# Fallback pair used when the requested action is not invocable
NOT_FOUND_CONTROLLER = "Error404"
NOT_FOUND_ACTION = "index"


@dataclass(frozen=True, slots=True)
class RouteSegment:
    """A parsed segment of a route pattern.

    Literal:  ``user``  (is_param=False)
    Param:    ``:id``   (is_param=True, name="id")
    """

    value: str
    is_param: bool = False
    name: str | None = None


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A route pattern pre-parsed into positional segment descriptors.

    Created once per controller class and reused for every request.
    """

    pattern: str
    segments: tuple[RouteSegment, ...]
    action: str = ""

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.segments if s.is_param and s.name)


@dataclass(frozen=True, slots=True)
class ResolvedAction:
    """Result of action resolution for a single request.

    ``args`` is a tuple of positional segments under the default policy,
    or a dict of named bindings when a custom route matched.
    """

    controller: str
    action: str
    args: tuple[str, ...] | dict[str, str] = field(default_factory=tuple)
    route: CompiledRoute | None = None

    @property
    def not_found(self) -> bool:
        return self.controller == NOT_FOUND_CONTROLLER

    def as_dict(self) -> dict[str, Any]:
        return {
            "controller": self.controller,
            "action": self.action,
            "args": self.args if isinstance(self.args, dict) else list(self.args),
            "route": self.route.pattern if self.route else None,
        }
