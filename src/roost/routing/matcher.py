"""Route pattern compilation and positional matching.

Patterns are declared per controller as an ordered table of
``pattern -> action``. Each pattern is parsed once into segment
descriptors; matching compares the request path segment by segment
with no regex construction, so literal text never acts as a pattern.
"""

from collections.abc import Iterable

from roost.errors import ConfigurationError
from roost.routing.route import (
    PARAM_MARKER,
    CompiledRoute,
    RequestPath,
    RouteSegment,
    RouteTable,
)


def parse_pattern(pattern: str) -> tuple[RouteSegment, ...]:
    """Parse a route pattern string into segments.

    Examples::

        "user"           -> (RouteSegment("user"),)
        "user/:id"       -> (RouteSegment("user"), RouteSegment(":id", is_param=True, name="id"))
        "user/:id/edit"  -> (..., RouteSegment("edit"))
    """
    segments: list[RouteSegment] = []
    for part in pattern.strip("/").split("/"):
        if not part:
            continue
        if part.startswith(PARAM_MARKER):
            name = part[len(PARAM_MARKER) :]
            if not name:
                msg = f"Route pattern {pattern!r} has a parameter segment with no name."
                raise ConfigurationError(msg)
            segments.append(RouteSegment(value=part, is_param=True, name=name))
        else:
            segments.append(RouteSegment(value=part))
    return tuple(segments)


def compile_route(pattern: str, action: str = "") -> CompiledRoute:
    """Compile a route pattern into a reusable matcher."""
    return CompiledRoute(pattern=pattern, segments=parse_pattern(pattern), action=action)


def compile_routes(table: RouteTable) -> tuple[CompiledRoute, ...]:
    """Compile a route table, preserving declaration order."""
    return tuple(compile_route(pattern, action) for pattern, action in table.items())


def match_route(compiled: CompiledRoute, request_path: RequestPath) -> dict[str, str] | None:
    """Match request segments against a compiled route.

    Anchored at both ends: the segment counts must be equal, literal
    segments must compare equal (case-sensitive) and parameter segments
    bind any non-empty segment. Returns the parameter bindings, an empty
    dict for a matching literal-only pattern, or ``None``.
    """
    if len(compiled.segments) != len(request_path):
        return None

    params: dict[str, str] = {}
    for segment, part in zip(compiled.segments, request_path, strict=True):
        if segment.is_param:
            if not part:
                return None
            params[segment.name or ""] = part
        elif segment.value != part:
            return None
    return params


def first_match(
    routes: Iterable[CompiledRoute],
    request_path: RequestPath,
) -> tuple[CompiledRoute, dict[str, str]] | None:
    """Return the first route, in declaration order, matching the path.

    No specificity ranking: controllers declare more specific patterns
    before more general ones.
    """
    for route in routes:
        params = match_route(route, request_path)
        if params is not None:
            return route, params
    return None
