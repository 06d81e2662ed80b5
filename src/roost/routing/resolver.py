"""Action resolution — controller name, action name and arguments.

Default policy splits the request path positionally. When a controller
declares custom routes, the first matching route rewrites the action
and replaces the positional arguments with named bindings. A resolved
action that is not invocable falls back to the not-found pair; that is
never an error.
"""

import inspect
import logging
from collections.abc import Iterable
from typing import Any

from roost.routing.matcher import first_match
from roost.routing.route import (
    NOT_FOUND_ACTION,
    NOT_FOUND_CONTROLLER,
    CompiledRoute,
    RequestPath,
    ResolvedAction,
)

logger = logging.getLogger("roost.dispatch")

DEFAULT_CONTROLLER = "Index"
DEFAULT_ACTION = "index"


def split_path(
    request_path: RequestPath,
    *,
    default_controller: str = DEFAULT_CONTROLLER,
    default_action: str = DEFAULT_ACTION,
) -> tuple[str, str, tuple[str, ...]]:
    """Apply the default positional policy to a request path.

    Returns ``(controller_name, action_name, remaining_segments)``. A
    ``"0"`` segment counts as absent, the same as in :func:`filter_args`.
    """
    controller = (
        request_path[0]
        if request_path and not _is_empty(request_path[0])
        else default_controller
    )
    action = (
        request_path[1]
        if len(request_path) > 1 and not _is_empty(request_path[1])
        else default_action
    )
    return controller, action, tuple(request_path[2:])


def is_action(controller: object, name: str) -> bool:
    """Return True if *name* is an invocable action on *controller*.

    An action is a function defined on the controller class (plain,
    static or class method) that is public (no leading underscore), not
    marked ``@typing.final`` and not the constructor. Instance attributes
    are never actions, even when callable.
    """
    if not name or name.startswith("_") or name == "__init__":
        return False

    attr = inspect.getattr_static(type(controller), name, None)
    if isinstance(attr, (staticmethod, classmethod)):
        attr = attr.__func__
    if not inspect.isfunction(attr):
        return False
    return not getattr(attr, "__final__", False)


def filter_args(args: Any) -> Any:
    """Drop zero-valued arguments before invocation.

    Removes empty strings, ``None``, ``False``, numeric zero and the
    string ``"0"``. Works on positional tuples and named dicts alike.
    """
    if isinstance(args, dict):
        return {key: value for key, value in args.items() if not _is_empty(value)}
    return tuple(value for value in args if not _is_empty(value))


def _is_empty(value: Any) -> bool:
    return not value or value == "0"


def resolve_action(
    controller: object,
    request_path: RequestPath,
    routes: Iterable[CompiledRoute] = (),
    *,
    default_controller: str = DEFAULT_CONTROLLER,
    default_action: str = DEFAULT_ACTION,
) -> ResolvedAction:
    """Resolve the action and arguments to invoke on *controller*.

    Args:
        controller: The instantiated controller named by the first segment.
        request_path: Parsed request segments.
        routes: The controller's compiled routes, in declaration order.

    Returns:
        A :class:`ResolvedAction`. When the action is not invocable the
        result names the not-found controller and action instead.
    """
    controller_name, action, positional = split_path(
        request_path,
        default_controller=default_controller,
        default_action=default_action,
    )
    args: tuple[str, ...] | dict[str, str] = positional
    matched: CompiledRoute | None = None

    hit = first_match(routes, tuple(request_path[1:]))
    if hit is not None:
        matched, params = hit
        action = matched.action
        args = params
        logger.debug("Route %r matched %s -> %s", matched.pattern, "/".join(request_path), action)

    if not is_action(controller, action):
        logger.debug("No action %r on controller %r, using not-found", action, controller_name)
        return ResolvedAction(controller=NOT_FOUND_CONTROLLER, action=NOT_FOUND_ACTION)

    return ResolvedAction(
        controller=controller_name,
        action=action,
        args=filter_args(args),
        route=matched,
    )
