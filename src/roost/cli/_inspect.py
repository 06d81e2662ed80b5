"""``roost listeners`` and ``roost routes`` — introspection commands."""

import argparse
import sys

from roost.cli._resolve import load_app
from roost.errors import ControllerNotFound


def show_listeners(args: argparse.Namespace) -> None:
    """Print each discovered listener and the events it handles."""
    app = load_app(args)
    app.load_listeners(args.dir)

    if not app.listeners:
        print("No listeners found.")
        return

    for identifier, events in app.listeners.as_dict().items():
        print(f"{identifier}: {', '.join(events) or '-'}")


def show_routes(args: argparse.Namespace) -> None:
    """Print a controller's routes in match order."""
    app = load_app(args)
    try:
        controller = app.controllers.resolve(args.controller)
    except ControllerNotFound as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = controller.compiled_routes()
    if not routes:
        print(f"{controller.__name__}: no custom routes")
        return

    width = max(len(route.pattern) for route in routes)
    for route in routes:
        print(f"{route.pattern.ljust(width)}  -> {route.action}")
