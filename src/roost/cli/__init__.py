"""Roost CLI — dispatch a request path and inspect an app.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — a minimal MVC front controller.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost dispatch ---------------------------------------------------
    dispatch_parser = subparsers.add_parser("dispatch", help="Dispatch one request path")
    dispatch_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    dispatch_parser.add_argument("-q", dest="q", default=None, help="Request path (e.g. blog/42)")
    dispatch_parser.add_argument(
        "--request-uri",
        default=None,
        help="Raw request URI, used to compute the root path",
    )

    # -- roost listeners --------------------------------------------------
    listeners_parser = subparsers.add_parser("listeners", help="List discovered listeners")
    listeners_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    listeners_parser.add_argument(
        "--dir",
        default=None,
        help="Listener directory (defaults to the app's configured one)",
    )

    # -- roost routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Show a controller's routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    routes_parser.add_argument("controller", help="Controller name (e.g. blog)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "dispatch":
        from roost.cli._dispatch import run_dispatch

        run_dispatch(args)
    elif args.command == "listeners":
        from roost.cli._inspect import show_listeners

        show_listeners(args)
    elif args.command == "routes":
        from roost.cli._inspect import show_routes

        show_routes(args)
