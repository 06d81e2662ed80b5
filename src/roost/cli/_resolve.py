"""Locate the App a ``roost`` subcommand operates on."""

import argparse
import importlib
import logging
import sys

from roost.app import App


def resolve_app(import_string: str) -> App:
    """Return the App named by ``"package.module:name"``.

    The name defaults to ``app``.

    Raises:
        ModuleNotFoundError: The module cannot be imported.
        AttributeError: The module has no such name.
        TypeError: The name is bound to something other than an App.
    """
    module_path, _, attr_name = import_string.partition(":")
    app = getattr(importlib.import_module(module_path), attr_name or "app")
    if not isinstance(app, App):
        msg = f"{import_string!r} is a {type(app).__name__}, expected a roost App"
        raise TypeError(msg)
    return app


def load_app(args: argparse.Namespace) -> App:
    """Resolve ``args.app`` and configure logging, exiting 1 on failure."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logging.basicConfig(level=app.config.log_level.upper())
    return app
