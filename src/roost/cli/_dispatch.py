"""``roost dispatch`` — run one request through the front controller.

The ``-q`` flag is the request target, exactly as ``?q=`` is for the
ASGI entry point. The rendered view is written to stdout.
"""

import argparse

from roost.cli._resolve import load_app
from roost.routing.path import resolve_target


def run_dispatch(args: argparse.Namespace) -> None:
    app = load_app(args)

    if args.request_uri is not None:
        app.set_request_uri(args.request_uri)
    if not app.listeners:
        app.load_listeners()

    app.dispatch_controller(resolve_target(args.q, None))
    print(app.view.render())
