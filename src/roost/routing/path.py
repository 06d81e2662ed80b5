"""Request path parsing.

Turns a raw request target into ordered path segments, independent of
whether the target came from a ``-q`` command-line flag or a ``?q=``
query string parameter.
"""

import re
from urllib.parse import unquote

from roost.routing.route import RequestPath

# Leading base-path prefix used when the document root is the app root
_PUBLIC_PREFIX_RE = re.compile(r"^public/")

# Trailing front-controller script and query string in a request URI
_SCRIPT_QUERY_RE = re.compile(r"(?:index\.php)?(?:\?.*)?$")


def strip_target(raw_target: str) -> str:
    """Strip surrounding slashes and a leading ``public/`` segment."""
    return _PUBLIC_PREFIX_RE.sub("", raw_target.strip("/"), count=1)


def parse_path(raw_target: str) -> RequestPath:
    """Split a raw request target into non-empty segments.

    Examples::

        ""                 -> ()
        "/blog/42/"        -> ("blog", "42")
        "public/user/7"    -> ("user", "7")
        "a//b"             -> ("a", "b")
    """
    return tuple(part for part in strip_target(raw_target).split("/") if part)


def resolve_target(flag_value: str | None = None, query_value: str | None = None) -> str:
    """Pick the raw request target from the two supported sources.

    The ``-q`` flag wins when present, then the ``q`` query parameter,
    else the empty target.
    """
    if flag_value is not None:
        return flag_value
    if query_value is not None:
        return strip_target(query_value)
    return ""


def root_path(request_uri: str | None, request_path: RequestPath) -> str:
    """Compute the client-side path to the application root.

    Strips a trailing ``index.php`` and query string from the raw URI,
    then strips the request path suffix, leaving the base path used for
    building links::

        root_path("/app/blog/42?x=1", ("blog", "42"))  -> "/app/"
        root_path("/app/index.php", ())                -> "/app"
    """
    if not request_uri:
        return ""

    base = _SCRIPT_QUERY_RE.sub("", unquote(request_uri), count=1).rstrip("/")

    suffix = "/".join(request_path)
    if suffix and base.endswith(suffix):
        base = base[: -len(suffix)]
    return base
