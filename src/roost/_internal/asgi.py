"""Typed ASGI definitions.

Raw ASGI aliases plus a typed view of the HTTP scope carrying the two
things dispatch needs: the raw request URI and the query parameters.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import parse_qs

# Raw ASGI 3.0 types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from raw ASGI scope dict."""

    type: str
    method: str
    path: str
    raw_path: bytes
    query_string: bytes
    root_path: str

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        return cls(
            type=scope["type"],
            method=scope.get("method", "GET"),
            path=scope["path"],
            raw_path=scope.get("raw_path") or b"",
            query_string=scope.get("query_string", b""),
            root_path=scope.get("root_path", ""),
        )

    @property
    def request_uri(self) -> str:
        """The request URI as the client sent it, query string included."""
        path = self.raw_path.decode("latin-1") if self.raw_path else self.root_path + self.path
        if self.query_string:
            return f"{path}?{self.query_string.decode('latin-1')}"
        return path

    def query_param(self, name: str) -> str | None:
        """Return the first value of query parameter *name*, if present."""
        values = parse_qs(self.query_string.decode("latin-1"), keep_blank_values=True).get(name)
        return values[0] if values else None
