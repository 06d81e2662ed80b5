"""Roost exception hierarchy.

Shared across the router, resolver, controller factory, event registry
and App so every module raises and catches the same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when app configuration is invalid.

    Typically surfaces at startup: a malformed route pattern, a vendor
    package that cannot be imported, an import string that does not
    resolve to an App.
    """


class ControllerNotFound(RoostError):  # noqa: N818
    """A controller name could not be resolved or constructed.

    Fatal for the request. Unmatched actions never raise this; they fall
    back to the not-found controller instead.
    """

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail or f"No controller named {name!r}"
        super().__init__(self.detail)


@dataclass(frozen=True, slots=True)
class WarningError(RoostError):
    """A language-level warning escalated to a hard failure.

    Carries the location the warning was issued from so the embedding
    application can report it.
    """

    message: str
    category: type[Warning] = Warning
    filename: str = ""
    lineno: int = 0

    def __str__(self) -> str:
        if self.filename:
            return f"{self.category.__name__}: {self.message} ({self.filename}:{self.lineno})"
        return f"{self.category.__name__}: {self.message}"
