"""Escalate language-level warnings to hard failures.

Inside :func:`escalate_warnings`, any warning issued (``warnings.warn``,
deprecations, runtime warnings from the standard library) raises
:class:`~roost.errors.WarningError` at the point it was issued, carrying
the warning's category and source location.
"""

import warnings
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from roost.errors import WarningError


def _raise_warning(
    message: Warning | str,
    category: type[Warning],
    filename: str,
    lineno: int,
    file: Any = None,
    line: str | None = None,
) -> None:
    raise WarningError(
        message=str(message),
        category=category,
        filename=filename,
        lineno=lineno,
    )


@contextmanager
def escalate_warnings(enabled: bool = True) -> Iterator[None]:
    """Turn warnings issued in the block into ``WarningError``.

    Not thread-safe: ``warnings.catch_warnings`` swaps process-wide
    state, matching the one-request-at-a-time dispatch model.
    """
    if not enabled:
        yield
        return

    with warnings.catch_warnings():
        warnings.simplefilter("always")
        warnings.showwarning = _raise_warning
        yield
