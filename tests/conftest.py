"""Shared fixtures for roost tests."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

LISTENER_HEADER = "from roost.events.listener import Listener\n\n"


@pytest.fixture
def listeners_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "listeners"
    directory.mkdir()
    return directory


@pytest.fixture
def write_listener(listeners_dir: Path) -> Callable[[str, str], Path]:
    """Write a listener module into the listeners directory."""

    def write(filename: str, source: str) -> Path:
        path = listeners_dir / filename
        path.write_text(LISTENER_HEADER + textwrap.dedent(source), encoding="utf-8")
        return path

    return write
