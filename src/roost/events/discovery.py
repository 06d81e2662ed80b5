"""Filesystem listener discovery.

Scans a listeners directory and registers one listener per ``.py`` file:

- The file stem is the listener identifier (``audit.py`` -> ``audit``).
- The listener class is the ``Listener`` subclass named after the stem
  (``page_title.py`` -> ``PageTitle``), or the only ``Listener``
  subclass the module defines.
- ``_``-prefixed files, non-``.py`` files, directories and modules
  without a listener class are skipped.

A missing directory yields an empty registry.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
from pathlib import Path
from types import ModuleType

from roost._internal.names import class_name
from roost.events.listener import Listener
from roost.events.registry import ListenerEntry, ListenerRegistry

logger = logging.getLogger("roost.events")


def discover_listeners(listeners_dir: str | Path) -> ListenerRegistry:
    """Walk a listeners directory and build the registry.

    Args:
        listeners_dir: Directory holding one listener module per file.

    Returns:
        A :class:`ListenerRegistry` sorted by listener identifier.
    """
    root = Path(listeners_dir)
    if not root.is_dir():
        logger.debug("Listener directory %s not found, no listeners loaded", root)
        return ListenerRegistry()

    entries: list[ListenerEntry] = []
    for item in sorted(root.iterdir()):
        if not item.is_file():
            continue
        if item.suffix != ".py":
            continue
        if item.name.startswith("_"):
            continue

        listener = _load_listener(item)
        if listener is None:
            logger.debug("No listener class in %s, skipped", item)
            continue

        events = listener_events(listener)
        logger.debug("Listener %s handles %s", item.stem, sorted(events))
        entries.append(ListenerEntry(identifier=item.stem, listener=listener, events=events))

    return ListenerRegistry(entries)


def _load_listener(file: Path) -> type[Listener] | None:
    """Load a listener module and return its listener class, if any."""
    spec = importlib.util.spec_from_file_location(f"_listener_{file.stem}", file)
    if spec is None or spec.loader is None:
        return None

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return find_listener_class(module, file.stem)


def find_listener_class(module: ModuleType, stem: str) -> type[Listener] | None:
    """Pick the listener class out of a loaded module."""
    candidates = [
        obj
        for obj in vars(module).values()
        if isinstance(obj, type)
        and issubclass(obj, Listener)
        and obj is not Listener
        and obj.__module__ == module.__name__
    ]

    wanted = class_name(stem).lower()
    for cls in candidates:
        if cls.__name__.lower() == wanted:
            return cls

    if len(candidates) == 1:
        return candidates[0]
    return None


def listener_events(listener: type[Listener]) -> frozenset[str]:
    """Return the event names a listener class handles.

    An explicit ``events`` declaration on the class wins. Otherwise every
    public, non-final, non-constructor method that none of the class's
    bases define is an event handler.
    """
    declared = listener.__dict__.get("events")
    if declared is not None:
        return frozenset(declared)

    events: set[str] = set()
    for name, member in inspect.getmembers(listener):
        if name.startswith("_") or not callable(member):
            continue
        if getattr(member, "__final__", False):
            continue
        if any(hasattr(base, name) for base in listener.__bases__):
            continue
        events.add(name)
    return frozenset(events)
