"""ListenerRegistry — listener identifier to handled event names.

Built once at startup by :func:`roost.events.discovery.discover_listeners`
and read-only while requests are handled. Identifiers are kept sorted so
trigger order is deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from roost.events.listener import Listener

if TYPE_CHECKING:
    from roost.app import App

logger = logging.getLogger("roost.events")


@dataclass(frozen=True, slots=True)
class ListenerEntry:
    """A discovered listener class and the events it handles."""

    identifier: str
    listener: type[Listener]
    events: frozenset[str]


class ListenerRegistry(Mapping[str, frozenset[str]]):
    """Immutable mapping of listener identifier -> event names.

    Two registries are equal when they hold the same identifiers, in the
    same order, with the same event sets. Listener classes are not
    compared, so re-discovering an unchanged directory yields an equal
    registry.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[ListenerEntry] = ()) -> None:
        ordered = sorted(entries, key=lambda entry: entry.identifier)
        self._entries: dict[str, ListenerEntry] = {entry.identifier: entry for entry in ordered}

    def __getitem__(self, identifier: str) -> frozenset[str]:
        return self._entries[identifier].events

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListenerRegistry):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __hash__(self) -> int:
        return hash(tuple(self.items()))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {sorted(v)!r}" for k, v in self.items())
        return f"ListenerRegistry({{{items}}})"

    def entry(self, identifier: str) -> ListenerEntry:
        return self._entries[identifier]

    def handlers(self, event: str) -> list[ListenerEntry]:
        """Return the entries handling *event*, in identifier order."""
        return [entry for entry in self._entries.values() if event in entry.events]

    def as_dict(self) -> dict[str, list[str]]:
        return {identifier: sorted(events) for identifier, events in self.items()}


def trigger(registry: ListenerRegistry, app: App, event: str, *payload: Any) -> None:
    """Call every listener handling *event* with *payload*.

    Each handling listener is instantiated fresh, bound to *app* and has
    its like-named method called with the payload positionally.
    Listener exceptions propagate to the caller.
    """
    for entry in registry.handlers(event):
        logger.debug("Triggering %s on listener %s", event, entry.identifier)
        listener = entry.listener()
        listener.set_app(app)
        getattr(listener, event)(*payload)
