from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

Listener = Callable[..., Any]


@dataclass(eq=False)
class ListenerEntry:
    """One registration of a listener. Identity distinguishes duplicates."""

    listener: Listener
    once: bool = False


class ListenerRegistry:
    """Local publish/subscribe table: event name -> ordered listener entries.

    Events appear in `event_names()` in the order they first gained a
    listener, and disappear as soon as their last entry is removed.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, List[ListenerEntry]] = {}

    def add(self, event: str, listener: Listener, *, once: bool = False, prepend: bool = False) -> ListenerEntry:
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {type(listener).__name__}")
        entry = ListenerEntry(listener, once)
        entries = self._entries.setdefault(event, [])
        if prepend:
            entries.insert(0, entry)
        else:
            entries.append(entry)
        return entry

    def remove(self, event: str, listener: Listener) -> bool:
        """Remove the most recently added registration of `listener`."""
        entries = self._entries.get(event)
        if not entries:
            return False
        for index in range(len(entries) - 1, -1, -1):
            if entries[index].listener == listener:
                del entries[index]
                self._prune(event)
                return True
        return False

    def discard(self, event: str, entry: ListenerEntry) -> bool:
        """Remove a specific registration, if it is still present."""
        entries = self._entries.get(event)
        if not entries:
            return False
        for index, candidate in enumerate(entries):
            if candidate is entry:
                del entries[index]
                self._prune(event)
                return True
        return False

    def remove_all(self, event: Optional[str] = None) -> List[str]:
        """Drop every listener of `event` (or of every event); return the events cleared."""
        if event is None:
            cleared = list(self._entries)
            self._entries.clear()
            return cleared
        if self._entries.pop(event, None):
            return [event]
        return []

    def entries(self, event: str) -> List[ListenerEntry]:
        return list(self._entries.get(event, ()))

    def listeners(self, event: str) -> List[Listener]:
        return [entry.listener for entry in self._entries.get(event, ())]

    def listener_count(self, event: str) -> int:
        return len(self._entries.get(event, ()))

    def event_names(self) -> List[str]:
        return list(self._entries)

    def _prune(self, event: str) -> None:
        if not self._entries.get(event):
            self._entries.pop(event, None)


__all__ = ["Listener", "ListenerEntry", "ListenerRegistry"]
