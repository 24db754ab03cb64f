"""Thread-safe bounded log of gameplay events exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LevelEvent:
    """A single gameplay event for the API event feed."""

    tick: int
    category: str
    message: str
    entity_ids: tuple[int, ...] = ()


class EventLog:
    """Ring buffer of the most recent events. Writers append; readers copy a slice.

    Writes happen once per tick batch from the session; reads come from API
    threads, so a simple lock is enough.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int = 1000) -> None:
        self._buffer: deque[LevelEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, event: LevelEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def append_many(self, events: list[LevelEvent]) -> None:
        with self._lock:
            self._buffer.extend(events)

    def since_tick(self, tick: int) -> list[LevelEvent]:
        """Return all retained events with tick >= *tick*."""
        with self._lock:
            return [e for e in self._buffer if e.tick >= tick]

    def latest(self, count: int = 50) -> list[LevelEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
