"""Bounded memo of next-step results keyed by ``(from, to)``.

Only successful searches are stored; a missing entry means "search again".
Eviction strategy is pluggable behind :class:`PathCache`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass

from delve.core.enums import CachePolicy
from delve.core.errors import InvalidConfiguration
from delve.core.models import Coord

logger = logging.getLogger(__name__)

CacheKey = tuple[Coord, Coord]


@dataclass(frozen=True, slots=True)
class CacheStats:
    entries: int
    capacity: int
    hits: int
    misses: int
    clears: int


class PathCache(ABC):
    """Common bookkeeping for next-step caches; subclasses decide eviction."""

    __slots__ = ("_capacity", "_hits", "_misses", "_clears")

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise InvalidConfiguration(f"path cache capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._hits = 0
        self._misses = 0
        self._clears = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, start: Coord, goal: Coord) -> Coord | None:
        step = self._lookup((start, goal))
        if step is None:
            self._misses += 1
        else:
            self._hits += 1
        return step

    def put(self, start: Coord, goal: Coord, step: Coord) -> None:
        self._store((start, goal), step)

    def clear(self) -> None:
        if len(self):
            logger.debug("Clearing path cache (%d entries)", len(self))
        self._reset()
        self._clears += 1

    def stats(self) -> CacheStats:
        return CacheStats(
            entries=len(self),
            capacity=self._capacity,
            hits=self._hits,
            misses=self._misses,
            clears=self._clears,
        )

    def __contains__(self, key: object) -> bool:
        return self._peek(key) is not None

    @abstractmethod
    def _lookup(self, key: CacheKey) -> Coord | None: ...

    @abstractmethod
    def _peek(self, key: object) -> Coord | None: ...

    @abstractmethod
    def _store(self, key: CacheKey, step: Coord) -> None: ...

    @abstractmethod
    def _reset(self) -> None: ...

    @abstractmethod
    def __len__(self) -> int: ...


class ClearOnFullCache(PathCache):
    """Drops every entry when a new key would push the cache past capacity.

    Not a least-recently-used cache: a full cache is emptied wholesale and
    then refilled on demand.
    """

    __slots__ = ("_entries",)

    def __init__(self, capacity: int) -> None:
        super().__init__(capacity)
        self._entries: dict[CacheKey, Coord] = {}

    def _lookup(self, key: CacheKey) -> Coord | None:
        return self._entries.get(key)

    def _peek(self, key: object) -> Coord | None:
        return self._entries.get(key)  # type: ignore[call-overload]

    def _store(self, key: CacheKey, step: Coord) -> None:
        if key not in self._entries and len(self._entries) >= self._capacity:
            self.clear()
        self._entries[key] = step

    def _reset(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class LRUPathCache(PathCache):
    """Evicts only the least recently used entry when full."""

    __slots__ = ("_entries", "_evictions")

    def __init__(self, capacity: int) -> None:
        super().__init__(capacity)
        self._entries: OrderedDict[CacheKey, Coord] = OrderedDict()
        self._evictions = 0

    @property
    def evictions(self) -> int:
        return self._evictions

    def _lookup(self, key: CacheKey) -> Coord | None:
        step = self._entries.get(key)
        if step is not None:
            self._entries.move_to_end(key)
        return step

    def _peek(self, key: object) -> Coord | None:
        return self._entries.get(key)  # type: ignore[call-overload]

    def _store(self, key: CacheKey, step: Coord) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self._capacity:
            self._entries.popitem(last=False)
            self._evictions += 1
        self._entries[key] = step

    def _reset(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# Default policy for the engine.
PathfindingCache = ClearOnFullCache


def make_path_cache(policy: CachePolicy | str, capacity: int) -> PathCache:
    """Build a cache for *policy* (an enum member or its lower-case name)."""
    if isinstance(policy, str):
        try:
            policy = CachePolicy[policy.upper()]
        except KeyError:
            raise InvalidConfiguration(f"unknown path cache policy {policy!r}") from None
    if policy == CachePolicy.LRU:
        return LRUPathCache(capacity)
    return ClearOnFullCache(capacity)
