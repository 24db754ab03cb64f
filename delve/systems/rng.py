"""Domain-separated deterministic RNG using xxhash.

Every draw is a pure function of ``(seed, domain, key, step)``, so results do
not depend on call order. Generation hashes the tile index as the key;
wandering hashes the agent id and the tick.

Formula: RNG_Value = Hash(Seed, Domain, Key, Step)
"""

from __future__ import annotations

import struct
from collections.abc import Sequence
from typing import TypeVar

import xxhash

from delve.core.enums import Domain

T = TypeVar("T")

_MASK64 = (1 << 64) - 1


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Accepts any 64-bit seed; negative seeds are folded into the unsigned range.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = _MASK64

    def __init__(self, seed: int) -> None:
        self._seed = seed & _MASK64

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, step: int) -> int:
        payload = struct.pack("<QiQQ", self._seed, domain.value, key & _MASK64, step & _MASK64)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, step: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, step) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, step: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, step)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, step: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, step) < probability

    def shuffled(self, domain: Domain, key: int, step: int, items: Sequence[T]) -> list[T]:
        """Fisher-Yates shuffle of *items* driven by consecutive draws."""
        out = list(items)
        base = step * len(out)
        for i in range(len(out) - 1, 0, -1):
            j = self.next_int(domain, key, base + i, 0, i)
            out[i], out[j] = out[j], out[i]
        return out
