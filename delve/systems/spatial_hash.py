"""Spatial hashing for proximity queries over integer coordinates."""

from __future__ import annotations

from collections import defaultdict

from delve.core.errors import InvalidConfiguration
from delve.core.models import Coord


class SpatialHashGrid:
    """Grid-based spatial index mapping bucket keys to ``(entity_id, position)`` entries.

    An entity at ``p`` lives in bucket ``(p.x // cell_size, p.y // cell_size)``
    only. Moving entities must be removed from their old position and
    reinserted (or use :meth:`move`).
    """

    __slots__ = ("_cell_size", "_buckets", "_count")

    def __init__(self, cell_size: int = 8) -> None:
        if cell_size <= 0:
            raise InvalidConfiguration(f"spatial cell_size must be > 0, got {cell_size}")
        self._cell_size = cell_size
        self._buckets: dict[Coord, list[tuple[int, Coord]]] = defaultdict(list)
        self._count = 0

    @property
    def cell_size(self) -> int:
        return self._cell_size

    def _key(self, pos: Coord) -> Coord:
        return pos[0] // self._cell_size, pos[1] // self._cell_size

    def insert(self, entity_id: int, pos: Coord) -> None:
        self._buckets[self._key(pos)].append((entity_id, (pos[0], pos[1])))
        self._count += 1

    def remove(self, entity_id: int, pos: Coord) -> None:
        """Remove one ``(entity_id, pos)`` entry; no-op if it is not present."""
        key = self._key(pos)
        bucket = self._buckets.get(key)
        if bucket is None:
            return
        entry = (entity_id, (pos[0], pos[1]))
        try:
            bucket.remove(entry)
        except ValueError:
            return
        self._count -= 1
        if not bucket:
            del self._buckets[key]

    def move(self, entity_id: int, old_pos: Coord, new_pos: Coord) -> None:
        self.remove(entity_id, old_pos)
        self.insert(entity_id, new_pos)

    def query_point(self, pos: Coord) -> list[int]:
        """Return entity IDs located exactly at *pos*."""
        bucket = self._buckets.get(self._key(pos))
        if not bucket:
            return []
        target = (pos[0], pos[1])
        return [eid for eid, p in bucket if p == target]

    def is_occupied(self, pos: Coord) -> bool:
        bucket = self._buckets.get(self._key(pos))
        if not bucket:
            return False
        target = (pos[0], pos[1])
        return any(p == target for _, p in bucket)

    def query_radius(self, center: Coord, radius: int) -> list[int]:
        """Return entity IDs whose Euclidean distance to *center* is <= *radius*.

        Scans every bucket overlapping the square ``center ± radius`` and keeps
        exact matches by squared distance.
        """
        if radius < 0:
            return []
        cx, cy = center
        min_bx, min_by = self._key((cx - radius, cy - radius))
        max_bx, max_by = self._key((cx + radius, cy + radius))
        r2 = radius * radius
        result: list[int] = []
        for bx in range(min_bx, max_bx + 1):
            for by in range(min_by, max_by + 1):
                bucket = self._buckets.get((bx, by))
                if not bucket:
                    continue
                for eid, (ex, ey) in bucket:
                    dx, dy = ex - cx, ey - cy
                    if dx * dx + dy * dy <= r2:
                        result.append(eid)
        return result

    def snapshot(self) -> SpatialHashGrid:
        """Independent copy, used as the read-only occupancy view for one tick."""
        copy = SpatialHashGrid.__new__(SpatialHashGrid)
        copy._cell_size = self._cell_size
        copy._buckets = defaultdict(list, {k: list(v) for k, v in self._buckets.items()})
        copy._count = self._count
        return copy

    def clear(self) -> None:
        self._buckets.clear()
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"SpatialHashGrid(cell_size={self._cell_size}, entities={self._count}, buckets={len(self._buckets)})"
