"""Walkable/wall tile grid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import xxhash

from delve.core.errors import InvalidConfiguration
from delve.core.models import Coord

WALL_CHAR = "#"
FLOOR_CHAR = "."


class TileGrid:
    """Immutable 2D walkability grid backed by a flat tuple.

    Cells are indexed ``y * width + x``; ``True`` means walkable. The outer
    ring is always wall, and construction rejects cells that break that.
    """

    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int, cells: Iterable[bool]) -> None:
        if width < 1 or height < 1:
            raise InvalidConfiguration(f"grid dimensions must be positive, got {width}x{height}")
        flat = tuple(bool(c) for c in cells)
        if len(flat) != width * height:
            raise InvalidConfiguration(
                f"expected {width * height} cells for {width}x{height}, got {len(flat)}"
            )
        self.width = width
        self.height = height
        self._cells = flat
        if any(self._cells[self._idx(x, y)] for x, y in self.border()):
            raise InvalidConfiguration("outer ring of a tile grid must be wall")

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> TileGrid:
        """Build a grid from ``#``/``.`` rows (the inverse of :meth:`as_string`)."""
        if not rows:
            raise InvalidConfiguration("cannot build a grid from zero rows")
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise InvalidConfiguration("all rows must have the same length")
        cells: list[bool] = []
        for row in rows:
            for ch in row:
                if ch not in (WALL_CHAR, FLOOR_CHAR):
                    raise InvalidConfiguration(f"unknown tile character {ch!r}")
                cells.append(ch == FLOOR_CHAR)
        return cls(width, len(rows), cells)

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    @property
    def cells(self) -> tuple[bool, ...]:
        return self._cells

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, x: int, y: int) -> bool:
        """Bounds-checked walkability; out-of-range coordinates are walls."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._cells[y * self.width + x]
        return False

    def is_wall(self, x: int, y: int) -> bool:
        return not self.is_walkable(x, y)

    def walkable_count(self) -> int:
        return sum(self._cells)

    def iter_walkable(self) -> Iterator[Coord]:
        """Yield walkable tiles in row-major order."""
        w = self.width
        for i, walkable in enumerate(self._cells):
            if walkable:
                yield i % w, i // w

    def border(self) -> Iterator[Coord]:
        """Yield every tile of the outer ring (corners once)."""
        w, h = self.width, self.height
        for x in range(w):
            yield x, 0
            if h > 1:
                yield x, h - 1
        for y in range(1, h - 1):
            yield 0, y
            if w > 1:
                yield w - 1, y

    # -- export --

    def rows(self) -> list[str]:
        w = self.width
        return [
            "".join(FLOOR_CHAR if c else WALL_CHAR for c in self._cells[y * w:(y + 1) * w])
            for y in range(self.height)
        ]

    def as_string(self) -> str:
        return "\n".join(self.rows()) + "\n"

    def fingerprint(self) -> str:
        """Stable hex digest of dimensions and cells, for comparing grids across runs."""
        h = xxhash.xxh64()
        h.update(f"{self.width}x{self.height}:".encode())
        h.update(bytes(self._cells))
        return h.hexdigest()

    # -- comparison --

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._cells == other._cells
        )

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._cells))

    def __repr__(self) -> str:
        return f"TileGrid({self.width}x{self.height}, walkable={self.walkable_count()})"
