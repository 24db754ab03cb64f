"""Cellular-automata cave generation.

Tiles are seeded as wall with probability ``fill_probability`` and then
smoothed for ``iterations`` passes. Early passes also turn tiles in wide open
areas into wall (few walls within distance 2), which breaks large caverns
into pillars; later passes only apply the majority rule.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from delve.core.enums import Domain
from delve.core.errors import InvalidConfiguration
from delve.core.grid import TileGrid
from delve.core.models import Coord, manhattan
from delve.core.rooms import Room, RoomIndex
from delve.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from delve.config import LevelConfig

logger = logging.getLogger(__name__)

MIN_DIMENSION = 3
OPEN_AREA_PASSES = 3
WALL_MAJORITY = 5
OPEN_AREA_MAX_WALLS = 2

# Chebyshev rings around a tile.
_RING_1: tuple[Coord, ...] = tuple(
    (dx, dy) for dy in range(-1, 2) for dx in range(-1, 2) if (dx, dy) != (0, 0)
)
_RING_2: tuple[Coord, ...] = tuple(
    (dx, dy) for dy in range(-2, 3) for dx in range(-2, 3) if max(abs(dx), abs(dy)) == 2
)


def validate_parameters(width: int, height: int, fill_probability: float, iterations: int) -> None:
    if width < MIN_DIMENSION or height < MIN_DIMENSION:
        raise InvalidConfiguration(
            f"floor must be at least {MIN_DIMENSION}x{MIN_DIMENSION} to hold a border, got {width}x{height}"
        )
    if math.isnan(fill_probability) or not 0.0 <= fill_probability <= 1.0:
        raise InvalidConfiguration(f"fill_probability must be within [0, 1], got {fill_probability}")
    if iterations < 0:
        raise InvalidConfiguration(f"iterations must be >= 0, got {iterations}")


def _count_walls(cells: list[bool], width: int, height: int, x: int, y: int, ring: tuple[Coord, ...]) -> int:
    """Count walls among *ring* offsets around (x, y); out-of-bounds counts as wall."""
    count = 0
    for dx, dy in ring:
        nx, ny = x + dx, y + dy
        if not (0 <= nx < width and 0 <= ny < height) or not cells[ny * width + nx]:
            count += 1
    return count


def smooth_pass(cells: list[bool], width: int, height: int, iteration: int) -> list[bool]:
    """Apply one automaton pass; reads only *cells* and returns a new buffer."""
    out = list(cells)
    open_area_rule = iteration < OPEN_AREA_PASSES
    for y in range(1, height - 1):
        row = y * width
        for x in range(1, width - 1):
            n1 = _count_walls(cells, width, height, x, y, _RING_1)
            wall = n1 >= WALL_MAJORITY
            if not wall and open_area_rule:
                wall = _count_walls(cells, width, height, x, y, _RING_2) <= OPEN_AREA_MAX_WALLS
            out[row + x] = not wall
    return out


class _UnionFind:
    __slots__ = ("_parent", "count")

    def __init__(self, n: int) -> None:
        self._parent = list(range(n))
        self.count = n

    def find(self, x: int) -> int:
        root = x
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[x] != root:
            self._parent[x], x = root, self._parent[x]
        return root

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self._parent[ra] = rb
            self.count -= 1

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


def _anchor(room: Room) -> Coord:
    """Room tile closest to the room centre (Manhattan, then row-major)."""
    if room.center in room.tiles:
        return room.center
    return min(room.tiles, key=lambda t: (manhattan(t, room.center), t[1], t[0]))


def _carve(cells: list[bool], width: int, start: Coord, end: Coord) -> None:
    """Open an L-shaped corridor: horizontal from *start*, then vertical to *end*."""
    x, y = start
    x2, y2 = end
    step_x = 1 if x2 > x else -1
    while x != x2:
        cells[y * width + x] = True
        x += step_x
    step_y = 1 if y2 > y else -1
    while y != y2:
        cells[y * width + x] = True
        y += step_y
    cells[y * width + x] = True


def connect_caves(cells: list[bool], width: int, height: int) -> int:
    """Tunnel between nearest disconnected regions until one region remains.

    Returns the number of tunnels carved. Tunnels run between interior tiles,
    so the border ring is untouched.
    """
    rooms = RoomIndex.build(TileGrid(width, height, cells)).rooms()
    if len(rooms) <= 1:
        return 0

    anchors = [_anchor(r) for r in rooms]
    uf = _UnionFind(len(rooms))
    tunnels = 0
    while uf.count > 1:
        for i, room in enumerate(rooms):
            closest = -1
            closest_distance = math.inf
            for j, other in enumerate(rooms):
                if j == i or uf.connected(i, j):
                    continue
                d = manhattan(room.center, other.center)
                if d < closest_distance:
                    closest_distance = d
                    closest = j
            if closest >= 0:
                _carve(cells, width, anchors[i], anchors[closest])
                uf.union(i, closest)
                tunnels += 1
    return tunnels


class FloorGenerator:
    """Builds cave floors; the same inputs always yield the same grid."""

    __slots__ = ("_connect_caves",)

    def __init__(self, connect_caves: bool = False) -> None:
        self._connect_caves = connect_caves

    @classmethod
    def from_config(cls, config: LevelConfig) -> FloorGenerator:
        return cls(connect_caves=config.connect_caves)

    def generate(
        self,
        seed: int,
        width: int,
        height: int,
        fill_probability: float,
        iterations: int,
    ) -> TileGrid:
        """Generate a floor. Raises InvalidConfiguration before doing any work on bad input."""
        validate_parameters(width, height, fill_probability, iterations)
        rng = DeterministicRNG(seed)

        cells = [False] * (width * height)
        for y in range(1, height - 1):
            for x in range(1, width - 1):
                idx = y * width + x
                cells[idx] = not rng.next_bool(Domain.TERRAIN, idx, 0, fill_probability)

        for iteration in range(iterations):
            cells = smooth_pass(cells, width, height, iteration)

        tunnels = connect_caves(cells, width, height) if self._connect_caves else 0

        grid = TileGrid(width, height, cells)
        logger.info(
            "Generated %dx%d floor (seed=%d, p=%.2f, iterations=%d, tunnels=%d): %d walkable, fingerprint=%s",
            width, height, seed, fill_probability, iterations, tunnels,
            grid.walkable_count(), grid.fingerprint(),
        )
        return grid


def generate(seed: int, width: int, height: int, fill_probability: float, iterations: int) -> TileGrid:
    """Generate a floor without cave connection."""
    return FloorGenerator().generate(seed, width, height, fill_probability, iterations)
