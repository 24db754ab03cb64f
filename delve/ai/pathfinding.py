"""A* next-step pathfinding over a TileGrid.

Provides a `PathfindingEngine` that answers "which tile should an agent at A
step onto to approach B?". Only the first step is returned; full paths are
never handed out, which keeps the cache small.

Usage:
    engine = PathfindingEngine(PathfindingCache(500))
    step = engine.next_step(grid, occupancy, start, goal)   # (x, y) or None
"""

from __future__ import annotations

import heapq
import logging
from typing import TYPE_CHECKING

from delve.ai.path_cache import ClearOnFullCache, PathCache
from delve.core.models import Coord, NEIGHBOR_OFFSETS

if TYPE_CHECKING:
    from delve.core.grid import TileGrid
    from delve.core.rooms import RoomIndex
    from delve.systems.spatial_hash import SpatialHashGrid

logger = logging.getLogger(__name__)

DEFAULT_CACHE_CAPACITY = 500


class PathfindingEngine:
    """A* pathfinder with a memo of first steps.

    Moves are 4-directional with unit cost and a Manhattan heuristic.
    Neighbours are enumerated east, west, south, north; open-set ties on
    ``f`` go to the smaller ``h``, then to the earlier push, so a given grid
    and occupancy always produce the same step.

    The cache is cleared whenever a different grid object is passed in.
    """

    __slots__ = ("_cache", "_max_nodes", "_grid", "search_count")

    def __init__(self, cache: PathCache | None = None, max_nodes: int | None = None) -> None:
        self._cache = cache if cache is not None else ClearOnFullCache(DEFAULT_CACHE_CAPACITY)
        self._max_nodes = max_nodes
        self._grid: TileGrid | None = None
        self.search_count = 0

    @property
    def cache(self) -> PathCache:
        return self._cache

    def invalidate(self) -> None:
        """Forget the current grid and every cached step (level change)."""
        self._grid = None
        self._cache.clear()

    def next_step(
        self,
        grid: TileGrid,
        occupancy: SpatialHashGrid,
        start: Coord,
        goal: Coord,
        rooms: RoomIndex | None = None,
    ) -> Coord | None:
        """Return the tile adjacent to *start* on a shortest path to *goal*.

        None means "no step": the goal is a wall, already reached, in another
        room (when *rooms* is given), or cut off by walls and occupied tiles.
        Callers should fall back to other behaviour and ask again next tick.
        """
        if grid is not self._grid:
            if self._grid is not None:
                logger.debug("Grid changed; invalidating path cache")
            self._cache.clear()
            self._grid = grid

        start = (start[0], start[1])
        goal = (goal[0], goal[1])
        if start == goal or not grid.is_walkable(*goal):
            return None
        if rooms is not None:
            ra, rb = rooms.room_of(start), rooms.room_of(goal)
            if ra is not None and rb is not None and ra != rb:
                return None

        cached = self._cache.get(start, goal)
        if cached is not None and (cached == goal or not occupancy.is_occupied(cached)):
            return cached

        step = self._search(grid, occupancy, start, goal)
        if step is not None:
            self._cache.put(start, goal, step)
        return step

    def _search(
        self,
        grid: TileGrid,
        occupancy: SpatialHashGrid,
        start: Coord,
        goal: Coord,
    ) -> Coord | None:
        self.search_count += 1
        gx, gy = goal
        max_nodes = self._max_nodes if self._max_nodes is not None else grid.width * grid.height

        # Open set entries: (f, h, counter, x, y)
        counter = 0
        h0 = abs(start[0] - gx) + abs(start[1] - gy)
        open_heap: list[tuple[int, int, int, int, int]] = [(h0, h0, counter, start[0], start[1])]
        g_score: dict[Coord, int] = {start: 0}
        came_from: dict[Coord, Coord] = {}
        closed: set[Coord] = set()
        nodes_explored = 0

        while open_heap and nodes_explored < max_nodes:
            _, _, _, cx, cy = heapq.heappop(open_heap)
            ckey = (cx, cy)

            if cx == gx and cy == gy:
                return self._first_step(came_from, ckey, start)

            if ckey in closed:
                continue
            closed.add(ckey)
            nodes_explored += 1

            tentative_g = g_score[ckey] + 1
            for dx, dy in NEIGHBOR_OFFSETS:
                nx, ny = cx + dx, cy + dy
                nkey = (nx, ny)
                if nkey in closed or not grid.is_walkable(nx, ny):
                    continue
                if occupancy.is_occupied(nkey) and nkey != goal:
                    continue
                if tentative_g < g_score.get(nkey, tentative_g + 1):
                    g_score[nkey] = tentative_g
                    came_from[nkey] = ckey
                    h = abs(nx - gx) + abs(ny - gy)
                    counter += 1
                    heapq.heappush(open_heap, (tentative_g + h, h, counter, nx, ny))

        if nodes_explored >= max_nodes:
            logger.debug("A* gave up after %d nodes: %s -> %s", nodes_explored, start, goal)
        return None

    @staticmethod
    def _first_step(came_from: dict[Coord, Coord], current: Coord, start: Coord) -> Coord:
        """Walk parents back from the goal until the tile whose parent is *start*."""
        while came_from[current] != start:
            current = came_from[current]
        return current
