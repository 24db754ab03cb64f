"""A generated level: grid, rooms, live occupancy and its pathfinder.

Everything here lives and dies with the level; nothing is shared between
levels or held at module scope.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.ai.path_cache import make_path_cache
from delve.ai.pathfinding import PathfindingEngine
from delve.core.rooms import RoomIndex
from delve.systems.floor_generator import FloorGenerator
from delve.systems.spatial_hash import SpatialHashGrid

if TYPE_CHECKING:
    from delve.config import LevelConfig
    from delve.core.grid import TileGrid
    from delve.core.models import Coord

logger = logging.getLogger(__name__)


class Level:
    """Owned state for one floor of the dungeon."""

    __slots__ = ("seed", "grid", "rooms", "occupancy", "pathfinder")

    def __init__(
        self,
        seed: int,
        grid: TileGrid,
        occupancy: SpatialHashGrid,
        pathfinder: PathfindingEngine,
    ) -> None:
        self.seed = seed
        self.grid = grid
        self.rooms = RoomIndex.build(grid)
        self.occupancy = occupancy
        self.pathfinder = pathfinder

    @classmethod
    def generate(cls, config: LevelConfig, seed: int | None = None) -> Level:
        """Validate *config*, then build a fresh level (seed defaults to ``config.seed``)."""
        config.validate()
        if seed is None:
            seed = config.seed
        grid = FloorGenerator.from_config(config).generate(
            seed, config.width, config.height, config.fill_probability, config.iterations,
        )
        cache = make_path_cache(config.path_cache_policy, config.path_cache_capacity)
        level = cls(
            seed=seed,
            grid=grid,
            occupancy=SpatialHashGrid(config.spatial_cell_size),
            pathfinder=PathfindingEngine(cache, max_nodes=config.max_search_nodes),
        )
        largest = level.rooms.largest_room()
        logger.info(
            "Level seed=%d: %d rooms, largest=%d tiles",
            seed, len(level.rooms), largest.size if largest else 0,
        )
        return level

    def is_walkable(self, x: int, y: int) -> bool:
        return self.grid.is_walkable(x, y)

    def next_step(self, start: Coord, goal: Coord, occupancy: SpatialHashGrid | None = None) -> Coord | None:
        """Next step from *start* toward *goal*, using live occupancy unless a snapshot is given."""
        return self.pathfinder.next_step(
            self.grid,
            occupancy if occupancy is not None else self.occupancy,
            start,
            goal,
            rooms=self.rooms,
        )

    def teardown(self) -> None:
        """Drop cached paths and occupancy once the level is left."""
        self.pathfinder.invalidate()
        self.occupancy.clear()
