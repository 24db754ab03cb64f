"""Level and session configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from delve.core.enums import CachePolicy
from delve.core.errors import InvalidConfiguration
from delve.systems.floor_generator import validate_parameters


@dataclass(frozen=True)
class LevelConfig:
    """Immutable configuration for level generation and the tick loop."""

    # Generation
    seed: int = 42
    width: int = 180
    height: int = 60
    fill_probability: float = 0.45
    iterations: int = 5
    connect_caves: bool = False            # Tunnel between regions after smoothing

    # Spatial hash
    spatial_cell_size: int = 8

    # Pathfinding
    path_cache_capacity: int = 500
    path_cache_policy: str = "clear_on_full"   # or "lru"
    max_search_nodes: int | None = None        # None = bounded only by grid size

    # Agents
    agent_count: int = 8
    agent_detection_radius: int = 5
    agent_speed: float = 0.5                   # Tiles per tick
    agent_max_range: int | None = None         # Leash around spawn point
    spawn_min_player_distance: int = 8
    spawn_min_spacing: int = 5

    # Session
    max_ticks: int = 1000

    # Logging
    log_level: str = "INFO"

    def validate(self) -> None:
        """Raise InvalidConfiguration if any parameter cannot produce a level."""
        validate_parameters(self.width, self.height, self.fill_probability, self.iterations)
        if self.spatial_cell_size <= 0:
            raise InvalidConfiguration(f"spatial_cell_size must be > 0, got {self.spatial_cell_size}")
        if self.path_cache_capacity < 1:
            raise InvalidConfiguration(f"path_cache_capacity must be >= 1, got {self.path_cache_capacity}")
        if self.path_cache_policy.upper() not in CachePolicy.__members__:
            raise InvalidConfiguration(f"unknown path_cache_policy {self.path_cache_policy!r}")
        if self.max_search_nodes is not None and self.max_search_nodes < 1:
            raise InvalidConfiguration(f"max_search_nodes must be >= 1, got {self.max_search_nodes}")
        if self.agent_count < 0:
            raise InvalidConfiguration(f"agent_count must be >= 0, got {self.agent_count}")
        if self.agent_speed < 0:
            raise InvalidConfiguration(f"agent_speed must be >= 0, got {self.agent_speed}")
