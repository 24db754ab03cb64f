"""Tests for LevelConfig validation and the Level context."""

import sys
import os
from dataclasses import replace

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.ai.path_cache import LRUPathCache
from delve.config import LevelConfig
from delve.core.errors import InvalidConfiguration
from delve.core.level import Level


class TestLevelConfig:
    def test_defaults_are_valid(self):
        LevelConfig().validate()

    @pytest.mark.parametrize(
        "field, value",
        [
            ("width", 1),
            ("fill_probability", 2.0),
            ("iterations", -3),
            ("spatial_cell_size", 0),
            ("path_cache_capacity", 0),
            ("path_cache_policy", "random"),
            ("max_search_nodes", 0),
            ("agent_count", -1),
            ("agent_speed", -0.5),
        ],
    )
    def test_invalid_field(self, field, value):
        with pytest.raises(InvalidConfiguration):
            replace(LevelConfig(), **{field: value}).validate()

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            replace(LevelConfig(), height=0).validate()


class TestLevel:
    def test_generate_uses_config(self):
        cfg = LevelConfig(seed=5, width=40, height=20, path_cache_policy="lru", path_cache_capacity=7)
        level = Level.generate(cfg)
        assert level.seed == 5
        assert (level.grid.width, level.grid.height) == (40, 20)
        assert isinstance(level.pathfinder.cache, LRUPathCache)
        assert level.pathfinder.cache.capacity == 7
        assert len(level.occupancy) == 0

    def test_seed_override(self):
        cfg = LevelConfig(width=40, height=20)
        assert Level.generate(cfg, seed=8).grid == Level.generate(replace(cfg, seed=8)).grid

    def test_levels_do_not_share_state(self):
        cfg = LevelConfig(width=40, height=20)
        a, b = Level.generate(cfg), Level.generate(cfg)
        assert a.grid == b.grid
        assert a.occupancy is not b.occupancy
        assert a.pathfinder is not b.pathfinder

    def test_teardown(self):
        level = Level.generate(LevelConfig(width=40, height=20))
        tiles = sorted(level.rooms.largest_room().tiles)
        level.occupancy.insert(1, tiles[0])
        level.next_step(tiles[0], tiles[-1])
        level.teardown()
        assert len(level.occupancy) == 0
        assert len(level.pathfinder.cache) == 0
