"""Tests for cellular-automata floor generation and cave connection."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.core.errors import InvalidConfiguration
from delve.core.grid import TileGrid
from delve.core.rooms import RoomIndex
from delve.systems.floor_generator import (
    FloorGenerator,
    connect_caves,
    generate,
    smooth_pass,
)


def _open_cells(w: int, h: int) -> list[bool]:
    """Interior walkable, border wall."""
    return [0 < x < w - 1 and 0 < y < h - 1 for y in range(h) for x in range(w)]


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

class TestGenerate:
    def test_reference_floor(self):
        grid = generate(seed=42, width=20, height=20, fill_probability=0.45, iterations=5)
        assert all(not grid.is_walkable(x, y) for x, y in grid.border())
        largest = RoomIndex.build(grid).largest_room()
        assert largest is not None and largest.size > 0
        again = generate(seed=42, width=20, height=20, fill_probability=0.45, iterations=5)
        assert again == grid
        assert again.fingerprint() == grid.fingerprint()

    def test_different_seeds_differ(self):
        a = generate(1, 40, 30, 0.45, 5)
        b = generate(2, 40, 30, 0.45, 5)
        assert a != b

    def test_border_always_wall(self):
        for seed in range(5):
            grid = generate(seed, 25, 12, 0.3, 2)
            assert all(grid.is_wall(x, y) for x, y in grid.border())

    def test_zero_fill_zero_iterations_opens_interior(self):
        grid = generate(3, 10, 8, 0.0, 0)
        assert grid.walkable_count() == 8 * 6

    def test_full_fill_is_solid(self):
        grid = generate(3, 10, 8, 1.0, 4)
        assert grid.walkable_count() == 0
        assert RoomIndex.build(grid).largest_room() is None

    def test_minimum_dimension(self):
        grid = generate(3, 3, 3, 0.0, 0)
        assert list(grid.iter_walkable()) == [(1, 1)]

    @pytest.mark.parametrize(
        "width, height, p, iterations",
        [
            (2, 10, 0.45, 5),
            (10, 2, 0.45, 5),
            (10, 10, -0.1, 5),
            (10, 10, 1.5, 5),
            (10, 10, float("nan"), 5),
            (10, 10, 0.45, -1),
        ],
    )
    def test_invalid_parameters(self, width, height, p, iterations):
        with pytest.raises(InvalidConfiguration):
            generate(42, width, height, p, iterations)


# ---------------------------------------------------------------------------
# Smoothing rules
# ---------------------------------------------------------------------------

class TestSmoothPass:
    def test_corner_becomes_wall_by_majority(self):
        cells = smooth_pass(_open_cells(7, 7), 7, 7, iteration=3)
        grid = TileGrid(7, 7, cells)
        assert grid.is_wall(1, 1)
        assert grid.is_walkable(3, 3)

    def test_open_area_rule_in_early_passes(self):
        # (3, 3) sees no walls within distance 1 or on the distance-2 ring.
        cells = smooth_pass(_open_cells(7, 7), 7, 7, iteration=0)
        assert not cells[3 * 7 + 3]

    def test_edge_midpoint_keeps_floor_late(self):
        # (3, 1) has three wall neighbours; below the majority threshold.
        cells = smooth_pass(_open_cells(7, 7), 7, 7, iteration=4)
        assert cells[1 * 7 + 3]

    def test_input_buffer_untouched(self):
        src = _open_cells(7, 7)
        before = list(src)
        smooth_pass(src, 7, 7, iteration=0)
        assert src == before


# ---------------------------------------------------------------------------
# Cave connection
# ---------------------------------------------------------------------------

class TestConnectCaves:
    def test_two_pockets_joined(self):
        grid = TileGrid.from_rows([
            "#########",
            "#..###..#",
            "#..###..#",
            "#########",
        ])
        cells = list(grid.cells)
        tunnels = connect_caves(cells, grid.width, grid.height)
        joined = TileGrid(grid.width, grid.height, cells)
        assert tunnels >= 1
        assert len(RoomIndex.build(joined)) == 1

    def test_single_room_untouched(self):
        cells = _open_cells(6, 6)
        assert connect_caves(cells, 6, 6) == 0
        assert cells == _open_cells(6, 6)

    def test_generator_option_yields_one_region(self):
        grid = FloorGenerator(connect_caves=True).generate(11, 48, 24, 0.45, 5)
        assert len(RoomIndex.build(grid)) <= 1
        assert all(grid.is_wall(x, y) for x, y in grid.border())

    def test_connection_is_deterministic(self):
        gen = FloorGenerator(connect_caves=True)
        assert gen.generate(5, 40, 20, 0.45, 5) == gen.generate(5, 40, 20, 0.45, 5)
