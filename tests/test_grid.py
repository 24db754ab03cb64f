"""Tests for TileGrid: construction, bounds, iteration and export."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.core.errors import InvalidConfiguration
from delve.core.grid import TileGrid

ROWS = [
    "######",
    "#..#.#",
    "#....#",
    "######",
]


class TestConstruction:
    def test_from_rows_round_trips_through_as_string(self):
        g = TileGrid.from_rows(ROWS)
        assert g.width == 6 and g.height == 4
        assert g.as_string() == "\n".join(ROWS) + "\n"
        assert g.rows() == ROWS

    def test_walkable_border_rejected(self):
        with pytest.raises(InvalidConfiguration):
            TileGrid.from_rows(["###", "#..", "###"])

    def test_wrong_cell_count_rejected(self):
        with pytest.raises(InvalidConfiguration):
            TileGrid(3, 3, [False] * 8)

    def test_zero_dimension_rejected(self):
        with pytest.raises(InvalidConfiguration):
            TileGrid(0, 3, [])

    def test_unknown_character_rejected(self):
        with pytest.raises(InvalidConfiguration):
            TileGrid.from_rows(["###", "#x#", "###"])

    def test_ragged_rows_rejected(self):
        with pytest.raises(InvalidConfiguration):
            TileGrid.from_rows(["###", "##", "###"])


class TestQueries:
    def test_is_walkable(self):
        g = TileGrid.from_rows(ROWS)
        assert g.is_walkable(1, 1)
        assert not g.is_walkable(3, 1)
        assert g.is_wall(0, 0)

    def test_out_of_bounds_is_wall(self):
        g = TileGrid.from_rows(ROWS)
        for x, y in [(-1, 0), (0, -1), (6, 1), (1, 4), (-100, 100)]:
            assert not g.is_walkable(x, y)
            assert not g.in_bounds(x, y)

    def test_iter_walkable_row_major(self):
        g = TileGrid.from_rows(ROWS)
        assert list(g.iter_walkable()) == [(1, 1), (2, 1), (4, 1), (1, 2), (2, 2), (3, 2), (4, 2)]
        assert g.walkable_count() == 7

    def test_border_covers_outer_ring_once(self):
        g = TileGrid.from_rows(ROWS)
        border = list(g.border())
        assert len(border) == len(set(border)) == 2 * 6 + 2 * 4 - 4
        assert all(not g.is_walkable(x, y) for x, y in border)


class TestIdentity:
    def test_equal_grids_share_fingerprint(self):
        a = TileGrid.from_rows(ROWS)
        b = TileGrid.from_rows(ROWS)
        assert a == b
        assert hash(a) == hash(b)
        assert a.fingerprint() == b.fingerprint()

    def test_fingerprint_changes_with_cells(self):
        a = TileGrid.from_rows(ROWS)
        b = TileGrid.from_rows(["######", "#..#.#", "#.#..#", "######"])
        assert a != b
        assert a.fingerprint() != b.fingerprint()
