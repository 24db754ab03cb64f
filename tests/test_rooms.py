"""Tests for room labelling (4-connected flood fill)."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from delve.core.grid import TileGrid
from delve.core.rooms import RoomIndex
from delve.systems.floor_generator import generate

ROWS = [
    "#######",
    "#..#..#",
    "#..#..#",
    "###.###",
    "#######",
]


class TestRoomLabelling:
    def test_rooms_in_discovery_order(self):
        rooms = RoomIndex.build(TileGrid.from_rows(ROWS))
        assert len(rooms) == 3
        first, second, third = rooms.rooms()
        assert first.tiles == {(1, 1), (2, 1), (1, 2), (2, 2)}
        assert second.tiles == {(4, 1), (5, 1), (4, 2), (5, 2)}
        assert third.tiles == {(3, 3)}
        assert [r.id for r in rooms.rooms()] == [0, 1, 2]

    def test_diagonal_tiles_are_separate(self):
        # (3, 3) touches (2, 2) and (4, 2) only diagonally.
        rooms = RoomIndex.build(TileGrid.from_rows(ROWS))
        assert rooms.room(2).size == 1
        assert not rooms.same_room((2, 2), (3, 3))

    def test_center_is_integer_mean(self):
        rooms = RoomIndex.build(TileGrid.from_rows(ROWS))
        assert rooms.room(0).center == (1, 1)
        assert rooms.room(1).center == (4, 1)
        assert rooms.room(2).center == (3, 3)

    def test_largest_room_tie_goes_to_lowest_id(self):
        rooms = RoomIndex.build(TileGrid.from_rows(ROWS))
        assert rooms.largest_room().id == 0

    def test_room_of(self):
        rooms = RoomIndex.build(TileGrid.from_rows(ROWS))
        assert rooms.room_of((5, 2)) == 1
        assert rooms.room_of((0, 0)) is None
        assert rooms.room_of((-1, 2)) is None
        assert rooms.room_of((99, 99)) is None
        assert (5, 2) in rooms.room(1)

    def test_no_walkable_tiles(self):
        rooms = RoomIndex.build(TileGrid(4, 4, [False] * 16))
        assert len(rooms) == 0
        assert rooms.largest_room() is None


class TestPartition:
    def test_generated_floor_is_partitioned(self):
        grid = generate(9, 50, 30, 0.45, 5)
        rooms = RoomIndex.build(grid)
        assert sum(r.size for r in rooms.rooms()) == grid.walkable_count()
        seen: set = set()
        for room in rooms.rooms():
            assert not (room.tiles & seen)
            seen |= room.tiles
        for tile in grid.iter_walkable():
            room_id = rooms.room_of(tile)
            assert room_id is not None
            assert tile in rooms.room(room_id)

    def test_neighbouring_floor_shares_room(self):
        grid = generate(9, 50, 30, 0.45, 5)
        rooms = RoomIndex.build(grid)
        for x, y in grid.iter_walkable():
            if grid.is_walkable(x + 1, y):
                assert rooms.same_room((x, y), (x + 1, y))
            if grid.is_walkable(x, y + 1):
                assert rooms.same_room((x, y), (x, y + 1))
