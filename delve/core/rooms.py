"""Connected-region labelling over a TileGrid.

A room is a maximal set of 4-connected walkable tiles. Every walkable tile
belongs to exactly one room, including isolated single tiles.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.core.models import Coord, NEIGHBOR_OFFSETS

if TYPE_CHECKING:
    from delve.core.grid import TileGrid


@dataclass(frozen=True, slots=True)
class Room:
    """A labelled connected region. ``center`` is the integer mean of its tiles."""

    id: int
    tiles: frozenset[Coord]
    size: int
    center: Coord

    def __contains__(self, tile: object) -> bool:
        return tile in self.tiles


class RoomIndex:
    """Tile-to-room and room-to-tiles lookup built in a single flood-fill pass."""

    __slots__ = ("_width", "_height", "_tile_to_room", "_rooms")

    def __init__(self, width: int, height: int, tile_to_room: list[int | None], rooms: list[Room]) -> None:
        self._width = width
        self._height = height
        self._tile_to_room = tile_to_room
        self._rooms = tuple(rooms)

    @classmethod
    def build(cls, grid: TileGrid) -> RoomIndex:
        """Label every walkable tile of *grid*; O(width * height)."""
        w, h = grid.width, grid.height
        cells = grid.cells
        tile_to_room: list[int | None] = [None] * (w * h)
        rooms: list[Room] = []

        for start in range(w * h):
            if not cells[start] or tile_to_room[start] is not None:
                continue

            room_id = len(rooms)
            tile_to_room[start] = room_id
            queue: deque[int] = deque([start])
            members: list[Coord] = []
            sum_x = sum_y = 0

            while queue:
                idx = queue.popleft()
                cx, cy = idx % w, idx // w
                members.append((cx, cy))
                sum_x += cx
                sum_y += cy
                for dx, dy in NEIGHBOR_OFFSETS:
                    nx, ny = cx + dx, cy + dy
                    if 0 <= nx < w and 0 <= ny < h:
                        n_idx = ny * w + nx
                        if cells[n_idx] and tile_to_room[n_idx] is None:
                            tile_to_room[n_idx] = room_id
                            queue.append(n_idx)

            n = len(members)
            rooms.append(Room(
                id=room_id,
                tiles=frozenset(members),
                size=n,
                center=(sum_x // n, sum_y // n),
            ))

        return cls(w, h, tile_to_room, rooms)

    # -- queries --

    def room_of(self, tile: Coord) -> int | None:
        x, y = tile
        if 0 <= x < self._width and 0 <= y < self._height:
            return self._tile_to_room[y * self._width + x]
        return None

    def room(self, room_id: int) -> Room:
        return self._rooms[room_id]

    def rooms(self) -> tuple[Room, ...]:
        return self._rooms

    def largest_room(self) -> Room | None:
        """Biggest room by tile count; ties go to the room discovered first."""
        best: Room | None = None
        for room in self._rooms:
            if best is None or room.size > best.size:
                best = room
        return best

    def same_room(self, a: Coord, b: Coord) -> bool:
        ra = self.room_of(a)
        return ra is not None and ra == self.room_of(b)

    def __len__(self) -> int:
        return len(self._rooms)

    def __repr__(self) -> str:
        largest = self.largest_room()
        return f"RoomIndex(rooms={len(self._rooms)}, largest={largest.size if largest else 0})"
