"""Spawn placement helpers.

All placement is confined to the largest room so that spawned entities can
reach each other; smaller disconnected pockets are never used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from delve.core.enums import Domain
from delve.core.models import Coord, manhattan, neighbors4

if TYPE_CHECKING:
    from delve.core.grid import TileGrid
    from delve.core.rooms import RoomIndex
    from delve.systems.rng import DeterministicRNG
    from delve.systems.spatial_hash import SpatialHashGrid

# Key offsets keep placement draws apart from wander draws keyed by agent id.
_PLAYER_KEY = 0
_SPAWN_KEY = 1 << 32


def find_walkable_tile(grid: TileGrid) -> Coord | None:
    """Nearest walkable tile to the grid centre, scanning square rings outward."""
    cx, cy = grid.width // 2, grid.height // 2
    for radius in range(max(grid.width, grid.height) // 2):
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if radius > 0 and abs(dx) != radius and abs(dy) != radius:
                    continue
                if grid.is_walkable(cx + dx, cy + dy):
                    return cx + dx, cy + dy
    return next(grid.iter_walkable(), None)


def _sorted_tiles(rooms: RoomIndex) -> list[Coord]:
    room = rooms.largest_room()
    if room is None:
        return []
    return sorted(room.tiles, key=lambda t: (t[1], t[0]))


def find_player_spawn(rooms: RoomIndex, rng: DeterministicRNG) -> Coord | None:
    """Seeded random tile from the largest room."""
    tiles = _sorted_tiles(rooms)
    if not tiles:
        return None
    return tiles[rng.next_int(Domain.SPAWN, _PLAYER_KEY, 0, 0, len(tiles) - 1)]


def find_boss_spawn(rooms: RoomIndex) -> Coord | None:
    """Centre of the largest room, or its nearest member tile when the centre is wall."""
    room = rooms.largest_room()
    if room is None:
        return None
    if room.center in room.tiles:
        return room.center
    return min(room.tiles, key=lambda t: (manhattan(t, room.center), t[1], t[0]))


def find_spawn_positions(
    grid: TileGrid,
    rooms: RoomIndex,
    occupancy: SpatialHashGrid,
    player_pos: Coord | None,
    count: int,
    rng: DeterministicRNG,
    min_player_distance: int = 8,
    min_spacing: int = 5,
    max_attempts: int | None = None,
) -> list[Coord]:
    """Pick up to *count* spread-out spawn tiles in the largest room.

    Candidates must be walkable, unoccupied, not on or next to the player,
    at least *min_player_distance* from the player and *min_spacing* from
    each other. Fewer than *count* positions are returned when the room is
    too cramped within *max_attempts* draws.
    """
    tiles = _sorted_tiles(rooms)
    if not tiles or count <= 0:
        return []
    if max_attempts is None:
        max_attempts = count * 100

    blocked: set[Coord] = set()
    if player_pos is not None:
        blocked.add(player_pos)
        blocked.update(neighbors4(player_pos))

    chosen: list[Coord] = []
    for attempt in range(max_attempts):
        if len(chosen) >= count:
            break
        pos = tiles[rng.next_int(Domain.SPAWN, _SPAWN_KEY, attempt, 0, len(tiles) - 1)]
        if pos in blocked or not grid.is_walkable(*pos) or occupancy.is_occupied(pos):
            continue
        if player_pos is not None and manhattan(pos, player_pos) < min_player_distance:
            continue
        if any(manhattan(pos, other) < min_spacing for other in chosen):
            continue
        chosen.append(pos)
        blocked.add(pos)
    return chosen
