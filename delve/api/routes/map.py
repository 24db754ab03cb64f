"""GET /api/v1/map and /rooms: static level data (fetch once per level)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from delve.api.dependencies import get_session_manager
from delve.api.schemas import MapResponse, Position, RoomSchema, RoomsResponse
from delve.api.session_manager import SessionManager

router = APIRouter()


def encode_rle(cells: tuple[bool, ...]) -> list[int]:
    """Run-length encode walkable flags as ``[value, count, value, count, ...]``."""
    rle: list[int] = []
    if not cells:
        return rle
    cur_val = int(cells[0])
    cur_count = 1
    for c in cells[1:]:
        v = int(c)
        if v == cur_val:
            cur_count += 1
        else:
            rle.append(cur_val)
            rle.append(cur_count)
            cur_val = v
            cur_count = 1
    rle.append(cur_val)
    rle.append(cur_count)
    return rle


@router.get("/map", response_model=MapResponse)
def get_map(manager: SessionManager = Depends(get_session_manager)) -> MapResponse:
    with manager.locked() as session:
        level = session.level
        grid = level.grid
        return MapResponse(
            width=grid.width,
            height=grid.height,
            seed=level.seed,
            fingerprint=grid.fingerprint(),
            grid=encode_rle(grid.cells),
        )


@router.get("/rooms", response_model=RoomsResponse)
def get_rooms(manager: SessionManager = Depends(get_session_manager)) -> RoomsResponse:
    with manager.locked() as session:
        rooms = session.level.rooms
        largest = rooms.largest_room()
        return RoomsResponse(
            count=len(rooms),
            largest_room_id=largest.id if largest else None,
            rooms=[
                RoomSchema(id=r.id, size=r.size, center=Position(x=r.center[0], y=r.center[1]))
                for r in rooms.rooms()
            ],
        )
