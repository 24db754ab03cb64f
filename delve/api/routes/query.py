"""GET /api/v1/walkable, /path and /nearby: runtime level queries."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from delve.api.dependencies import get_session_manager
from delve.api.schemas import NearbyResponse, NextStepResponse, Position, WalkableResponse
from delve.api.session_manager import SessionManager

router = APIRouter()


@router.get("/walkable", response_model=WalkableResponse)
def get_walkable(
    x: int,
    y: int,
    manager: SessionManager = Depends(get_session_manager),
) -> WalkableResponse:
    with manager.locked() as session:
        level = session.level
        return WalkableResponse(
            x=x, y=y,
            walkable=level.is_walkable(x, y),
            room_id=level.rooms.room_of((x, y)),
        )


@router.get("/path", response_model=NextStepResponse)
def get_next_step(
    from_x: int,
    from_y: int,
    to_x: int,
    to_y: int,
    manager: SessionManager = Depends(get_session_manager),
) -> NextStepResponse:
    """Next step from one tile toward another against the live occupancy."""
    with manager.locked() as session:
        step = session.level.next_step((from_x, from_y), (to_x, to_y))
    return NextStepResponse(
        start=Position(x=from_x, y=from_y),
        goal=Position(x=to_x, y=to_y),
        step=Position(x=step[0], y=step[1]) if step is not None else None,
    )


@router.get("/nearby", response_model=NearbyResponse)
def get_nearby(
    x: int,
    y: int,
    radius: int = Query(3, ge=0, le=256, description="Euclidean radius in tiles"),
    manager: SessionManager = Depends(get_session_manager),
) -> NearbyResponse:
    with manager.locked() as session:
        ids = session.level.occupancy.query_radius((x, y), radius)
    return NearbyResponse(center=Position(x=x, y=y), radius=radius, entity_ids=ids)
