"""POST /api/v1/control/{action}, /level and /player: session controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from delve.api.dependencies import get_session_manager
from delve.api.schemas import ControlResponse, PlayerMoveRequest, RegenerateRequest
from delve.api.session_manager import SessionManager
from delve.core.errors import DelveError

router = APIRouter()


class ControlAction(str, Enum):
    step = "step"
    reset = "reset"
    next_floor = "next_floor"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    count: int = Query(1, ge=1, le=1000, description="Ticks to run for the step action"),
    manager: SessionManager = Depends(get_session_manager),
) -> ControlResponse:
    match action:
        case ControlAction.step:
            tick = manager.step(count)
            noun = "tick" if count == 1 else "ticks"
            return ControlResponse(status="ok", message=f"{count} {noun} executed.", tick=tick)

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Session reset.", tick=0)

        case ControlAction.next_floor:
            with manager.locked() as session:
                level = session.next_floor()
                floor = session.floor_number
            return ControlResponse(
                status="ok", message=f"Floor {floor} generated from seed {level.seed}.", tick=0,
            )


@router.post("/level", response_model=ControlResponse)
def regenerate_level(
    body: RegenerateRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> ControlResponse:
    seed = body.seed
    if seed is None:
        with manager.locked() as session:
            seed = session.level.seed + 1
    new_seed = manager.regenerate(seed)
    return ControlResponse(status="ok", message=f"Level regenerated from seed {new_seed}.", tick=0)


@router.post("/player", response_model=ControlResponse)
def move_player(
    body: PlayerMoveRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> ControlResponse:
    with manager.locked() as session:
        try:
            session.set_player((body.x, body.y))
        except DelveError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        tick = session.tick
    return ControlResponse(status="ok", message=f"Player moved to ({body.x}, {body.y}).", tick=tick)
