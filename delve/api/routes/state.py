"""GET /api/v1/state, /events and /cache: dynamic session data (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from delve.api.dependencies import get_session_manager
from delve.api.schemas import (
    AgentSchema,
    CacheStatsSchema,
    EventSchema,
    Position,
    SessionStateResponse,
)
from delve.api.session_manager import SessionManager

router = APIRouter()


@router.get("/state", response_model=SessionStateResponse)
def get_state(manager: SessionManager = Depends(get_session_manager)) -> SessionStateResponse:
    with manager.locked() as session:
        player = session.player_pos
        return SessionStateResponse(
            tick=session.tick,
            floor_number=session.floor_number,
            seed=session.level.seed,
            player=Position(x=player[0], y=player[1]) if player is not None else None,
            agents=[
                AgentSchema(
                    id=a.id, x=a.pos[0], y=a.pos[1],
                    state=a.state.name.lower(),
                    detection_radius=a.detection_radius,
                )
                for a in sorted(session.agents.values(), key=lambda a: a.id)
            ],
        )


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since_tick: int | None = Query(None, ge=0),
    limit: int = Query(50, ge=1, le=1000),
    manager: SessionManager = Depends(get_session_manager),
) -> list[EventSchema]:
    log = manager.event_log
    events = log.since_tick(since_tick)[-limit:] if since_tick is not None else log.latest(limit)
    return [
        EventSchema(tick=e.tick, category=e.category, message=e.message, entity_ids=list(e.entity_ids))
        for e in events
    ]


@router.get("/cache", response_model=CacheStatsSchema)
def get_cache_stats(manager: SessionManager = Depends(get_session_manager)) -> CacheStatsSchema:
    with manager.locked() as session:
        pathfinder = session.level.pathfinder
        stats = pathfinder.cache.stats()
        return CacheStatsSchema(
            entries=stats.entries,
            capacity=stats.capacity,
            hits=stats.hits,
            misses=stats.misses,
            clears=stats.clears,
            searches=pathfinder.search_count,
        )
