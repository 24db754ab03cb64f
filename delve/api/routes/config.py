"""GET /api/v1/config: expose level configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from delve.api.dependencies import get_session_manager
from delve.api.schemas import LevelConfigResponse
from delve.api.session_manager import SessionManager

router = APIRouter()


@router.get("/config", response_model=LevelConfigResponse)
def get_config(manager: SessionManager = Depends(get_session_manager)) -> LevelConfigResponse:
    cfg = manager.config
    return LevelConfigResponse(
        seed=cfg.seed,
        width=cfg.width,
        height=cfg.height,
        fill_probability=cfg.fill_probability,
        iterations=cfg.iterations,
        connect_caves=cfg.connect_caves,
        spatial_cell_size=cfg.spatial_cell_size,
        path_cache_capacity=cfg.path_cache_capacity,
        path_cache_policy=cfg.path_cache_policy,
        max_search_nodes=cfg.max_search_nodes,
        agent_count=cfg.agent_count,
        agent_detection_radius=cfg.agent_detection_radius,
        agent_speed=cfg.agent_speed,
    )
