"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from delve import __version__
from delve.api.dependencies import set_session_manager
from delve.api.routes import api_router
from delve.api.session_manager import SessionManager
from delve.config import LevelConfig
from delve.core.errors import DelveError
from delve.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: LevelConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = LevelConfig()
    config.validate()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = SessionManager(_config)
        set_session_manager(manager)
        logger.info("API server started (seed=%d, %dx%d).", _config.seed, _config.width, _config.height)
        yield
        with manager.locked() as session:
            session.level.teardown()
        set_session_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Delve Dungeon Engine",
        description=(
            "Procedural cave levels with deterministic agent movement.\n\n"
            "## API Groups\n\n"
            "- **Map**: static level data (fetch once per level)\n"
            "- **Query**: walkability, next-step pathfinding and proximity lookups\n"
            "- **State**: agents, player, events and path cache statistics\n"
            "- **Control**: step the tick loop, regenerate or reset the level\n"
            "- **Config**: read-only level configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Map", "description": "Tile grid (RLE) and room partition of the current level."},
            {"name": "Query", "description": "Point queries against the current level and live occupancy."},
            {"name": "State", "description": "Session state polled by clients: tick, agents, events, cache stats."},
            {"name": "Control", "description": "Single-writer session controls: step, reset, regenerate, move player."},
            {"name": "Config", "description": "Read-only level configuration parameters."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DelveError)
    async def _delve_error_handler(request: Request, exc: DelveError) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    app.include_router(api_router)

    return app
