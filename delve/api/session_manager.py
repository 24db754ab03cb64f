"""SessionManager: lock-guarded owner of the GameSession served by the API.

FastAPI runs sync routes on a thread pool, so every read and write goes
through one lock. The session itself stays single-writer.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from delve.engine.session import GameSession
from delve.utils.event_log import EventLog

if TYPE_CHECKING:
    from delve.config import LevelConfig

logger = logging.getLogger(__name__)


class SessionManager:
    """Builds the session from config and serialises access to it."""

    def __init__(self, config: LevelConfig) -> None:
        self._config = config
        self._lock = threading.Lock()
        self._event_log = EventLog()
        self._session = GameSession(config, self._event_log)

    @property
    def config(self) -> LevelConfig:
        return self._config

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @contextmanager
    def locked(self) -> Iterator[GameSession]:
        """Hold the session lock for the duration of the block."""
        with self._lock:
            yield self._session

    def step(self, count: int = 1) -> int:
        """Run *count* ticks; returns the tick reached."""
        with self._lock:
            for _ in range(count):
                self._session.tick_once()
            return self._session.tick

    def regenerate(self, seed: int | None = None) -> int:
        """Replace the current level; returns the new level's seed."""
        with self._lock:
            level = self._session.new_level(seed)
            return level.seed

    def reset(self) -> None:
        """Rebuild the session from the initial configuration."""
        with self._lock:
            self._session.level.teardown()
            self._event_log.clear()
            self._session = GameSession(self._config, self._event_log)
        logger.info("Session reset (seed=%d).", self._config.seed)
