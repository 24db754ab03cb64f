"""Engine layer: session lifecycle, tick loop and move resolution."""

from delve.engine.conflict_resolver import ConflictResolver
from delve.engine.session import PLAYER_ID, GameSession

__all__ = ["ConflictResolver", "GameSession", "PLAYER_ID"]
