"""AI layer: next-step pathfinding, path caches and agent decisions."""

from delve.ai.brain import AgentBrain, TickView
from delve.ai.path_cache import ClearOnFullCache, LRUPathCache, PathCache, PathfindingCache, make_path_cache
from delve.ai.pathfinding import PathfindingEngine

__all__ = [
    "AgentBrain",
    "ClearOnFullCache",
    "LRUPathCache",
    "PathCache",
    "PathfindingCache",
    "PathfindingEngine",
    "TickView",
    "make_path_cache",
]
