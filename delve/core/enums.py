"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class AIState(IntEnum):
    """Behaviour states for level agents."""

    IDLE = 0
    WANDER = 1
    PURSUE = 2


@unique
class Direction(IntEnum):
    """Cardinal movement directions, in pathfinding enumeration order."""

    EAST = 0
    WEST = 1
    SOUTH = 2
    NORTH = 3


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    TERRAIN = 0
    SPAWN = 1
    WANDER = 2


@unique
class CachePolicy(IntEnum):
    """Eviction policies available for the pathfinding cache."""

    CLEAR_ON_FULL = 0
    LRU = 1
