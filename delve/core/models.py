"""Core data models: coordinates and level agents."""

from __future__ import annotations

from dataclasses import dataclass, field

from delve.core.enums import AIState, Direction

Coord = tuple[int, int]

# Offsets in the fixed enumeration order used by pathfinding and wandering.
DIRECTION_OFFSETS: dict[Direction, Coord] = {
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
    Direction.SOUTH: (0, 1),
    Direction.NORTH: (0, -1),
}

NEIGHBOR_OFFSETS: tuple[Coord, ...] = tuple(DIRECTION_OFFSETS.values())


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def neighbors4(pos: Coord) -> list[Coord]:
    """Return the four orthogonal neighbours of *pos* in enumeration order."""
    x, y = pos
    return [(x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS]


@dataclass(slots=True)
class Agent:
    """A mobile level occupant driven by the session tick loop.

    ``speed`` is in tiles per tick; fractional speeds accumulate in
    ``movement_ticks`` and the agent acts once a whole tile is banked.
    """

    id: int
    pos: Coord
    detection_radius: int = 5
    speed: float = 1.0
    state: AIState = AIState.IDLE
    movement_ticks: float = 0.0
    spawn_point: Coord | None = None
    max_range: int | None = None

    def __post_init__(self) -> None:
        if self.spawn_point is None:
            self.spawn_point = self.pos

    def within_range(self, pos: Coord) -> bool:
        """True if *pos* respects the optional leash around the spawn point."""
        if self.max_range is None or self.spawn_point is None:
            return True
        return manhattan(self.spawn_point, pos) <= self.max_range


@dataclass(frozen=True, slots=True)
class MoveProposal:
    """A move an agent wants to make this tick, applied after all queries."""

    agent_id: int
    origin: Coord
    target: Coord
    state: AIState
    reason: str = field(default="", compare=False)
