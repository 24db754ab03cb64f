"""AgentBrain: per-tick pursue/wander decisions for level agents.

Decisions read only the tick view (static grid plus the occupancy snapshot
taken at the start of the tick) and return a move proposal; nothing is moved
here. The session applies every proposal after all agents have decided.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.core.enums import AIState, Domain
from delve.core.models import Agent, Coord, MoveProposal, NEIGHBOR_OFFSETS, manhattan

if TYPE_CHECKING:
    from delve.ai.pathfinding import PathfindingEngine
    from delve.core.grid import TileGrid
    from delve.core.rooms import RoomIndex
    from delve.systems.rng import DeterministicRNG
    from delve.systems.spatial_hash import SpatialHashGrid


@dataclass(frozen=True, slots=True)
class TickView:
    """Read-only inputs shared by every agent during one tick's query phase."""

    tick: int
    grid: TileGrid
    rooms: RoomIndex
    occupancy: SpatialHashGrid
    player_pos: Coord | None
    pathfinder: PathfindingEngine


class AgentBrain:
    """Chooses between pursuing the player and wandering.

    An agent pursues when the player is within its detection radius
    (Manhattan). If pathfinding finds no step, the agent wanders for this
    tick instead and will try to pursue again on the next one.
    """

    __slots__ = ("_rng",)

    def __init__(self, rng: DeterministicRNG) -> None:
        self._rng = rng

    def decide(self, agent: Agent, view: TickView) -> tuple[AIState, MoveProposal | None]:
        player = view.player_pos
        if player is not None:
            distance = manhattan(agent.pos, player)
            if distance <= agent.detection_radius:
                if distance <= 1:
                    # Already adjacent; engaging is outside the movement layer.
                    return AIState.PURSUE, None
                step = view.pathfinder.next_step(
                    view.grid, view.occupancy, agent.pos, player, rooms=view.rooms,
                )
                if step is not None and agent.within_range(step):
                    return AIState.PURSUE, MoveProposal(
                        agent_id=agent.id, origin=agent.pos, target=step,
                        state=AIState.PURSUE, reason="pursue",
                    )
        return self._wander(agent, view)

    def _wander(self, agent: Agent, view: TickView) -> tuple[AIState, MoveProposal | None]:
        x, y = agent.pos
        for dx, dy in self._rng.shuffled(Domain.WANDER, agent.id, view.tick, NEIGHBOR_OFFSETS):
            target = (x + dx, y + dy)
            if not view.grid.is_walkable(*target):
                continue
            if view.occupancy.is_occupied(target) or not agent.within_range(target):
                continue
            return AIState.WANDER, MoveProposal(
                agent_id=agent.id, origin=agent.pos, target=target,
                state=AIState.WANDER, reason="wander",
            )
        return AIState.IDLE, None
