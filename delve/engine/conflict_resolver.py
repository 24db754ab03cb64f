"""Deterministic resolution of move proposals collected during a tick."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.core.models import MoveProposal

if TYPE_CHECKING:
    from delve.core.grid import TileGrid
    from delve.core.models import Agent
    from delve.systems.spatial_hash import SpatialHashGrid

logger = logging.getLogger(__name__)


class ConflictResolver:
    """Applies moves in ascending agent-id order against live occupancy.

    A move is rejected when its target is a wall or is occupied at the time
    it is applied. Tiles taken by earlier moves this tick count as occupied,
    as do tiles of agents whose own move has not been applied yet.
    """

    __slots__ = ()

    def resolve(
        self,
        proposals: list[MoveProposal],
        agents: dict[int, Agent],
        grid: TileGrid,
        occupancy: SpatialHashGrid,
    ) -> list[MoveProposal]:
        """Validate and apply proposals. Returns the list of *applied* proposals."""
        applied: list[MoveProposal] = []

        for proposal in sorted(proposals, key=lambda p: p.agent_id):
            agent = agents.get(proposal.agent_id)
            if agent is None or agent.pos != proposal.origin:
                continue
            target = proposal.target
            if not grid.is_walkable(*target):
                logger.debug("Agent %d blocked by terrain at %s", agent.id, target)
                continue
            if occupancy.is_occupied(target):
                logger.debug("Agent %d blocked by occupant at %s", agent.id, target)
                continue
            occupancy.move(agent.id, agent.pos, target)
            agent.pos = target
            applied.append(proposal)

        return applied
