"""Tests for AgentBrain pursue/wander decisions."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from delve.ai.brain import AgentBrain, TickView
from delve.ai.pathfinding import PathfindingEngine
from delve.core.enums import AIState
from delve.core.grid import TileGrid
from delve.core.models import Agent, manhattan
from delve.core.rooms import RoomIndex
from delve.systems.rng import DeterministicRNG
from delve.systems.spatial_hash import SpatialHashGrid


def _open(w: int = 10, h: int = 7) -> TileGrid:
    return TileGrid(w, h, [0 < x < w - 1 and 0 < y < h - 1 for y in range(h) for x in range(w)])


def _view(grid: TileGrid, agent: Agent, player=None, tick: int = 0) -> TickView:
    occ = SpatialHashGrid(4)
    occ.insert(agent.id, agent.pos)
    if player is not None:
        occ.insert(0, player)
    return TickView(
        tick=tick,
        grid=grid,
        rooms=RoomIndex.build(grid),
        occupancy=occ,
        player_pos=player,
        pathfinder=PathfindingEngine(),
    )


def _brain() -> AgentBrain:
    return AgentBrain(DeterministicRNG(42))


class TestPursue:
    def test_steps_toward_player_in_range(self):
        agent = Agent(id=1, pos=(2, 3))
        state, proposal = _brain().decide(agent, _view(_open(), agent, player=(5, 3)))
        assert state == AIState.PURSUE
        assert proposal is not None
        assert proposal.target == (3, 3)
        assert proposal.origin == (2, 3)

    def test_adjacent_player_holds_position(self):
        agent = Agent(id=1, pos=(2, 3))
        state, proposal = _brain().decide(agent, _view(_open(), agent, player=(3, 3)))
        assert state == AIState.PURSUE
        assert proposal is None

    def test_player_out_of_range_wanders(self):
        agent = Agent(id=1, pos=(1, 1), detection_radius=3)
        state, proposal = _brain().decide(agent, _view(_open(), agent, player=(8, 5)))
        assert state == AIState.WANDER
        assert proposal is not None
        assert manhattan(proposal.target, agent.pos) == 1

    def test_unreachable_player_falls_back_to_wander(self):
        grid = TileGrid.from_rows([
            "########",
            "#...#..#",
            "#...#..#",
            "########",
        ])
        agent = Agent(id=1, pos=(2, 1))
        state, proposal = _brain().decide(agent, _view(grid, agent, player=(5, 1)))
        assert state == AIState.WANDER
        assert proposal is not None and grid.is_walkable(*proposal.target)


class TestWander:
    def test_boxed_in_agent_idles(self):
        grid = TileGrid.from_rows(["###", "#.#", "###"])
        agent = Agent(id=1, pos=(1, 1))
        assert _brain().decide(agent, _view(grid, agent)) == (AIState.IDLE, None)

    def test_leash_blocks_every_move(self):
        agent = Agent(id=1, pos=(4, 3), max_range=0)
        state, proposal = _brain().decide(agent, _view(_open(), agent, player=(7, 3)))
        assert state == AIState.IDLE
        assert proposal is None

    def test_wander_direction_is_seeded(self):
        agent = Agent(id=3, pos=(4, 3))
        view = _view(_open(), agent, tick=12)
        assert _brain().decide(agent, view) == _brain().decide(agent, view)

    def test_wander_avoids_occupied_tiles(self):
        agent = Agent(id=1, pos=(1, 1))
        view = _view(_open(), agent)
        view.occupancy.insert(5, (2, 1))
        state, proposal = _brain().decide(agent, view)
        assert state == AIState.WANDER
        assert proposal.target == (1, 2)
