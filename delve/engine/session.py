"""GameSession: level lifecycle and the authoritative tick loop.

Phase cycle per tick:
  1. Budget & Snapshot: bank movement, copy occupancy for the query phase
  2. Query: every ready agent decides against the same grid and snapshot
  3. Resolution & Application: apply move proposals in agent-id order
  4. Advancement: record state changes as events, advance tick
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.ai.brain import AgentBrain, TickView
from delve.core.enums import AIState
from delve.core.errors import InvalidPosition
from delve.core.level import Level
from delve.core.models import Agent, Coord, MoveProposal
from delve.engine.conflict_resolver import ConflictResolver
from delve.systems.placement import find_player_spawn, find_spawn_positions
from delve.systems.rng import DeterministicRNG
from delve.utils.event_log import EventLog, LevelEvent

if TYPE_CHECKING:
    from delve.config import LevelConfig

logger = logging.getLogger(__name__)

PLAYER_ID = 0


class GameSession:
    """Owns the current level, its agents and the player position.

    The session is the single writer: only :meth:`tick_once`,
    :meth:`set_player` and :meth:`new_level` mutate state.
    """

    __slots__ = (
        "_config",
        "_level",
        "_rng",
        "_brain",
        "_resolver",
        "_event_log",
        "agents",
        "player_pos",
        "tick",
        "floor_number",
        "_tick_events",
        "_last_applied",
    )

    def __init__(self, config: LevelConfig, event_log: EventLog | None = None) -> None:
        config.validate()
        self._config = config
        self._level: Level | None = None
        self._rng = DeterministicRNG(config.seed)
        self._brain = AgentBrain(self._rng)
        self._resolver = ConflictResolver()
        self._event_log = event_log if event_log is not None else EventLog()
        self.agents: dict[int, Agent] = {}
        self.player_pos: Coord | None = None
        self.tick = 0
        self.floor_number = 0
        self._tick_events: list[LevelEvent] = []
        self._last_applied: list[MoveProposal] = []
        self.new_level(config.seed)

    # -- properties --

    @property
    def config(self) -> LevelConfig:
        return self._config

    @property
    def level(self) -> Level:
        assert self._level is not None
        return self._level

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def last_applied(self) -> list[MoveProposal]:
        """Moves applied during the most recent tick."""
        return self._last_applied

    # -- level lifecycle --

    def new_level(self, seed: int | None = None) -> Level:
        """Discard the current level and generate a fresh one.

        The old level's path cache and occupancy are cleared; agents and the
        player are re-placed in the new level's largest room.
        """
        level = Level.generate(self._config, seed)
        if self._level is not None:
            self._level.teardown()
        self._level = level
        self._rng = DeterministicRNG(level.seed)
        self._brain = AgentBrain(self._rng)
        self.floor_number += 1
        self.tick = 0
        self.agents = {}
        self._last_applied = []

        self.player_pos = find_player_spawn(level.rooms, self._rng)
        if self.player_pos is not None:
            level.occupancy.insert(PLAYER_ID, self.player_pos)

        cfg = self._config
        spawns = find_spawn_positions(
            level.grid, level.rooms, level.occupancy, self.player_pos, cfg.agent_count, self._rng,
            min_player_distance=cfg.spawn_min_player_distance,
            min_spacing=cfg.spawn_min_spacing,
        )
        for agent_id, pos in enumerate(spawns, start=1):
            agent = Agent(
                id=agent_id, pos=pos,
                detection_radius=cfg.agent_detection_radius,
                speed=cfg.agent_speed,
                max_range=cfg.agent_max_range,
            )
            self.agents[agent_id] = agent
            level.occupancy.insert(agent_id, pos)

        logger.info(
            "Floor %d ready (seed=%d): player at %s, %d/%d agents placed",
            self.floor_number, level.seed, self.player_pos, len(self.agents), cfg.agent_count,
        )
        self._event_log.append(LevelEvent(
            tick=0, category="level",
            message=f"Floor {self.floor_number} generated from seed {level.seed}",
        ))
        return level

    def next_floor(self) -> Level:
        """Advance to the next floor, seeded one past the current level."""
        return self.new_level(self.level.seed + 1)

    def set_player(self, pos: Coord) -> None:
        """Move the player marker; the tile must be walkable and free of agents."""
        level = self.level
        pos = (pos[0], pos[1])
        if not level.is_walkable(*pos):
            raise InvalidPosition(f"player cannot stand on {pos}: not walkable")
        if pos != self.player_pos and level.occupancy.is_occupied(pos):
            raise InvalidPosition(f"player cannot stand on {pos}: occupied")
        if self.player_pos is not None:
            level.occupancy.remove(PLAYER_ID, self.player_pos)
        level.occupancy.insert(PLAYER_ID, pos)
        self.player_pos = pos

    # -- tick loop --

    def tick_once(self) -> list[MoveProposal]:
        """Execute a single tick and return the applied moves."""
        level = self.level
        self._tick_events = []

        # --- Phase 1: Budget & Snapshot ---
        ready: list[Agent] = []
        for agent_id in sorted(self.agents):
            agent = self.agents[agent_id]
            agent.movement_ticks += agent.speed
            if agent.movement_ticks >= 1.0:
                agent.movement_ticks -= 1.0
                ready.append(agent)
        view = TickView(
            tick=self.tick,
            grid=level.grid,
            rooms=level.rooms,
            occupancy=level.occupancy.snapshot(),
            player_pos=self.player_pos,
            pathfinder=level.pathfinder,
        )

        # --- Phase 2: Query ---
        proposals: list[MoveProposal] = []
        new_states: dict[int, AIState] = {}
        for agent in ready:
            state, proposal = self._brain.decide(agent, view)
            new_states[agent.id] = state
            if proposal is not None:
                proposals.append(proposal)

        # --- Phase 3: Resolution & Application ---
        applied = self._resolver.resolve(proposals, self.agents, level.grid, level.occupancy)
        self._last_applied = applied

        # --- Phase 4: Advancement ---
        for agent_id, state in new_states.items():
            self._transition(self.agents[agent_id], state)
        if self._tick_events:
            self._event_log.append_many(self._tick_events)
        logger.debug(
            "Tick %d: %d ready, %d proposed, %d applied",
            self.tick, len(ready), len(proposals), len(applied),
        )
        self.tick += 1
        return applied

    def run(self, ticks: int | None = None) -> int:
        """Run *ticks* ticks (default ``config.max_ticks``); returns total moves applied."""
        total = ticks if ticks is not None else self._config.max_ticks
        moves = 0
        for _ in range(total):
            moves += len(self.tick_once())
        logger.info("Ran %d ticks on floor %d: %d moves applied", total, self.floor_number, moves)
        return moves

    def _transition(self, agent: Agent, state: AIState) -> None:
        previous = agent.state
        agent.state = state
        if state == previous:
            return
        if state == AIState.PURSUE:
            self._emit("pursuit", f"Agent {agent.id} is pursuing the player", (agent.id, PLAYER_ID))
        elif previous == AIState.PURSUE:
            self._emit("pursuit", f"Agent {agent.id} lost the player", (agent.id,))

    def _emit(self, category: str, message: str, entity_ids: tuple[int, ...] = ()) -> None:
        self._tick_events.append(LevelEvent(
            tick=self.tick, category=category, message=message, entity_ids=entity_ids,
        ))
