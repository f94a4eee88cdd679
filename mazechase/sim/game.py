from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from ..actions import Move, PathMode
from ..config import MazeConfig
from ..constants import (
    EVADER_ID,
    PILL_SCORE,
    POWER_PILL_SCORE,
    PURSUER_EATEN_SCORE,
    UNKNOWN_POSITION,
    pursuer_id,
)
from ..nav.graph import MazeGraph
from ..nav.planner import PathPlanner
from ..rewards import GameSnapshot
from .layouts import CLASSIC_LAYOUT

logger = logging.getLogger(__name__)


@dataclass
class AgentState:
    agent_id: str
    position: int
    last_move: Move = Move.NEUTRAL
    edible_time: int = 0


@dataclass
class GameState:
    evader: AgentState
    pursuers: dict[str, AgentState]
    pills: set[int]
    power_pills: set[int]
    lives: int
    level: int = 0
    tick: int = 0  # Ticks in the current level
    total_ticks: int = 0
    score: int = 0
    pills_eaten: int = 0
    power_pills_eaten: int = 0
    pursuers_eaten: int = 0
    captured: bool = False  # Evader caught during the last advance
    game_over: bool = False


class MazeGame:
    """
    Reference maze game implementing the agents' Environment protocol.

    The graph and path planner are immutable after construction and shared by
    every clone and view; only ``state`` is per game. ``observed_by`` returns a
    view over the same state that hides the evader outside the sensor range of
    the given pursuer, which is what each pursuer agent is handed.
    """

    def __init__(
        self,
        layout: str | MazeGraph = CLASSIC_LAYOUT,
        config: MazeConfig | None = None,
        *,
        observer: str | None = None,
    ):
        self.graph = layout if isinstance(layout, MazeGraph) else MazeGraph.from_layout(layout)
        self.config = config or MazeConfig()
        self.planner = PathPlanner(self.graph)
        self.observer = observer
        self.state = self._initial_state()

    # ------------------------------------------------------------------ setup

    @property
    def pursuer_ids(self) -> list[str]:
        return [pursuer_id(i) for i in range(self.config.num_pursuers)]

    def _initial_state(self) -> GameState:
        return GameState(
            evader=AgentState(EVADER_ID, self.graph.evader_start),
            pursuers={pid: AgentState(pid, self.graph.pursuer_start) for pid in self.pursuer_ids},
            pills=set(self.graph.pills),
            power_pills=set(self.graph.power_pills),
            lives=self.config.initial_lives,
        )

    def reset(self) -> None:
        self.state = self._initial_state()

    def _reset_positions(self) -> None:
        s = self.state
        s.evader.position = self.graph.evader_start
        s.evader.last_move = Move.NEUTRAL
        for p in s.pursuers.values():
            p.position = self.graph.pursuer_start
            p.last_move = Move.NEUTRAL
            p.edible_time = 0

    def _agent(self, agent_id: str) -> AgentState:
        if agent_id == EVADER_ID:
            return self.state.evader
        try:
            return self.state.pursuers[agent_id]
        except KeyError:
            raise KeyError(f"unknown agent {agent_id!r}") from None

    def clone(self, opponent_at: int | None = None) -> MazeGame:
        """Independent copy; ``opponent_at`` puts the evader on that node instead of its true one."""
        dup = copy.copy(self)
        dup.state = copy.deepcopy(self.state)
        if opponent_at is not None:
            if not self.graph.is_valid(opponent_at):
                raise ValueError(f"cannot place the evader on node {opponent_at}")
            dup.state.evader.position = opponent_at
            dup.state.evader.last_move = Move.NEUTRAL
        return dup

    def observed_by(self, agent_id: str) -> MazeGame:
        """View sharing this game's state, seen through ``agent_id``'s sensors."""
        self._agent(agent_id)
        view = copy.copy(self)
        view.observer = agent_id
        return view

    # ---------------------------------------------------------------- queries

    def current_tick(self) -> int:
        return self.state.tick

    def position_of(self, agent_id: str) -> int:
        agent = self._agent(agent_id)
        if agent_id != EVADER_ID or self.observer is None or self.config.sensor_range is None:
            return agent.position
        watcher = self._agent(self.observer)
        if self.planner.distance(watcher.position, agent.position) <= self.config.sensor_range:
            return agent.position
        return UNKNOWN_POSITION

    def last_move_of(self, agent_id: str) -> Move:
        return self._agent(agent_id).last_move

    def legal_moves(self, position: int, last_move: Move | None = None) -> list[Move]:
        return self.graph.possible_moves(position, last_move)

    def neighbor(self, position: int, move: Move) -> int:
        return self.graph.neighbour(position, move)

    def shortest_path_distance(self, a: int, b: int) -> int:
        return self.planner.distance(a, b)

    def move_toward_or_away(self, start: int, target: int, last_move: Move | None, mode: PathMode) -> Move:
        return self.planner.next_move(start, target, last_move, mode)

    def requires_action(self, agent_id: str) -> bool | None:
        """Pursuers choose only at junctions or when their heading is blocked."""
        agent = self._agent(agent_id)
        if agent_id == EVADER_ID:
            return True
        if agent.last_move is Move.NEUTRAL or self.graph.is_junction(agent.position):
            return True
        return agent.last_move not in self.graph.possible_moves(agent.position, agent.last_move)

    def edible_time(self, agent_id: str) -> int:
        return self._agent(agent_id).edible_time

    def active_power_pills(self) -> list[int]:
        return sorted(self.state.power_pills)

    def is_terminal(self) -> bool:
        return self.state.game_over

    def was_captured(self) -> bool:
        return self.state.captured

    def score(self) -> float:
        return float(self.state.score)

    def snapshot(self) -> GameSnapshot:
        s = self.state
        return GameSnapshot(
            evader_lives_lost=self.config.initial_lives - s.lives,
            level_time=s.tick,
            pills_eaten=s.pills_eaten,
            power_pills_eaten=s.power_pills_eaten,
            pursuers_eaten=s.pursuers_eaten,
            level=s.level,
        )

    # --------------------------------------------------------------- dynamics

    def _step_evader(self, move: Move) -> None:
        ev = self.state.evader
        nxt = self.graph.neighbour(ev.position, move)
        if nxt != UNKNOWN_POSITION:
            ev.position = nxt
            ev.last_move = move

    def _step_pursuer(self, agent: AgentState, move: Move | None) -> None:
        moves = self.graph.possible_moves(agent.position, agent.last_move)
        if not moves:
            return
        if move is None or move not in moves:
            # Keep heading; otherwise follow the corridor
            move = agent.last_move if agent.last_move in moves else moves[0]
        agent.position = self.graph.neighbour(agent.position, move)
        agent.last_move = move

    def _eat(self) -> None:
        s = self.state
        pos = s.evader.position
        if pos in s.pills:
            s.pills.remove(pos)
            s.pills_eaten += 1
            s.score += PILL_SCORE
        elif pos in s.power_pills:
            s.power_pills.remove(pos)
            s.power_pills_eaten += 1
            s.score += POWER_PILL_SCORE
            for p in s.pursuers.values():
                p.edible_time = self.config.edible_time

    def _resolve_collisions(self, evader_prev: int, pursuer_prev: dict[str, int]) -> None:
        s = self.state
        ev = s.evader
        for pid, p in s.pursuers.items():
            swapped = p.position == evader_prev and pursuer_prev[pid] == ev.position
            if p.position != ev.position and not swapped:
                continue
            if p.edible_time > 0:
                s.score += PURSUER_EATEN_SCORE
                s.pursuers_eaten += 1
                p.position = self.graph.pursuer_start
                p.last_move = Move.NEUTRAL
                p.edible_time = 0
            else:
                s.captured = True
                s.lives -= 1
                logger.debug(f"{pid} caught the evader at tick {s.tick}, {s.lives} lives left")
                if s.lives <= 0:
                    s.game_over = True
                self._reset_positions()
                return

    def _next_level(self) -> None:
        s = self.state
        s.level += 1
        logger.debug(f"level cleared after {s.tick} ticks, now level {s.level}")
        if s.level >= self.config.max_levels:
            s.game_over = True
            return
        s.tick = 0
        s.pills = set(self.graph.pills)
        s.power_pills = set(self.graph.power_pills)
        s.pills_eaten = 0
        s.power_pills_eaten = 0
        s.pursuers_eaten = 0
        self._reset_positions()

    def advance(self, evader_move: Move, pursuer_moves: Mapping[str, Move]) -> None:
        s = self.state
        s.captured = False
        if s.game_over:
            return

        evader_prev = s.evader.position
        pursuer_prev = {pid: p.position for pid, p in s.pursuers.items()}

        self._step_evader(evader_move)
        self._eat()
        for pid, p in s.pursuers.items():
            self._step_pursuer(p, pursuer_moves.get(pid))
        self._resolve_collisions(evader_prev, pursuer_prev)

        for p in s.pursuers.values():
            if p.edible_time > 0:
                p.edible_time -= 1

        s.tick += 1
        s.total_ticks += 1

        if not s.game_over and not s.pills and not s.power_pills:
            self._next_level()
