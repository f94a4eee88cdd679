"""Tabular Q-learning over (node, move) pairs.

Q(s, a) <- Q(s, a) + alpha * [r + gamma * max_a' Q(s', a') - Q(s, a)]

The state is the pursuer's own node. The table lives as long as the planner
does, so values keep improving across matches.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from ..actions import Move
from ..config import QLearningConfig
from ..rewards import RewardModel

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..env.belief import BeliefState
    from ..env.protocol import Environment

logger = logging.getLogger(__name__)

StateAction = tuple[int, Move]


class QTable:
    """State-action values; unseen pairs are worth 0."""

    def __init__(self, values: dict[StateAction, float] | None = None) -> None:
        self.values: dict[StateAction, float] = dict(values or {})

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, key: StateAction) -> bool:
        return key in self.values

    def get(self, position: int, move: Move) -> float:
        return self.values.get((position, move), 0.0)

    def set(self, position: int, move: Move, value: float) -> None:
        self.values[(position, move)] = float(value)

    def best_move(self, position: int, moves: Sequence[Move]) -> Move:
        """Highest-valued move; the first one wins ties."""
        best = moves[0]
        best_value = -np.inf
        for move in moves:
            value = self.get(position, move)
            if value > best_value:
                best, best_value = move, value
        return best

    def max_value(self, position: int, moves: Iterable[Move]) -> float:
        return max((self.get(position, m) for m in moves), default=0.0)

    def update(self, key: StateAction, reward: float, next_max: float, learning_rate: float, discount: float) -> float:
        current = self.values.get(key, 0.0)
        updated = current + learning_rate * (reward + discount * next_max - current)
        self.values[key] = updated
        return updated

    def rows(self) -> list[tuple[int, Move, float]]:
        return sorted((pos, move, value) for (pos, move), value in self.values.items())

    def save(self, path: Path | str) -> None:
        with open(path, "w") as f:
            json.dump([[pos, move.name, value] for pos, move, value in self.rows()], f, indent=2)

    @classmethod
    def load(cls, path: Path | str) -> QTable:
        path = Path(path)
        if not path.exists():
            return cls()
        with open(path) as f:
            return cls({(int(pos), Move[name]): float(value) for pos, name, value in json.load(f)})


class QLearningPlanner:
    """Epsilon-greedy pursuer that learns from the reward model online."""

    def __init__(
        self,
        agent_id: str,
        config: QLearningConfig | None = None,
        rewards: RewardModel | None = None,
        rng: np.random.Generator | None = None,
        table: QTable | None = None,
    ):
        self.agent_id = agent_id
        self.config = config or QLearningConfig()
        self.rewards = rewards or RewardModel()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.table = table if table is not None else QTable()
        self.previous: StateAction | None = None

    def reset(self) -> None:
        # The previous pair belongs to the last match; the table is kept.
        self.previous = None

    def decide(self, belief: BeliefState, env: Environment, *, deadline: float | None = None) -> Move:
        position = env.position_of(self.agent_id)
        moves = list(env.legal_moves(position, env.last_move_of(self.agent_id)))
        if not moves:
            return Move.NEUTRAL

        if self.rng.random() < self.config.exploration_probability:
            move = moves[int(self.rng.integers(len(moves)))]
            logger.debug(f"{self.agent_id}: exploring {move.name} at {position}")
        else:
            move = self.table.best_move(position, moves)
            logger.debug(f"{self.agent_id}: exploiting {move.name} at {position}")

        reward = self.rewards.reward(env.snapshot())
        if self.previous is not None:
            self.learn(self.previous, reward, position, moves)

        self.previous = (position, move)
        return move

    def learn(self, previous: StateAction, reward: float, position: int, moves: Sequence[Move]) -> float:
        cfg = self.config
        next_max = self.table.max_value(position, moves)
        updated = self.table.update(previous, reward, next_max, cfg.learning_rate, cfg.discount_factor)
        logger.debug(
            f"{self.agent_id}: Q[{previous[0]}, {previous[1].name}] -> {updated:.4f} "
            f"(reward={reward:.2f}, next_max={next_max:.4f})"
        )
        return updated

    def log_table(self) -> None:
        logger.info(f"{self.agent_id} Q-table ({len(self.table)} entries):")
        for pos, move, value in self.table.rows():
            logger.info(f"  {pos} - {move.name} - {value:.4f}")
