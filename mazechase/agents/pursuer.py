from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from ..actions import Move
from ..config import AgentConfig
from ..constants import EVADER_ID
from ..env.belief import BeliefState, BeliefTracker
from ..planners import make_planner
from ..planners.base import RetreatPolicy
from ..rewards import RewardModel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..comms.messenger import Messenger
    from ..env.protocol import Environment
    from ..planners.base import Planner
    from ..planners.qlearning import QTable

logger = logging.getLogger(__name__)


class PursuerAgent:
    """
    Per-tick decision making for one pursuer.

    Behavior:
    - Refresh the belief from direct sight and team sightings.
    - Keep going when the environment does not ask for a move.
    - Wander randomly while the evader's position is unknown.
    - Retreat when edible or when the evader is close to a power pill.
    - Otherwise hand the decision to the configured planner.
    """

    def __init__(
        self,
        agent_id: str,
        config: AgentConfig | None = None,
        rng: np.random.Generator | None = None,
        planner: Planner | None = None,
        table: QTable | None = None,
    ):
        self.agent_id = agent_id
        self.config = config or AgentConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.belief = BeliefTracker(agent_id, self.config.belief)
        self.rewards = RewardModel(self.config.rewards)
        self.retreat = RetreatPolicy(agent_id)
        self.planner = planner or make_planner(
            self.config.planner, agent_id, self.config, rng=self.rng, rewards=self.rewards, table=table
        )

    def new_match(self) -> None:
        self.belief.reset()
        self.planner.reset()

    def get_move(
        self, env: Environment, messenger: Messenger | None = None, deadline: float | None = None
    ) -> Move | None:
        """Move for this tick, or None when the pursuer just keeps going."""
        position = env.position_of(self.agent_id)
        belief = self.belief.observe(position, env.position_of(EVADER_ID), env.current_tick(), messenger)

        if not env.requires_action(self.agent_id):
            return None

        moves = list(env.legal_moves(position, env.last_move_of(self.agent_id)))
        if not belief.is_known:
            return self._random_move(moves)

        try:
            if self.should_retreat(env, belief):
                logger.debug(f"{self.agent_id}: retreating from {belief.position}")
                return self.retreat.decide(belief, env)
            return self.planner.decide(belief, env, deadline=deadline)
        except Exception:
            logger.exception(f"{self.agent_id}: planning failed at {position}, falling back to a random move")
            return self._random_move(moves)

    def should_retreat(self, env: Environment, belief: BeliefState) -> bool:
        if env.edible_time(self.agent_id) > 0:
            return True
        return self.config.retreat_near_power and self.evader_near_power(env, belief.position)

    def evader_near_power(self, env: Environment, evader_position: int) -> bool:
        return any(
            env.shortest_path_distance(pill, evader_position) < self.config.pill_proximity
            for pill in env.active_power_pills()
        )

    def _random_move(self, moves: Sequence[Move]) -> Move:
        if not moves:
            return Move.NEUTRAL
        return moves[int(self.rng.integers(len(moves)))]
