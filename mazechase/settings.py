# mazechase/settings.py
"""Agent settings, overridable via environment variables."""

import math
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from .actions import PlannerKind
from .config import AgentConfig, BeliefConfig, MCTSConfig, QLearningConfig
from .rewards import RewardWeights


class Settings(BaseSettings):
    """Decision settings; e.g. MAZECHASE_NUM_SIMULATIONS=500."""

    # Planner
    PLANNER: Literal["mcts", "qlearning"] = "mcts"

    # Belief
    TICK_THRESHOLD: int = 5

    # MCTS
    NUM_SIMULATIONS: int = 200
    UCT_CONSTANT: float = math.sqrt(2)
    ROLLOUT_DEPTH: int = 20
    EXPLOITATION: str = "proximity"
    ROLLOUT_SCORE: str = "final"

    # Q-learning
    LEARNING_RATE: float = 0.1
    DISCOUNT_FACTOR: float = 0.9
    EXPLORATION_PROBABILITY: float = 0.1

    # Retreat
    PILL_PROXIMITY: int = 15
    RETREAT_NEAR_POWER: bool = True

    # Reward weights
    EAT_BONUS: float = 50.0
    DECAY_RATE: float = 0.05
    PILL_PENALTY_PER_UNIT: float = 0.0
    POWER_PILL_PENALTY: float = -5.0
    CAPTURE_PENALTY: float = -15.0
    LEVEL_PENALTY: float = -100.0

    model_config = SettingsConfigDict(env_prefix="MAZECHASE_", env_file=".env", extra="ignore")

    def to_agent_config(self) -> AgentConfig:
        return AgentConfig(
            planner=PlannerKind[self.PLANNER.upper()],
            pill_proximity=self.PILL_PROXIMITY,
            retreat_near_power=self.RETREAT_NEAR_POWER,
            belief=BeliefConfig(tick_threshold=self.TICK_THRESHOLD),
            mcts=MCTSConfig(
                num_simulations=self.NUM_SIMULATIONS,
                uct_constant=self.UCT_CONSTANT,
                rollout_depth=self.ROLLOUT_DEPTH,
                exploitation=self.EXPLOITATION,
                rollout_score=self.ROLLOUT_SCORE,
            ),
            qlearning=QLearningConfig(
                learning_rate=self.LEARNING_RATE,
                discount_factor=self.DISCOUNT_FACTOR,
                exploration_probability=self.EXPLORATION_PROBABILITY,
            ),
            rewards=RewardWeights(
                eat_bonus=self.EAT_BONUS,
                decay_rate=self.DECAY_RATE,
                pill_penalty=self.PILL_PENALTY_PER_UNIT,
                power_pill_penalty=self.POWER_PILL_PENALTY,
                capture_penalty=self.CAPTURE_PENALTY,
                level_penalty=self.LEVEL_PENALTY,
            ),
        )
