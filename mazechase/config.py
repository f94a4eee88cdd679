from __future__ import annotations

import math
from dataclasses import dataclass, field

from .actions import PlannerKind
from .constants import (
    EDIBLE_TIME,
    INITIAL_LIVES,
    MAX_LEVELS,
    NUM_PURSUERS,
    PILL_PROXIMITY,
    SENSOR_RANGE,
    TICK_THRESHOLD,
)
from .rewards import RewardWeights


@dataclass(frozen=True)
class BeliefConfig:
    tick_threshold: int = TICK_THRESHOLD


@dataclass(frozen=True)
class MCTSConfig:
    num_simulations: int = 200
    uct_constant: float = math.sqrt(2)
    rollout_depth: int = 20
    # "proximity": 1 / (1 + path distance between the simulated positions)
    # "mean": backpropagated score / visits
    exploitation: str = "proximity"
    # "final": reward at rollout end | "cumulative": sum over rollout plies
    rollout_score: str = "final"
    # Rollout sentinels, in reward units. Finite so backpropagated sums stay finite.
    capture_score: float = 1.0e6  # Evader caught during the rollout
    escape_score: float = -1.0e6  # Match over without a capture


@dataclass(frozen=True)
class QLearningConfig:
    learning_rate: float = 0.1
    discount_factor: float = 0.9
    exploration_probability: float = 0.1


@dataclass(frozen=True)
class AgentConfig:
    planner: PlannerKind = PlannerKind.MCTS
    pill_proximity: int = PILL_PROXIMITY
    # Back away when the evader is close to an available power pill
    retreat_near_power: bool = True
    belief: BeliefConfig = field(default_factory=BeliefConfig)
    mcts: MCTSConfig = field(default_factory=MCTSConfig)
    qlearning: QLearningConfig = field(default_factory=QLearningConfig)
    rewards: RewardWeights = field(default_factory=RewardWeights)


@dataclass(frozen=True)
class MazeConfig:
    num_pursuers: int = NUM_PURSUERS
    initial_lives: int = INITIAL_LIVES
    edible_time: int = EDIBLE_TIME
    max_levels: int = MAX_LEVELS
    # Path distance within which pursuers see the evader; None sees everything
    sensor_range: int | None = SENSOR_RANGE
