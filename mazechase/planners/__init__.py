from __future__ import annotations

import numpy as np

from ..actions import PlannerKind
from ..config import AgentConfig
from ..rewards import RewardModel
from .base import Planner, RetreatPolicy
from .mcts import MCTSPlanner, SearchNode, SearchStats, SearchTree, uct_score
from .qlearning import QLearningPlanner, QTable

__all__ = [
    "MCTSPlanner",
    "Planner",
    "QLearningPlanner",
    "QTable",
    "RetreatPolicy",
    "SearchNode",
    "SearchStats",
    "SearchTree",
    "make_planner",
    "uct_score",
]


def make_planner(
    kind: PlannerKind,
    agent_id: str,
    config: AgentConfig,
    *,
    rng: np.random.Generator,
    rewards: RewardModel,
    table: QTable | None = None,
) -> Planner:
    if kind == PlannerKind.MCTS:
        return MCTSPlanner(agent_id, config.mcts, rewards=rewards, rng=rng)
    if kind == PlannerKind.QLEARNING:
        return QLearningPlanner(agent_id, config.qlearning, rewards=rewards, rng=rng, table=table)
    if kind == PlannerKind.RETREAT:
        return RetreatPolicy(agent_id)
    raise ValueError(f"unknown planner kind {kind!r}")
