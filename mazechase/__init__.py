from .actions import Move, PlannerKind
from .agents import PursuerAgent, PursuerTeam, RandomWalkEvader
from .comms import Messenger, Sighting
from .config import AgentConfig, BeliefConfig, MazeConfig, MCTSConfig, QLearningConfig
from .env import BeliefState, BeliefTracker
from .rewards import GameSnapshot, RewardModel, RewardWeights
from .sim import MazeGame

__all__ = [
    "AgentConfig",
    "BeliefConfig",
    "BeliefState",
    "BeliefTracker",
    "GameSnapshot",
    "MCTSConfig",
    "MazeConfig",
    "MazeGame",
    "Messenger",
    "Move",
    "PlannerKind",
    "PursuerAgent",
    "PursuerTeam",
    "QLearningConfig",
    "RandomWalkEvader",
    "RewardModel",
    "RewardWeights",
    "Sighting",
]
