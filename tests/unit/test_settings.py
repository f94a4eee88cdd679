import math

import pytest
from pydantic import ValidationError

from mazechase.actions import PlannerKind
from mazechase.agents import PursuerTeam
from mazechase.planners import QLearningPlanner
from mazechase.settings import Settings


def test_defaults_match_agent_config():
    config = Settings(_env_file=None).to_agent_config()
    assert config.planner is PlannerKind.MCTS
    assert config.belief.tick_threshold == 5
    assert config.mcts.num_simulations == 200
    assert config.mcts.uct_constant == math.sqrt(2)
    assert config.qlearning.learning_rate == 0.1
    assert config.rewards.eat_bonus == 50.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAZECHASE_PLANNER", "qlearning")
    monkeypatch.setenv("MAZECHASE_NUM_SIMULATIONS", "42")
    monkeypatch.setenv("MAZECHASE_RETREAT_NEAR_POWER", "false")
    monkeypatch.setenv("MAZECHASE_EXPLOITATION", "mean")

    config = Settings(_env_file=None).to_agent_config()
    assert config.planner is PlannerKind.QLEARNING
    assert config.mcts.num_simulations == 42
    assert config.mcts.exploitation == "mean"
    assert not config.retreat_near_power


def test_unknown_planner_rejected(monkeypatch):
    monkeypatch.setenv("MAZECHASE_PLANNER", "retreat")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_drive_a_team(monkeypatch):
    monkeypatch.setenv("MAZECHASE_PLANNER", "qlearning")
    monkeypatch.setenv("MAZECHASE_TICK_THRESHOLD", "9")

    team = PursuerTeam(config=Settings(_env_file=None).to_agent_config(), seed=0)
    for agent in team.agents.values():
        assert isinstance(agent.planner, QLearningPlanner)
        assert agent.belief.config.tick_threshold == 9
