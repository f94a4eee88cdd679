"""Reward computation for pursuer planners.

Both planners score positions with the same function:

- RewardWeights: Configurable weights for each reward component
- GameSnapshot: The counters a reward is computed from
- RewardModel: Pure computation plus a per-agent diagnostic trace

Rewards are from the pursuers' point of view: catching the evader and time
spent in a level are good, pills eaten and pursuers lost are bad.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RewardWeights:
    """Weights for reward components.

    Defaults match the tuned values the Q-learning pursuer shipped with.
    """

    eat_bonus: float = 50.0  # Per evader life lost
    decay_rate: float = 0.05  # Per tick survived in the current level
    pill_penalty: float = 0.0  # Per pill eaten since level start
    power_pill_penalty: float = -5.0  # Per power pill eaten since level start
    capture_penalty: float = -15.0  # Per pursuer eaten
    level_penalty: float = -100.0  # Per level index


@dataclass(frozen=True)
class GameSnapshot:
    """Counters describing the game at one tick."""

    evader_lives_lost: int
    level_time: int
    pills_eaten: int
    power_pills_eaten: int
    pursuers_eaten: int
    level: int


@dataclass
class RewardModel:
    """Scores snapshots and keeps every value it produced."""

    weights: RewardWeights = field(default_factory=RewardWeights)
    trace: list[float] = field(default_factory=list)

    def evaluate(self, snapshot: GameSnapshot) -> float:
        """Pure reward for a snapshot; does not touch the trace."""
        w = self.weights
        return float(
            snapshot.evader_lives_lost * w.eat_bonus
            + snapshot.level_time * w.decay_rate
            + snapshot.pills_eaten * w.pill_penalty
            + snapshot.power_pills_eaten * w.power_pill_penalty
            + snapshot.pursuers_eaten * w.capture_penalty
            + snapshot.level * w.level_penalty
        )

    def reward(self, snapshot: GameSnapshot) -> float:
        value = self.evaluate(snapshot)
        self.trace.append(value)
        return value

    @property
    def last(self) -> float | None:
        return self.trace[-1] if self.trace else None
