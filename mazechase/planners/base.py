from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..actions import Move, PathMode

if TYPE_CHECKING:
    from ..env.belief import BeliefState
    from ..env.protocol import Environment


class Planner(Protocol):
    """Move selection for one pursuer, given its belief about the evader."""

    agent_id: str

    def decide(self, belief: BeliefState, env: Environment, *, deadline: float | None = None) -> Move: ...

    def reset(self) -> None:
        """Forget per-match state; learned values survive."""
        ...


class RetreatPolicy:
    """Back away from the believed evader position along the shortest path."""

    def __init__(self, agent_id: str):
        self.agent_id = agent_id

    def decide(self, belief: BeliefState, env: Environment, *, deadline: float | None = None) -> Move:
        return env.move_toward_or_away(
            env.position_of(self.agent_id),
            belief.position,
            env.last_move_of(self.agent_id),
            PathMode.AWAY,
        )

    def reset(self) -> None:
        pass
