"""The environment surface the pursuer agents consume.

Agents never reach into a concrete game; everything they need goes through
this protocol. ``mazechase.sim.MazeGame`` is the in-repo implementation.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from ..actions import Move, PathMode
from ..rewards import GameSnapshot


class Environment(Protocol):
    def current_tick(self) -> int:
        """Ticks elapsed in the current level."""
        ...

    def position_of(self, agent_id: str) -> int:
        """Node of ``agent_id`` or UNKNOWN_POSITION when it is not observable."""
        ...

    def last_move_of(self, agent_id: str) -> Move: ...

    def legal_moves(self, position: int, last_move: Move | None = None) -> Sequence[Move]:
        """Moves available from ``position``; empty for an invalid position."""
        ...

    def neighbor(self, position: int, move: Move) -> int:
        """Node reached by ``move`` or UNKNOWN_POSITION."""
        ...

    def shortest_path_distance(self, a: int, b: int) -> int: ...

    def move_toward_or_away(self, start: int, target: int, last_move: Move | None, mode: PathMode) -> Move: ...

    def clone(self, opponent_at: int | None = None) -> Environment:
        """Deep, independent copy for simulation.

        With ``opponent_at`` the copy has the evader on that node, so a search
        never starts from information the agent does not hold.
        """
        ...

    def advance(self, evader_move: Move, pursuer_moves: Mapping[str, Move]) -> None: ...

    def is_terminal(self) -> bool: ...

    def was_captured(self) -> bool:
        """True if the evader was caught during the last advance."""
        ...

    def score(self) -> float: ...

    def requires_action(self, agent_id: str) -> bool | None: ...

    def edible_time(self, agent_id: str) -> int: ...

    def active_power_pills(self) -> Sequence[int]: ...

    def snapshot(self) -> GameSnapshot: ...


class ObservableEnvironment(Environment, Protocol):
    def observed_by(self, agent_id: str) -> Environment:
        """The environment as ``agent_id``'s sensors see it."""
        ...
