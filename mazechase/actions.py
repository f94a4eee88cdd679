from __future__ import annotations

from enum import IntEnum


class Move(IntEnum):
    """Moves available to every agent in the maze."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3
    NEUTRAL = 4  # No displacement

    def opposite(self) -> Move:
        if self is Move.NEUTRAL:
            return Move.NEUTRAL
        return Move((self.value + 2) % 4)

    @property
    def delta(self) -> tuple[int, int]:
        """(dy, dx) grid displacement."""
        return _DELTAS[self]


_DELTAS: dict[Move, tuple[int, int]] = {
    Move.UP: (-1, 0),
    Move.RIGHT: (0, 1),
    Move.DOWN: (1, 0),
    Move.LEFT: (0, -1),
    Move.NEUTRAL: (0, 0),
}

# Directional moves in the order neighbours are enumerated
DIRECTIONS: tuple[Move, ...] = (Move.UP, Move.RIGHT, Move.DOWN, Move.LEFT)


class PathMode(IntEnum):
    """Whether a path query heads for or away from its target."""

    TOWARD = 0
    AWAY = 1


class MessageType(IntEnum):
    """Message kinds carried by the team messenger."""

    OPPONENT_SEEN = 0


class PlannerKind(IntEnum):
    """Planner an agent delegates to once retreat does not apply."""

    MCTS = 0
    QLEARNING = 1
    RETREAT = 2
