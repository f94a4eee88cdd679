from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..actions import Move
from ..constants import EVADER_ID

if TYPE_CHECKING:
    from ..env.protocol import Environment


class RandomWalkEvader:
    """Baseline evader: follows corridors, picks a random exit at junctions."""

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def get_move(self, env: Environment) -> Move:
        position = env.position_of(EVADER_ID)
        last = env.last_move_of(EVADER_ID)
        moves = list(env.legal_moves(position, last))
        if not moves:
            return last.opposite()
        if len(moves) == 1:
            return moves[0]
        return moves[int(self.rng.integers(len(moves)))]
