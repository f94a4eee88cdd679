import pytest

from mazechase.actions import DIRECTIONS, Move


@pytest.mark.parametrize(
    "move, opposite",
    [(Move.UP, Move.DOWN), (Move.DOWN, Move.UP), (Move.LEFT, Move.RIGHT), (Move.RIGHT, Move.LEFT)],
)
def test_opposite(move, opposite):
    assert move.opposite() is opposite
    assert move.opposite().opposite() is move


def test_neutral_has_no_displacement():
    assert Move.NEUTRAL.opposite() is Move.NEUTRAL
    assert Move.NEUTRAL.delta == (0, 0)
    assert Move.NEUTRAL not in DIRECTIONS
