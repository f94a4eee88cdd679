"""Reference maze rules: eating, captures, levels, clones and sensor views."""

import pytest

from mazechase.actions import Move
from mazechase.constants import EVADER_ID, UNKNOWN_POSITION

from tests.layouts import CORRIDOR, POWER_CORRIDOR

P0 = "pursuer_0"


def test_initial_state(make_game):
    game = make_game(CORRIDOR, num_pursuers=1)
    assert game.pursuer_ids == [P0]
    assert game.position_of(EVADER_ID) == 0
    assert game.position_of(P0) == 4
    assert game.current_tick() == 0
    assert not game.is_terminal()


def test_eating_pills_scores(make_game):
    game = make_game(CORRIDOR, num_pursuers=0)
    game.advance(Move.RIGHT, {})

    assert game.position_of(EVADER_ID) == 1
    assert game.score() == 10.0
    assert game.snapshot().pills_eaten == 1
    assert game.current_tick() == 1


def test_capture_costs_a_life_and_resets_positions(make_game):
    game = make_game(CORRIDOR, num_pursuers=1)
    game.advance(Move.RIGHT, {})  # evader 1, pursuer 3
    assert not game.was_captured()
    game.advance(Move.RIGHT, {})  # both reach 2

    assert game.was_captured()
    assert game.state.lives == 2
    assert game.snapshot().evader_lives_lost == 1
    assert game.position_of(EVADER_ID) == 0
    assert game.position_of(P0) == 4

    game.advance(Move.NEUTRAL, {})
    assert not game.was_captured()


def test_last_life_ends_the_match(make_game):
    game = make_game(CORRIDOR, num_pursuers=1, initial_lives=1)
    game.advance(Move.RIGHT, {})
    game.advance(Move.RIGHT, {})
    assert game.is_terminal()


def test_power_pill_makes_pursuers_edible(make_game):
    game = make_game(POWER_CORRIDOR, num_pursuers=1, edible_time=10)
    game.advance(Move.RIGHT, {})

    assert game.edible_time(P0) == 9
    assert game.active_power_pills() == []
    assert game.snapshot().power_pills_eaten == 1

    game.advance(Move.RIGHT, {})  # evader meets the edible pursuer at 2
    assert not game.was_captured()
    assert game.snapshot().pursuers_eaten == 1
    assert game.position_of(P0) == 4
    assert game.edible_time(P0) == 0
    assert game.score() == 50 + 10 + 200


def test_clearing_pills_advances_level(make_game):
    game = make_game(CORRIDOR, num_pursuers=0, max_levels=2)
    for _ in range(3):
        game.advance(Move.RIGHT, {})

    snap = game.snapshot()
    assert snap.level == 1
    assert snap.level_time == 0
    assert snap.pills_eaten == 0
    assert game.position_of(EVADER_ID) == 0
    assert not game.is_terminal()


def test_clearing_last_level_ends_the_match(make_game):
    game = make_game(CORRIDOR, num_pursuers=0, max_levels=1)
    for _ in range(3):
        game.advance(Move.RIGHT, {})
    assert game.is_terminal()


def test_clone_is_independent(make_game):
    game = make_game(CORRIDOR, num_pursuers=1)
    dup = game.clone()
    dup.advance(Move.RIGHT, {})

    assert dup.position_of(EVADER_ID) == 1
    assert game.position_of(EVADER_ID) == 0
    assert game.current_tick() == 0
    assert game.state.pills != dup.state.pills


def test_sensor_view_hides_distant_evader(make_game):
    game = make_game(CORRIDOR, num_pursuers=1, sensor_range=2)
    view = game.observed_by(P0)

    assert game.position_of(EVADER_ID) == 0
    assert view.position_of(EVADER_ID) == UNKNOWN_POSITION

    game.advance(Move.RIGHT, {})  # evader 1, pursuer 3: distance 2
    assert view.position_of(EVADER_ID) == 1


def test_pursuer_needs_action_at_dead_end_only_when_blocked(make_game):
    game = make_game(num_pursuers=1)
    assert game.requires_action(P0)  # no heading yet

    game.state.pursuers[P0].last_move = Move.DOWN
    assert not game.requires_action(P0)
    game.state.pursuers[P0].last_move = Move.UP
    assert game.requires_action(P0)


def test_clone_can_place_the_evader(make_game):
    game = make_game(CORRIDOR, num_pursuers=1)
    game.advance(Move.RIGHT, {})
    dup = game.clone(opponent_at=3)

    assert dup.position_of(EVADER_ID) == 3
    assert dup.last_move_of(EVADER_ID) is Move.NEUTRAL
    assert game.position_of(EVADER_ID) == 1
    with pytest.raises(ValueError):
        game.clone(opponent_at=UNKNOWN_POSITION)
