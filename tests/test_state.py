"""Tests covering the table state helpers."""

from __future__ import annotations

import pytest

from unogame.cards import Card, Color
from unogame.state import Direction, GamePhase, GameState, Player, new_game_state


def _state(num_players: int) -> GameState:
    return new_game_state([Player(name=f"P{idx}") for idx in range(num_players)])


def test_new_game_state_defaults() -> None:
    state = _state(3)
    assert state.phase is GamePhase.SETUP
    assert state.direction is Direction.CLOCKWISE
    assert state.current_player_index == 0
    assert isinstance(state.players, tuple)


def test_game_needs_two_players() -> None:
    with pytest.raises(ValueError):
        _state(1)


@pytest.mark.parametrize(
    ("direction", "start", "steps", "expected"),
    [
        (Direction.CLOCKWISE, 3, 1, 0),
        (Direction.CLOCKWISE, 1, 2, 3),
        (Direction.COUNTER_CLOCKWISE, 0, 1, 3),
        (Direction.COUNTER_CLOCKWISE, 1, 2, 3),
    ],
)
def test_next_index_wraps(direction: Direction, start: int, steps: int, expected: int) -> None:
    state = _state(4)
    state.direction = direction
    state.current_player_index = start
    assert state.next_index(steps=steps) == expected
    assert state.advance(steps) == expected
    assert state.current_player_index == expected


def test_reverse_twice_restores_direction() -> None:
    state = _state(3)
    state.reverse()
    assert state.direction is Direction.COUNTER_CLOCKWISE
    state.reverse()
    assert state.direction is Direction.CLOCKWISE


def test_player_round_lifecycle() -> None:
    player = Player(name="Ada", hand=[Card.number_card(Color.RED, 1)], round_points=30, penalty_points=20)

    assert player.fold_round() == 50
    assert player.game_points == 50
    assert player.round_points == player.penalty_points == 0

    player.reset_for_round()
    assert player.hand == []
    assert player.game_points == 50
