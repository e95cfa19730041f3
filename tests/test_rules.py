"""Tests covering UNO rule helpers."""

from __future__ import annotations

import pytest

from unogame import rules
from unogame.cards import Card, Color, Kind
from unogame.rules import InvalidConfigInput, RuleConfig
from unogame.state import Player


def _num(color: Color, number: int) -> Card:
    return Card.number_card(color, number)


def test_wild_cards_are_always_valid() -> None:
    top = _num(Color.RED, 3)
    assert rules.is_valid_play(Card.wild(), top, Color.RED)
    assert rules.is_valid_play(Card.wild(draw_four=True), top, Color.RED)


def test_wild_top_requires_chosen_color() -> None:
    top = Card.wild()
    assert rules.is_valid_play(_num(Color.GREEN, 3), top, Color.GREEN)
    assert not rules.is_valid_play(_num(Color.RED, 3), top, Color.GREEN)
    assert not rules.is_valid_play(Card.action(Color.BLUE, Kind.SKIP), Card.wild(draw_four=True), Color.GREEN)


def test_regular_top_delegates_to_matching_rule() -> None:
    top = _num(Color.RED, 3)
    assert rules.is_valid_play(_num(Color.BLUE, 3), top, Color.RED)
    assert rules.is_valid_play(_num(Color.RED, 8), top, Color.RED)
    assert rules.is_valid_play(_num(Color.BLUE, 8), top, Color.RED)
    assert not rules.is_valid_play(Card.action(Color.BLUE, Kind.REVERSE), top, Color.RED)


def test_empty_discard_accepts_anything() -> None:
    assert rules.is_valid_play(_num(Color.YELLOW, 1), None, None)


def test_playable_indices() -> None:
    hand = [Card.action(Color.BLUE, Kind.SKIP), _num(Color.RED, 1), Card.wild(), _num(Color.GREEN, 9)]
    assert rules.playable_indices(hand, _num(Color.RED, 3), Color.RED) == [1, 2, 3]


@pytest.mark.parametrize(
    ("card", "pending_kind", "expected"),
    [
        (Card.action(Color.RED, Kind.DRAW_TWO), Kind.DRAW_TWO, True),
        (Card.wild(draw_four=True), Kind.WILD_DRAW_FOUR, True),
        (Card.wild(draw_four=True), Kind.DRAW_TWO, False),
        (Card.action(Color.RED, Kind.SKIP), Kind.SKIP, False),
    ],
)
def test_can_stack(card: Card, pending_kind: Kind, expected: bool) -> None:
    assert rules.can_stack(card, pending_kind) is expected


def test_apply_uno_penalty_records_points() -> None:
    player = Player(name="Ada")
    drawn = rules.apply_uno_penalty(player, RuleConfig())

    assert drawn == 2
    assert player.penalty_points == 20
    assert player.hand == []


def test_calculate_round_points_credits_winner_with_opponent_hands() -> None:
    winner = Player(name="W")
    first = Player(name="A", hand=[_num(Color.RED, 5), _num(Color.BLUE, 7)])
    second = Player(name="B", hand=[_num(Color.GREEN, 8)])
    third = Player(name="C", hand=[_num(Color.YELLOW, 9), _num(Color.RED, 8)])
    players = [winner, first, second, third]

    scores = rules.calculate_round_points(players, winner)

    assert winner.round_points == 37
    assert [first.round_points, second.round_points, third.round_points] == [12, 8, 17]
    assert scores[0].won_round
    assert scores[0].round_points == 37
    assert [score.hand_points for score in scores] == [0, 12, 8, 17]


def test_calculate_round_points_rejects_unknown_winner() -> None:
    players = [Player(name="A"), Player(name="B")]
    with pytest.raises(ValueError):
        rules.calculate_round_points(players, Player(name="A"))


@pytest.mark.parametrize(
    ("points", "expected"),
    [
        (499, False),
        (500, True),
        (650, True),
    ],
)
def test_win_threshold_is_inclusive(points: int, expected: bool) -> None:
    players = [Player(name="A", game_points=points), Player(name="B", game_points=10)]
    assert rules.check_game_win_condition(players, 500) is expected


def test_parse_winning_score() -> None:
    assert rules.parse_winning_score(" 250 ") == 250
    with pytest.raises(InvalidConfigInput):
        rules.parse_winning_score("lots")
    with pytest.raises(InvalidConfigInput):
        rules.parse_winning_score("0")


def test_rule_config_defaults_and_validation() -> None:
    config = RuleConfig()
    assert config.winning_score == 500
    assert not config.allow_stacking
    assert not config.allow_jump_in
    assert config.hand_size == 7

    with pytest.raises(InvalidConfigInput):
        RuleConfig(winning_score=0)
