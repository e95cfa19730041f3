"""Rule utilities and constants for UNO."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Sequence

from .cards import Card, Color, Kind, can_play_on
from .state import Player

__all__ = [
    "RuleConfig",
    "DEFAULT_RULES",
    "DEFAULT_WINNING_SCORE",
    "InvalidPlay",
    "InvalidConfigInput",
    "PlayerRoundScore",
    "hand_points",
    "is_valid_play",
    "playable_indices",
    "can_stack",
    "apply_uno_penalty",
    "calculate_round_points",
    "check_game_win_condition",
    "parse_winning_score",
]

DEFAULT_WINNING_SCORE: Final[int] = 500


class InvalidPlay(RuntimeError):
    """Raised when a player attempts to play a card illegally."""


class InvalidConfigInput(ValueError):
    """Raised when setup input cannot be turned into a valid configuration."""


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """Rule settings captured at setup."""

    winning_score: int = DEFAULT_WINNING_SCORE
    allow_stacking: bool = False
    allow_jump_in: bool = False
    hand_size: int = 7
    uno_penalty_cards: int = 2
    uno_penalty_points_per_card: int = 10
    max_players: int = 4

    def __post_init__(self) -> None:
        if self.winning_score <= 0:
            raise InvalidConfigInput("winning score must be a positive number")
        if self.hand_size <= 0:
            raise InvalidConfigInput("hand size must be positive")
        if self.uno_penalty_cards < 0 or self.uno_penalty_points_per_card < 0:
            raise InvalidConfigInput("UNO penalty cannot be negative")
        if self.max_players < 2:
            raise InvalidConfigInput("at least two seats are required")


DEFAULT_RULES: Final[RuleConfig] = RuleConfig()


@dataclass(frozen=True, slots=True)
class PlayerRoundScore:
    """Per-player scoring breakdown captured at the end of a round."""

    player_index: int
    hand_points: int
    round_points: int
    penalty_points: int
    won_round: bool

    @property
    def total_points(self) -> int:
        return self.round_points + self.penalty_points


def hand_points(hand: Iterable[Card]) -> int:
    """Return the point total of the cards in ``hand``."""

    return sum(card.point_value for card in hand)


def is_valid_play(chosen_card: Card, top_discard: Card | None, active_color: Color | None) -> bool:
    """Return ``True`` when ``chosen_card`` may be played on the current discard."""

    if chosen_card.is_wild or top_discard is None:
        return True
    if top_discard.is_wild:
        return chosen_card.color is active_color
    if active_color is None:
        active_color = top_discard.color
    return can_play_on(chosen_card, top_discard, active_color)


def playable_indices(
    hand: Sequence[Card], top_discard: Card | None, active_color: Color | None
) -> list[int]:
    """Return the hand positions holding a legal play."""

    return [idx for idx, card in enumerate(hand) if is_valid_play(card, top_discard, active_color)]


def can_stack(card: Card, pending_kind: Kind) -> bool:
    """Return ``True`` when ``card`` may be stacked on a pending draw of ``pending_kind``."""

    return pending_kind in (Kind.DRAW_TWO, Kind.WILD_DRAW_FOUR) and card.kind is pending_kind


def apply_uno_penalty(player: Player, config: RuleConfig) -> int:
    """Record a missed UNO call and return how many cards the player must draw."""

    player.penalty_points += config.uno_penalty_cards * config.uno_penalty_points_per_card
    return config.uno_penalty_cards


def calculate_round_points(players: Sequence[Player], winner: Player) -> list[PlayerRoundScore]:
    """Credit round points and return the per-player breakdown.

    Every loser is credited with the points of its own remaining hand; the
    winner is credited with the sum of all losers' hands.
    """

    if not any(player is winner for player in players):
        raise ValueError("winner is not seated at this table")

    scores: list[PlayerRoundScore] = []
    winner_total = 0
    for player in players:
        if player is winner:
            continue
        points = hand_points(player.hand)
        player.round_points += points
        winner_total += points
    winner.round_points += winner_total

    for idx, player in enumerate(players):
        scores.append(
            PlayerRoundScore(
                player_index=idx,
                hand_points=hand_points(player.hand),
                round_points=player.round_points,
                penalty_points=player.penalty_points,
                won_round=player is winner,
            )
        )
    return scores


def check_game_win_condition(players: Iterable[Player], winning_score: int) -> bool:
    """Return ``True`` once any player's game total reaches ``winning_score``."""

    return any(player.game_points >= winning_score for player in players)


def parse_winning_score(text: str) -> int:
    """Parse user input for the winning score."""

    try:
        score = int(text.strip())
    except ValueError as exc:
        raise InvalidConfigInput(f"'{text}' is not a number") from exc
    if score <= 0:
        raise InvalidConfigInput("winning score must be a positive number")
    return score
