"""Decision providers and seating helpers."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from . import rules
from .actions import Decision, DrawCard, PlayCard
from .cards import Card, Color
from .rules import DEFAULT_RULES, InvalidConfigInput, InvalidPlay
from .state import Direction, Player

__all__ = [
    "TurnView",
    "DecisionProvider",
    "BotPlayer",
    "seat_players",
    "validate_player_name",
]


@dataclass(frozen=True, slots=True)
class TurnView:
    """What a seated player is allowed to see when asked for a decision."""

    player_index: int
    hand: tuple[Card, ...]
    top_discard: Card | None
    active_color: Color | None
    direction: Direction
    hand_sizes: tuple[int, ...]

    def playable_indices(self) -> list[int]:
        return rules.playable_indices(self.hand, self.top_discard, self.active_color)


class DecisionProvider:
    """Interface the turn engine uses to ask a seat for its choices.

    Subclasses must implement :meth:`choose_action` and :meth:`choose_color`;
    the remaining hooks have sensible defaults.
    """

    def choose_action(self, view: TurnView) -> Decision:
        raise NotImplementedError

    def choose_color(self, view: TurnView) -> Color:
        raise NotImplementedError

    def declare_uno(self, view: TurnView) -> bool:
        return True

    def play_drawn_card(self, card: Card, view: TurnView) -> bool:
        return True

    def choose_stack(self, view: TurnView, pending_draw: int) -> int | None:
        """Return the hand index of a card to stack on a pending draw, if any."""

        return None

    def notify_invalid_play(self, error: InvalidPlay) -> None:
        """Hook invoked when a requested play was rejected."""


class BotPlayer(DecisionProvider):
    """Simple greedy policy: shed the most expensive legal card, wilds last."""

    def __init__(self, rng: random.Random | None = None, uno_call_rate: float = 1.0) -> None:
        if not 0.0 <= uno_call_rate <= 1.0:
            raise ValueError("uno_call_rate must be within [0, 1]")
        self._rng = rng if rng is not None else random.Random()
        self.uno_call_rate = uno_call_rate

    def _preference(self, card: Card, active_color: Color | None) -> tuple[int, int, int]:
        return (
            0 if card.is_wild else 1,
            1 if card.color is active_color else 0,
            card.point_value,
        )

    def choose_action(self, view: TurnView) -> Decision:
        candidates = view.playable_indices()
        if not candidates:
            return DrawCard()
        best = max(candidates, key=lambda idx: self._preference(view.hand[idx], view.active_color))
        return PlayCard(best)

    def choose_color(self, view: TurnView) -> Color:
        counts = Counter(card.color for card in view.hand if not card.is_wild)
        if not counts:
            return self._rng.choice(Color.playable())
        return max(Color.playable(), key=lambda color: counts[color])

    def declare_uno(self, view: TurnView) -> bool:
        if self.uno_call_rate >= 1.0:
            return True
        return self._rng.random() < self.uno_call_rate

    def choose_stack(self, view: TurnView, pending_draw: int) -> int | None:
        top = view.top_discard
        if top is None:
            return None
        for idx, card in enumerate(view.hand):
            if rules.can_stack(card, top.kind):
                return idx
        return None


def validate_player_name(raw_name: str, taken: Sequence[str] = ()) -> str:
    """Return ``raw_name`` stripped, rejecting blanks and names already seated."""

    name = raw_name.strip()
    if not name:
        raise InvalidConfigInput("player names cannot be blank")
    if name in taken:
        raise InvalidConfigInput(f"duplicate player name '{name}'")
    return name


def seat_players(
    human_names: Sequence[str],
    seats: int = DEFAULT_RULES.max_players,
    *,
    max_players: int = DEFAULT_RULES.max_players,
) -> list[Player]:
    """Return the seated players, filling the seats left over with bots."""

    if not 2 <= seats <= max_players:
        raise InvalidConfigInput(f"seat count must be between 2 and {max_players}")
    if len(human_names) > seats:
        raise InvalidConfigInput("more human players than seats")

    players: list[Player] = []
    for raw_name in human_names:
        name = validate_player_name(raw_name, [player.name for player in players])
        players.append(Player(name=name, is_human=True))

    for bot_number in range(1, seats - len(players) + 1):
        players.append(Player(name=f"Bot {bot_number}", is_human=False))
    return players
