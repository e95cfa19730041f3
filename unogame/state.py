"""Core game state data structures for UNO."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from .cards import Card, Color


class Direction(str, Enum):
    """Order in which seats take their turns."""

    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"

    @property
    def step(self) -> int:
        return 1 if self is Direction.CLOCKWISE else -1

    def reversed(self) -> "Direction":
        if self is Direction.CLOCKWISE:
            return Direction.COUNTER_CLOCKWISE
        return Direction.CLOCKWISE


class GamePhase(str, Enum):
    """High-level phases of the turn engine."""

    SETUP = "setup"
    ROUND_IN_PROGRESS = "round_in_progress"
    ROUND_END = "round_end"
    GAME_END = "game_end"


@dataclass(slots=True)
class Player:
    """State tracked for each seat at the table."""

    name: str
    is_human: bool = False
    hand: List[Card] = field(default_factory=list)
    round_points: int = 0
    penalty_points: int = 0
    game_points: int = 0

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def reset_for_round(self) -> None:
        """Clear the hand and the per-round counters."""

        self.hand.clear()
        self.round_points = 0
        self.penalty_points = 0

    def fold_round(self) -> int:
        """Move round and penalty points into the game total, returning the amount added."""

        gained = self.round_points + self.penalty_points
        self.game_points += gained
        self.round_points = 0
        self.penalty_points = 0
        return gained


@dataclass(slots=True)
class GameState:
    """Mutable table state owned by the turn engine."""

    players: tuple[Player, ...]
    current_player_index: int = 0
    direction: Direction = Direction.CLOCKWISE
    active_color: Color | None = None
    phase: GamePhase = GamePhase.SETUP
    round_number: int = 0
    round_winner_index: int | None = None

    def __post_init__(self) -> None:
        self.players = tuple(self.players)
        if len(self.players) < 2:
            raise ValueError("a game needs at least two players")

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def next_index(self, from_index: int | None = None, steps: int = 1) -> int:
        """Return the seat ``steps`` turns after ``from_index`` in the current direction."""

        origin = self.current_player_index if from_index is None else from_index
        return (origin + steps * self.direction.step) % self.num_players

    def advance(self, steps: int = 1) -> int:
        """Move the turn pointer ``steps`` seats and return the new index."""

        self.current_player_index = self.next_index(steps=steps)
        return self.current_player_index

    def reverse(self) -> None:
        self.direction = self.direction.reversed()

    def hand_sizes(self) -> tuple[int, ...]:
        return tuple(player.hand_size for player in self.players)

    def cards_in_hands(self) -> int:
        return sum(self.hand_sizes())


def new_game_state(players: Sequence[Player]) -> GameState:
    """Return a fresh game state in the setup phase."""

    return GameState(players=tuple(players))
