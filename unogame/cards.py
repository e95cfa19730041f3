"""Card abstractions and helpers for UNO."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable

__all__ = [
    "Color",
    "Kind",
    "Card",
    "InvalidCardConstruction",
    "FULL_DECK_SIZE",
    "ACTION_POINTS",
    "WILD_POINTS",
    "can_play_on",
    "iter_full_deck",
]

ACTION_POINTS: Final[int] = 20
WILD_POINTS: Final[int] = 50
FULL_DECK_SIZE: Final[int] = 108


class InvalidCardConstruction(ValueError):
    """Raised when a card is built with an inconsistent color, kind or number."""


class Color(str, Enum):
    """Enumeration of card colors, including the wild pseudo-color."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"

    @classmethod
    def playable(cls) -> tuple["Color", ...]:
        """Return the four colors a round can be played in."""

        return (cls.RED, cls.BLUE, cls.GREEN, cls.YELLOW)


class Kind(str, Enum):
    """Enumeration of card kinds."""

    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"

    @property
    def is_wild(self) -> bool:
        return self in (Kind.WILD, Kind.WILD_DRAW_FOUR)

    @property
    def is_action(self) -> bool:
        """Return ``True`` for every kind that carries a side effect."""

        return self is not Kind.NUMBER


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical UNO card."""

    color: Color
    kind: Kind
    number: int | None = None

    def __post_init__(self) -> None:
        if self.kind is Kind.NUMBER:
            if self.number is None or not 0 <= self.number <= 9:
                raise InvalidCardConstruction(
                    f"number cards need a value between 0 and 9, got {self.number!r}"
                )
        elif self.number is not None:
            raise InvalidCardConstruction(f"{self.kind.value} cards cannot carry a number")
        if self.kind.is_wild and self.color is not Color.WILD:
            raise InvalidCardConstruction(f"{self.kind.value} cards must use the wild color")
        if not self.kind.is_wild and self.color is Color.WILD:
            raise InvalidCardConstruction(f"{self.kind.value} cards need a concrete color")

    @classmethod
    def number_card(cls, color: Color, number: int) -> "Card":
        return cls(color=color, kind=Kind.NUMBER, number=number)

    @classmethod
    def action(cls, color: Color, kind: Kind) -> "Card":
        return cls(color=color, kind=kind)

    @classmethod
    def wild(cls, draw_four: bool = False) -> "Card":
        return cls(color=Color.WILD, kind=Kind.WILD_DRAW_FOUR if draw_four else Kind.WILD)

    @property
    def is_wild(self) -> bool:
        return self.kind.is_wild

    @property
    def point_value(self) -> int:
        """Return the score this card is worth when left in a hand."""

        if self.kind is Kind.NUMBER:
            assert self.number is not None
            return self.number
        if self.kind.is_wild:
            return WILD_POINTS
        return ACTION_POINTS

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        if self.kind is Kind.NUMBER:
            return f"{self.color.value.title()} {self.number}"
        kind_label = self.kind.value.replace("_", " ").title()
        if self.kind.is_wild:
            return kind_label
        return f"{self.color.value.title()} {kind_label}"

    def __str__(self) -> str:
        return self.label()


def can_play_on(candidate: Card, top_discard: Card, active_color: Color) -> bool:
    """Return ``True`` when ``candidate`` matches the previous play.

    Kind equality includes number cards, so any number plays on any number
    and equal values match across colors.
    """

    if candidate.is_wild:
        return True
    if candidate.color is active_color or candidate.color is top_discard.color:
        return True
    return candidate.kind is top_discard.kind


def iter_full_deck() -> Iterable[Card]:
    """Yield all physical cards in a fresh UNO deck."""

    for color in Color.playable():
        yield Card.number_card(color, 0)
        for number in range(1, 10):
            yield Card.number_card(color, number)
            yield Card.number_card(color, number)
        for kind in (Kind.SKIP, Kind.REVERSE, Kind.DRAW_TWO):
            yield Card.action(color, kind)
            yield Card.action(color, kind)
    for _ in range(4):
        yield Card.wild()
        yield Card.wild(draw_four=True)
