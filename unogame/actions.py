"""Card effect resolution and player decision records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .cards import Card, Kind

__all__ = [
    "EffectDescriptor",
    "NO_EFFECT",
    "PlayCard",
    "DrawCard",
    "Decision",
    "resolve",
    "describe",
]


@dataclass(frozen=True, slots=True)
class EffectDescriptor:
    """Side-effect-free description of what a played card causes."""

    skip_count: int = 0
    reverse_direction: bool = False
    draw_count_for_next: int = 0
    requires_color_choice: bool = False

    @property
    def is_empty(self) -> bool:
        return self == NO_EFFECT


NO_EFFECT = EffectDescriptor()


@dataclass(frozen=True)
class PlayCard:
    """Decision to play the card at ``index`` in the hand."""

    index: int


@dataclass(frozen=True)
class DrawCard:
    """Decision to draw a single card from the draw pile."""


Decision = Union[PlayCard, DrawCard]


def resolve(card: Card, player_count: int) -> EffectDescriptor:
    """Map ``card`` to the effect it has on a table of ``player_count`` seats."""

    kind = card.kind
    if kind is Kind.NUMBER:
        return NO_EFFECT
    if kind is Kind.SKIP:
        return EffectDescriptor(skip_count=1)
    if kind is Kind.REVERSE:
        # With two seats a reverse hands the turn straight back.
        return EffectDescriptor(skip_count=1 if player_count == 2 else 0, reverse_direction=True)
    if kind is Kind.DRAW_TWO:
        return EffectDescriptor(skip_count=1, draw_count_for_next=2)
    if kind is Kind.WILD:
        return EffectDescriptor(requires_color_choice=True)
    if kind is Kind.WILD_DRAW_FOUR:
        return EffectDescriptor(skip_count=1, draw_count_for_next=4, requires_color_choice=True)
    raise ValueError(f"Unknown card kind {kind!r}")


def describe(effect: EffectDescriptor) -> str:
    """Return a short description of ``effect`` for the event log."""

    parts: list[str] = []
    if effect.reverse_direction:
        parts.append("direction reversed")
    if effect.draw_count_for_next:
        parts.append(f"next player draws {effect.draw_count_for_next}")
    if effect.skip_count:
        parts.append("next player skipped" if effect.skip_count == 1 else f"{effect.skip_count} players skipped")
    if effect.requires_color_choice:
        parts.append("color choice")
    return ", ".join(parts) if parts else "no effect"
