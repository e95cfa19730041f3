"""Draw and discard pile management."""

from __future__ import annotations

import logging
import random
from typing import Iterable, List

from .cards import Card, iter_full_deck

__all__ = ["Deck", "DeckExhausted"]

logger = logging.getLogger(__name__)


class DeckExhausted(RuntimeError):
    """Raised when a draw is requested but no card is left to hand out."""


class Deck:
    """Owner of the draw pile and the discard pile.

    Both piles are lists whose last element is the most recently added
    card, so ``draw_pile[-1]`` is the next card drawn and
    ``discard_pile[-1]`` is the visible top of the discard pile.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.draw_pile: List[Card] = []
        self.discard_pile: List[Card] = []
        self.reset()

    @classmethod
    def from_piles(
        cls,
        draw_pile: Iterable[Card],
        discard_pile: Iterable[Card] = (),
        rng: random.Random | None = None,
    ) -> "Deck":
        """Build a deck holding exactly the given piles (bottom card first)."""

        deck = cls.__new__(cls)
        deck._rng = rng if rng is not None else random.Random()
        deck.draw_pile = list(draw_pile)
        deck.discard_pile = list(discard_pile)
        return deck

    def __len__(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile)

    def reset(self) -> None:
        """Start a new deck generation with all 108 cards shuffled into the draw pile."""

        self.discard_pile.clear()
        self.draw_pile = list(iter_full_deck())
        self._rng.shuffle(self.draw_pile)

    def draw(self) -> Card:
        """Pop the top card of the draw pile, reshuffling the discards if needed."""

        if not self.draw_pile:
            self.reshuffle_from_discard()
        if not self.draw_pile:
            raise DeckExhausted(
                f"no card left to draw (discard pile holds {len(self.discard_pile)} card(s))"
            )
        return self.draw_pile.pop()

    def discard(self, card: Card) -> None:
        self.discard_pile.append(card)

    def peek_top_discard(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    def reshuffle_from_discard(self) -> None:
        """Shuffle every discard except the visible top back into the draw pile."""

        if len(self.discard_pile) <= 1:
            return
        top_card = self.discard_pile.pop()
        pool = self.discard_pile[:]
        self._rng.shuffle(pool)
        self.draw_pile = pool + self.draw_pile
        self.discard_pile = [top_card]
        logger.debug("reshuffled %d discard(s) into the draw pile", len(pool))

    def return_to_draw_pile(self, card: Card) -> None:
        """Put ``card`` back into the draw pile and reshuffle it."""

        self.draw_pile.append(card)
        self._rng.shuffle(self.draw_pile)
