"""Tests covering the draw and discard piles."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from unogame.cards import Card, Color, Kind
from unogame.deck import Deck, DeckExhausted


def _num(color: Color, number: int) -> Card:
    return Card.number_card(color, number)


def test_reset_builds_full_shuffled_deck() -> None:
    deck = Deck(random.Random(1))

    assert len(deck.draw_pile) == 108
    assert deck.discard_pile == []
    assert deck.peek_top_discard() is None

    deck.discard(deck.draw())
    deck.reset()
    assert len(deck) == 108
    assert deck.discard_pile == []


def test_draw_pops_most_recent_card() -> None:
    first = _num(Color.RED, 1)
    last = _num(Color.BLUE, 2)
    deck = Deck.from_piles([first, last])

    assert deck.draw() == last
    assert deck.draw() == first


def test_draw_reshuffles_discards_but_keeps_top() -> None:
    a = _num(Color.RED, 1)
    b = _num(Color.BLUE, 2)
    c = _num(Color.GREEN, 3)
    d = _num(Color.YELLOW, 4)
    e = Card.action(Color.RED, Kind.SKIP)
    deck = Deck.from_piles([a], [e, d, c, b], rng=random.Random(5))

    assert deck.draw() == a
    assert deck.draw_pile == []

    drawn = deck.draw()
    assert drawn in {c, d, e}
    assert deck.peek_top_discard() == b
    assert deck.discard_pile == [b]
    assert len(deck.draw_pile) == 2


def test_reshuffle_moves_everything_but_the_top() -> None:
    top = _num(Color.RED, 9)
    buried = [_num(Color.BLUE, n) for n in range(1, 6)] + [_num(Color.BLUE, 1)]
    deck = Deck.from_piles([], buried + [top], rng=random.Random(3))

    deck.reshuffle_from_discard()

    assert deck.peek_top_discard() == top
    assert Counter(deck.draw_pile) == Counter(buried)


def test_draw_from_empty_piles_raises() -> None:
    deck = Deck.from_piles([], [])
    with pytest.raises(DeckExhausted):
        deck.draw()


def test_draw_with_only_discard_top_raises() -> None:
    deck = Deck.from_piles([], [_num(Color.RED, 3)])
    with pytest.raises(DeckExhausted):
        deck.draw()
    assert len(deck) == 1


def test_return_to_draw_pile_keeps_card_count() -> None:
    deck = Deck(random.Random(2))
    card = deck.draw()
    deck.return_to_draw_pile(card)

    assert len(deck.draw_pile) == 108
    assert card in deck.draw_pile
