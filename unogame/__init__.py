"""Top-level package for the UNO game engine."""

from . import actions, cards, deck, engine, players, rules, scoreboard, state

__all__ = [
    "actions",
    "cards",
    "deck",
    "engine",
    "players",
    "rules",
    "scoreboard",
    "state",
]
