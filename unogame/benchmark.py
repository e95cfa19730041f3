"""Benchmark harness running bot-only UNO games."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import numpy as np

from . import players as players_module
from .engine import TurnEngine
from .rules import DEFAULT_RULES, RuleConfig
from .scoreboard import MatchHistory

__all__ = ["SeatBreakdown", "SimulationReport", "run_bot_games"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SeatBreakdown:
    """Aggregate statistics collected for a single seat across a benchmark."""

    seat: int
    game_wins: int
    round_wins: int
    mean_game_points: float
    std_game_points: float


@dataclass(frozen=True, slots=True)
class SimulationReport:
    """Summary of a batch of simulated games."""

    games: int
    histories: tuple[MatchHistory, ...]
    seats: tuple[SeatBreakdown, ...]
    mean_rounds: float
    max_rounds: int

    @property
    def win_rates(self) -> tuple[float, ...]:
        return tuple(seat.game_wins / self.games for seat in self.seats)


def run_bot_games(
    games: int,
    *,
    seats: int = DEFAULT_RULES.max_players,
    config: RuleConfig | None = None,
    seed: int = 123,
    uno_call_rate: float = 1.0,
) -> SimulationReport:
    """Play ``games`` complete games between bots and aggregate the results."""

    if games <= 0:
        raise ValueError("games must be positive")
    rule_config = config if config is not None else RuleConfig()
    rng = random.Random(seed)

    game_points = np.zeros((games, seats), dtype=np.int64)
    round_wins = np.zeros(seats, dtype=np.int64)
    game_wins = np.zeros(seats, dtype=np.int64)
    round_counts = np.zeros(games, dtype=np.int64)
    histories: list[MatchHistory] = []

    for game_number in range(games):
        seated = players_module.seat_players([], seats, max_players=rule_config.max_players)
        providers = [players_module.BotPlayer(rng, uno_call_rate=uno_call_rate) for _ in seated]
        engine = TurnEngine(seated, providers, rule_config, rng=rng)
        winner = engine.play_game()

        winner_index = next(idx for idx, player in enumerate(engine.players) if player is winner)
        game_wins[winner_index] += 1
        game_points[game_number] = [player.game_points for player in engine.players]
        round_counts[game_number] = len(engine.history.rounds)
        for summary in engine.history.rounds:
            round_wins[summary.winner_index] += 1
        histories.append(engine.history)
        logger.debug(
            "game %d/%d won by seat %d after %d round(s)",
            game_number + 1,
            games,
            winner_index,
            round_counts[game_number],
        )

    means = game_points.mean(axis=0)
    stds = game_points.std(axis=0)
    breakdown = tuple(
        SeatBreakdown(
            seat=seat,
            game_wins=int(game_wins[seat]),
            round_wins=int(round_wins[seat]),
            mean_game_points=float(means[seat]),
            std_game_points=float(stds[seat]),
        )
        for seat in range(seats)
    )
    return SimulationReport(
        games=games,
        histories=tuple(histories),
        seats=breakdown,
        mean_rounds=float(round_counts.mean()),
        max_rounds=int(round_counts.max()),
    )
