"""Tests covering the bot simulation harness."""

from __future__ import annotations

import pytest

from unogame.benchmark import run_bot_games
from unogame.rules import RuleConfig


def test_run_bot_games_returns_report() -> None:
    report = run_bot_games(2, seats=3, config=RuleConfig(winning_score=100), seed=7)

    assert report.games == 2
    assert len(report.histories) == 2
    assert len(report.seats) == 3
    assert sum(seat.game_wins for seat in report.seats) == 2
    assert sum(report.win_rates) == pytest.approx(1.0)
    total_rounds = sum(len(history.rounds) for history in report.histories)
    assert sum(seat.round_wins for seat in report.seats) == total_rounds
    assert report.max_rounds >= report.mean_rounds >= 1


def test_run_bot_games_is_reproducible() -> None:
    config = RuleConfig(winning_score=80)
    first = run_bot_games(1, seats=2, config=config, seed=21)
    second = run_bot_games(1, seats=2, config=config, seed=21)

    assert first.seats == second.seats


def test_run_bot_games_rejects_empty_batch() -> None:
    with pytest.raises(ValueError):
        run_bot_games(0)
