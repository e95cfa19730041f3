"""Tests covering the typer command-line interface."""

from __future__ import annotations

from typer.testing import CliRunner

from unogame.cards import Card, Color, Kind
from unogame.cli.main import app
from unogame.cli.render import format_card, format_color

runner = CliRunner()


def test_format_card_uses_card_color() -> None:
    assert format_card(Card.number_card(Color.RED, 7)) == "[red]Red 7[/red]"
    assert format_card(Card.wild(draw_four=True)) == "[magenta]Wild Draw Four[/magenta]"
    assert format_card(None) == "—"
    assert format_color(Color.BLUE) == "[bold blue]Blue[/bold blue]"


def test_format_card_action_label() -> None:
    assert format_card(Card.action(Color.YELLOW, Kind.SKIP)) == "[yellow]Yellow Skip[/yellow]"


def test_simulate_command_prints_table() -> None:
    result = runner.invoke(app, ["simulate", "--games", "2", "--seats", "2", "--winning-score", "60"])

    assert result.exit_code == 0, result.output
    assert "Bot Simulation" in result.output
    assert "game(s) simulated" in result.output


def test_play_command_with_bots_only() -> None:
    result = runner.invoke(
        app,
        ["play", "--humans", "0", "--winning-score", "50", "--seed", "3", "--log-level", "WARNING"],
    )

    assert result.exit_code == 0, result.output
    assert "wins the game" in result.output


def test_play_command_rejects_too_many_humans() -> None:
    result = runner.invoke(app, ["play", "--seats", "2", "--humans", "3", "--winning-score", "50"])

    assert result.exit_code != 0


def test_play_reprompts_duplicate_names() -> None:
    result = runner.invoke(
        app,
        ["play", "--seats", "2", "--humans", "2", "--winning-score", "50", "--seed", "1"],
        input="Ann\nAnn\nBob\n",
    )

    # The game itself stops once the scripted input runs out.
    assert "duplicate player name 'Ann'" in result.output
    assert result.output.count("Name for human player 2") == 2
    assert "Invalid value" not in result.output
