"""Typer entry-point wiring for the UNO CLI."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt
from rich.table import Table

from .. import benchmark, scoreboard
from ..deck import DeckExhausted
from ..engine import TurnEngine
from ..players import BotPlayer, DecisionProvider, seat_players, validate_player_name
from ..rules import DEFAULT_RULES, DEFAULT_WINNING_SCORE, InvalidConfigInput, RuleConfig, parse_winning_score
from ..state import GamePhase, Player
from .console import ConsolePlayer
from .render import render_state

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def _prompt_names(humans: int, given: Sequence[str]) -> list[str]:
    names = list(given[:humans])
    while len(names) < humans:
        raw = Prompt.ask(f"Name for human player {len(names) + 1}", console=console)
        try:
            names.append(validate_player_name(raw, names))
        except InvalidConfigInput as exc:
            console.print(f"[red]{exc}[/red]")
    return names


def _prompt_winning_score() -> int:
    while True:
        raw = Prompt.ask("Winning score", console=console, default=str(DEFAULT_WINNING_SCORE))
        try:
            return parse_winning_score(raw)
        except InvalidConfigInput as exc:
            console.print(f"[red]{exc}[/red]")


def _render_round_summary(summary: scoreboard.RoundSummary, players: Sequence[Player]) -> Table:
    """Return a Rich table describing the outcome of a round."""

    table = Table(title=f"Round {summary.round_number} Summary", box=box.SIMPLE_HEAVY)
    table.add_column("Player", justify="center")
    table.add_column("Result", justify="center")
    table.add_column("Hand", justify="right")
    table.add_column("Round", justify="right")
    table.add_column("Penalty", justify="right")
    table.add_column("Game total", justify="right")

    for entry in summary.scores:
        player = players[entry.player_index]
        label = player.name
        result = "Loss"
        if entry.won_round:
            label = f"[bold green]{label}[/bold green]"
            result = "[bold green]Win[/bold green]"
        table.add_row(
            label,
            result,
            str(entry.hand_points),
            str(entry.round_points),
            str(entry.penalty_points),
            str(player.game_points),
        )
    return table


def _render_match_summary(history: scoreboard.MatchHistory, players: Sequence[Player]) -> Table:
    """Return the aggregated game summary table."""

    table = Table(title="Game Summary", box=box.DOUBLE_EDGE)
    table.add_column("Player", justify="center")
    table.add_column("Round wins", justify="right")
    table.add_column("Best haul", justify="right")
    table.add_column("Left in hand", justify="right")
    table.add_column("Penalties", justify="right")
    table.add_column("Game points", justify="right")

    leader = history.leader()
    for total in history.totals():
        label = players[total.player_index].name
        points = str(total.game_points)
        if total.player_index == leader:
            label = f"[bold blue]{label}[/bold blue]"
            points = f"[bold blue]{points}[/bold blue]"
        table.add_row(
            label,
            str(total.wins),
            str(total.best_haul),
            str(total.points_left_in_hand),
            str(total.penalty_points),
            points,
        )
    return table


@app.command()
def play(
    seats: int = typer.Option(
        DEFAULT_RULES.max_players,
        min=2,
        max=DEFAULT_RULES.max_players,
        help="Number of seated players.",
    ),
    humans: int = typer.Option(1, min=0, help="Human-controlled seats starting from the first seat."),
    name: Optional[List[str]] = typer.Option(None, "--name", help="Human player name (repeatable)."),
    winning_score: Optional[int] = typer.Option(None, help="Points needed to win (prompted when omitted)."),
    stacking: bool = typer.Option(False, "--stacking/--no-stacking", help="Allow stacking draw cards."),
    jump_in: bool = typer.Option(False, "--jump-in/--no-jump-in", help="Record the jump-in house rule."),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    log_level: str = typer.Option("INFO", help="Logging level for the event stream."),
) -> None:
    """Play a game of UNO at the terminal."""

    _configure_logging(log_level)
    if humans > seats:
        raise typer.BadParameter("Humans cannot exceed the number of seats.")

    names = _prompt_names(humans, name or [])
    score = winning_score if winning_score is not None else _prompt_winning_score()
    try:
        config = RuleConfig(winning_score=score, allow_stacking=stacking, allow_jump_in=jump_in)
        seated = seat_players(names, seats, max_players=config.max_players)
    except InvalidConfigInput as exc:
        raise typer.BadParameter(str(exc)) from exc

    rng = random.Random(seed)
    player_names = [player.name for player in seated]
    providers: list[DecisionProvider] = [
        ConsolePlayer(console, player_names) if player.is_human else BotPlayer(rng) for player in seated
    ]
    engine = TurnEngine(seated, providers, config, rng=rng)

    try:
        while engine.phase is not GamePhase.GAME_END:
            summary = engine.play_round()
            console.print(render_state(engine.state, engine.deck, title="Round Over"))
            console.print(_render_round_summary(summary, engine.players))
    except DeckExhausted as exc:
        console.print(f"[bold red]Game aborted:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(_render_match_summary(engine.history, engine.players))
    console.print(f"[bold green]{engine.game_winner().name} wins the game![/bold green]")


@app.command("simulate")
def simulate_cli(
    games: int = typer.Option(20, min=1, help="Number of bot-only games to play."),
    seats: int = typer.Option(
        DEFAULT_RULES.max_players,
        min=2,
        max=DEFAULT_RULES.max_players,
        help="Number of seated bots.",
    ),
    winning_score: int = typer.Option(DEFAULT_WINNING_SCORE, min=1, help="Points needed to win a game."),
    stacking: bool = typer.Option(False, "--stacking/--no-stacking", help="Allow stacking draw cards."),
    uno_call_rate: float = typer.Option(1.0, min=0.0, max=1.0, help="Chance a bot remembers to call UNO."),
    seed: int = typer.Option(123, help="Random seed for the simulation."),
    log_level: str = typer.Option("WARNING", help="Logging level while simulating."),
) -> None:
    """Run bot-only games and report per-seat statistics."""

    _configure_logging(log_level)
    config = RuleConfig(winning_score=winning_score, allow_stacking=stacking)
    report = benchmark.run_bot_games(
        games,
        seats=seats,
        config=config,
        seed=seed,
        uno_call_rate=uno_call_rate,
    )

    table = Table(title="Bot Simulation", box=box.SIMPLE_HEAVY)
    table.add_column("Seat", justify="center")
    table.add_column("Game wins", justify="right")
    table.add_column("Win rate", justify="right")
    table.add_column("Round wins", justify="right")
    table.add_column("Mean points", justify="right")
    table.add_column("Std points", justify="right")
    for seat, rate in zip(report.seats, report.win_rates):
        table.add_row(
            f"Bot {seat.seat + 1}",
            str(seat.game_wins),
            f"{rate:.1%}",
            str(seat.round_wins),
            f"{seat.mean_game_points:.1f}",
            f"{seat.std_game_points:.1f}",
        )

    console.print(table)
    console.print(
        f"[cyan]{report.games} game(s) simulated, {report.mean_rounds:.1f} round(s) on average "
        f"(max {report.max_rounds}).[/cyan]"
    )


def main() -> None:
    """Entry-point for ``python -m unogame.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
