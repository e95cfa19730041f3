"""Composable view primitives for the UNO CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Set

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card
from ..deck import Deck
from ..players import TurnView
from ..state import Direction, GameState


def _direction_label(direction: Direction) -> str:
    return "↻ clockwise" if direction is Direction.CLOCKWISE else "↺ counter-clockwise"


@dataclass(slots=True)
class StateSummaryView:
    """Renderable summarising the current table state."""

    state: GameState
    deck: Deck
    reveal_players: Set[int]
    card_formatter: Callable[[Card | None], str]

    def _hand_markup(self, cards: Sequence[Card], visible: bool) -> str:
        if not visible:
            return f"{len(cards)} cards"
        if not cards:
            return "—"
        return " ".join(self.card_formatter(card) for card in cards)

    def _metadata_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Round[/cyan]: {self.state.round_number}")
        grid.add_row(f"[cyan]Direction[/cyan]: {_direction_label(self.state.direction)}")
        grid.add_row(f"[cyan]Deck[/cyan]: {len(self.deck.draw_pile)} card(s)")
        top = self.deck.peek_top_discard()
        grid.add_row(
            f"[cyan]Discard[/cyan]: {self.card_formatter(top)} ({len(self.deck.discard_pile)} card(s))"
        )
        active = self.state.active_color.value.title() if self.state.active_color else "—"
        grid.add_row(f"[cyan]Active color[/cyan]: {active}")
        return Panel(grid, title="Table State", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Player", justify="left", style="bold")
        table.add_column("Role", justify="left")
        table.add_column("Hand", justify="left")
        table.add_column("Game points", justify="right")

        winner_index = self.state.round_winner_index
        for idx, player in enumerate(self.state.players):
            role = "Human" if player.is_human else "Bot"
            visible = idx in self.reveal_players
            name = player.name
            if idx == self.state.current_player_index:
                name = f"[bold yellow]{name}[/bold yellow]"
            if winner_index == idx:
                name = f"{name} [bold green](winner)[/bold green]"
            table.add_row(name, role, self._hand_markup(player.hand, visible), str(player.game_points))

        return Group(table, self._metadata_panel())


@dataclass(slots=True)
class HandView:
    """Renderable listing a player's hand with selectable positions."""

    view: TurnView
    names: Sequence[str]
    card_formatter: Callable[[Card | None], str]

    def render(self) -> RenderableType:
        view = self.view
        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="right", style="bold")
        grid.add_column(justify="left")
        playable = set(view.playable_indices())
        for idx, card in enumerate(view.hand):
            marker = "" if idx in playable else " [dim](cannot play)[/dim]"
            grid.add_row(str(idx + 1), f"{self.card_formatter(card)}{marker}")
        grid.add_row("0", "Draw a card")

        opponents = ", ".join(
            f"{name}: {size}"
            for idx, (name, size) in enumerate(zip(self.names, view.hand_sizes))
            if idx != view.player_index
        )
        active = view.active_color.value.title() if view.active_color else "—"
        header = (
            f"Top: {self.card_formatter(view.top_discard)} • Active color: {active} • "
            f"{_direction_label(view.direction)}\nOpponents: {opponents}"
        )
        return Panel(
            Group(header, grid),
            title=f"{self.names[view.player_index]}'s hand",
            border_style="yellow",
            box=box.ROUNDED,
        )
