"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Color
from ..deck import Deck
from ..state import GameState
from .views import StateSummaryView

_COLOR_STYLES = {
    Color.RED: "red",
    Color.BLUE: "blue",
    Color.GREEN: "green",
    Color.YELLOW: "yellow",
    Color.WILD: "magenta",
}


def color_style(color: Color | None) -> str:
    return _COLOR_STYLES.get(color, "white") if color is not None else "white"


def format_color(color: Color | None) -> str:
    """Return a Rich-rendered label for an active color."""

    if color is None:
        return "—"
    style = color_style(color)
    return f"[bold {style}]{color.value.title()}[/bold {style}]"


def format_card(card: Card | None) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card is None:
        return "—"
    style = color_style(card.color)
    return f"[{style}]{card.label()}[/{style}]"


def render_state(
    state: GameState,
    deck: Deck,
    *,
    reveal_players: Iterable[int] | None = None,
    title: str = "UNO",
) -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = StateSummaryView(
        state=state,
        deck=deck,
        reveal_players=set(reveal_players or set()),
        card_formatter=format_card,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
