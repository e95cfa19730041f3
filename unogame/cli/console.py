"""Console-backed decision provider for human players."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from .. import rules
from ..actions import Decision, DrawCard, PlayCard
from ..cards import Card, Color
from ..players import DecisionProvider, TurnView
from ..rules import InvalidPlay
from .render import format_card
from .views import HandView


class ConsolePlayer(DecisionProvider):
    """Ask a human at the terminal for every decision."""

    def __init__(self, console: Console, names: Sequence[str]) -> None:
        self.console = console
        self.names = list(names)

    def _show(self, view: TurnView) -> None:
        self.console.print(HandView(view=view, names=self.names, card_formatter=format_card).render())

    def choose_action(self, view: TurnView) -> Decision:
        self._show(view)
        choice = IntPrompt.ask("Card number (0 to draw)", console=self.console, default=0)
        if choice <= 0:
            return DrawCard()
        return PlayCard(choice - 1)

    def choose_color(self, view: TurnView) -> Color:
        names = [color.value for color in Color.playable()]
        answer = Prompt.ask("Choose the next color", choices=names, console=self.console)
        return Color(answer)

    def declare_uno(self, view: TurnView) -> bool:
        return Confirm.ask("One card left! Call UNO?", console=self.console, default=True)

    def play_drawn_card(self, card: Card, view: TurnView) -> bool:
        return Confirm.ask(f"You drew {format_card(card)}. Play it now?", console=self.console, default=True)

    def choose_stack(self, view: TurnView, pending_draw: int) -> int | None:
        top = view.top_discard
        if top is None:
            return None
        options = [idx for idx, card in enumerate(view.hand) if rules.can_stack(card, top.kind)]
        if not options:
            return None
        listing = ", ".join(f"{idx + 1}={format_card(view.hand[idx])}" for idx in options)
        self.console.print(f"[bold]{pending_draw}[/bold] cards are coming your way. Stack with: {listing}")
        choice = IntPrompt.ask(
            "Card number (0 to take the cards)",
            console=self.console,
            choices=["0"] + [str(idx + 1) for idx in options],
            default=0,
        )
        return choice - 1 if choice > 0 else None

    def notify_invalid_play(self, error: InvalidPlay) -> None:
        self.console.print(f"[red]Invalid play:[/red] {error}. Choose another card or 0 to draw.")
