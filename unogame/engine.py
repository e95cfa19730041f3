"""Turn engine orchestrating UNO rounds and games."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from . import rules
from .actions import NO_EFFECT, DrawCard, EffectDescriptor, PlayCard, describe, resolve
from .cards import Card, Color, Kind
from .deck import Deck
from .players import DecisionProvider, TurnView
from .rules import DEFAULT_RULES, InvalidPlay, RuleConfig
from .scoreboard import MatchHistory, RoundSummary
from .state import Direction, GamePhase, GameState, Player, new_game_state

__all__ = ["TurnEngine", "MAX_EVENT_LOG"]

logger = logging.getLogger(__name__)

MAX_EVENT_LOG = 12


def _append_event(log: list[str], message: str) -> None:
    """Append ``message`` to ``log`` maintaining a bounded log length."""

    log.append(message)
    excess = len(log) - MAX_EVENT_LOG
    if excess > 0:
        del log[:excess]


class TurnEngine:
    """Single authoritative owner of the game state.

    The engine solicits one decision at a time from the seat whose turn it
    is, validates it, applies the card's effect and moves the turn pointer.
    Piles and hands are only ever mutated from here.
    """

    def __init__(
        self,
        players: Sequence[Player],
        providers: Sequence[DecisionProvider],
        config: RuleConfig = DEFAULT_RULES,
        *,
        rng: random.Random | None = None,
        deck: Deck | None = None,
    ) -> None:
        if len(providers) != len(players):
            raise ValueError("every player needs exactly one decision provider")
        if len(players) > config.max_players:
            raise ValueError(f"at most {config.max_players} players can be seated")
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.state: GameState = new_game_state(players)
        self.deck = deck if deck is not None else Deck(self.rng)
        self.providers: tuple[DecisionProvider, ...] = tuple(providers)
        self.history = MatchHistory(num_players=len(players))
        self.last_round: RoundSummary | None = None
        self.events: list[str] = []
        if config.allow_jump_in:
            logger.warning("jump-in rule is recorded but not enforced by the engine")

    @property
    def players(self) -> tuple[Player, ...]:
        return self.state.players

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def cards_in_play(self) -> int:
        """Return the number of cards across both piles and every hand."""

        return len(self.deck) + self.state.cards_in_hands()

    def view_for(self, player_index: int) -> TurnView:
        return TurnView(
            player_index=player_index,
            hand=tuple(self.players[player_index].hand),
            top_discard=self.deck.peek_top_discard(),
            active_color=self.state.active_color,
            direction=self.state.direction,
            hand_sizes=self.state.hand_sizes(),
        )

    def game_winner(self) -> Player:
        """Return the player with the highest game total, earliest seat on ties."""

        best = max(
            range(self.state.num_players),
            key=lambda idx: (self.players[idx].game_points, -idx),
        )
        return self.players[best]

    def _event(self, message: str) -> None:
        logger.info(message)
        _append_event(self.events, message)

    def _draw_into(self, player_index: int, count: int) -> list[Card]:
        player = self.players[player_index]
        drawn: list[Card] = []
        for _ in range(count):
            # Cards drawn before an exhausted deck stay in the hand.
            card = self.deck.draw()
            player.hand.append(card)
            drawn.append(card)
        return drawn

    def _ask_color(self, player_index: int) -> Color:
        provider = self.providers[player_index]
        while True:
            color = provider.choose_color(self.view_for(player_index))
            if color in Color.playable():
                break
            logger.warning("%s chose invalid color %r", self.players[player_index].name, color)
        self._event(f"{self.players[player_index].name} picks {color.value}")
        return color

    def _check_uno(self, player_index: int) -> None:
        player = self.players[player_index]
        if len(player.hand) != 1:
            return
        if self.providers[player_index].declare_uno(self.view_for(player_index)):
            self._event(f"{player.name} calls UNO!")
            return
        penalty_cards = rules.apply_uno_penalty(player, self.config)
        self._draw_into(player_index, penalty_cards)
        self._event(f"{player.name} forgot to call UNO and draws {penalty_cards}")

    # Round lifecycle -----------------------------------------------------

    def new_game(self) -> None:
        """Zero every score and return to the setup phase."""

        for player in self.players:
            player.reset_for_round()
            player.game_points = 0
        self.history = MatchHistory(num_players=self.state.num_players)
        self.last_round = None
        self.state.phase = GamePhase.SETUP
        self.state.round_number = 0
        self.state.round_winner_index = None
        self.events.clear()

    def start_round(self) -> None:
        """Reset the piles, deal fresh hands and turn up the opening card."""

        state = self.state
        if state.phase not in (GamePhase.SETUP, GamePhase.ROUND_END):
            raise RuntimeError(f"cannot start a round during {state.phase.value}")

        state.round_number += 1
        state.round_winner_index = None
        state.direction = Direction.CLOCKWISE
        state.active_color = None
        self.deck.reset()
        for player in self.players:
            player.reset_for_round()
        for _ in range(self.config.hand_size):
            for idx in range(state.num_players):
                self._draw_into(idx, 1)

        state.current_player_index = self.rng.randrange(state.num_players)
        self._event(f"Round {state.round_number}: {state.current_player.name} starts")
        self._establish_opening_card()
        state.phase = GamePhase.ROUND_IN_PROGRESS

    def _establish_opening_card(self) -> None:
        state = self.state
        while True:
            card = self.deck.draw()
            if card.kind is not Kind.WILD_DRAW_FOUR:
                break
            self._event("Opening Wild Draw Four goes back into the deck")
            self.deck.return_to_draw_pile(card)

        self.deck.discard(card)
        self._event(f"Opening card: {card.label()}")
        if card.is_wild:
            state.active_color = self._ask_color(state.current_player_index)
            return

        state.active_color = card.color
        if card.kind.is_action:
            self._apply_opening_effect(resolve(card, state.num_players))

    def _apply_opening_effect(self, effect: EffectDescriptor) -> None:
        """Apply an opening action card against the player about to start."""

        state = self.state
        starter = state.current_player
        if effect.reverse_direction:
            state.reverse()
        if effect.draw_count_for_next:
            self._draw_into(state.current_player_index, effect.draw_count_for_next)
            self._event(f"{starter.name} draws {effect.draw_count_for_next}")
        if effect.skip_count:
            state.advance(effect.skip_count)
            self._event(f"{starter.name} is skipped")

    def _finish_round(self, winner_index: int) -> RoundSummary:
        state = self.state
        state.phase = GamePhase.ROUND_END
        state.round_winner_index = winner_index
        winner = self.players[winner_index]

        scores = rules.calculate_round_points(self.players, winner)
        for player in self.players:
            player.fold_round()
        summary = RoundSummary(
            round_number=state.round_number,
            winner_index=winner_index,
            scores=tuple(scores),
            game_points=tuple(player.game_points for player in self.players),
        )
        self.history.record(summary)
        self.last_round = summary
        self._event(f"{winner.name} wins round {state.round_number} (+{scores[winner_index].total_points})")

        if rules.check_game_win_condition(self.players, self.config.winning_score):
            state.phase = GamePhase.GAME_END
            self._event(f"Game over: {self.game_winner().name} wins")
        return summary

    # Turn cycle ----------------------------------------------------------

    def play_turn(self) -> None:
        """Solicit and apply one decision from the current player."""

        state = self.state
        if state.phase is not GamePhase.ROUND_IN_PROGRESS:
            raise RuntimeError("no round in progress")

        index = state.current_player_index
        provider = self.providers[index]
        while True:
            decision = provider.choose_action(self.view_for(index))
            if isinstance(decision, DrawCard):
                self._take_draw(index)
                return
            if not isinstance(decision, PlayCard):
                raise TypeError(f"unsupported decision {decision!r}")
            try:
                self._validate_play(index, decision.index)
            except InvalidPlay as exc:
                logger.info("%s: %s", self.players[index].name, exc)
                provider.notify_invalid_play(exc)
                continue
            self._play_card(index, decision.index)
            return

    def _validate_play(self, player_index: int, hand_index: int) -> Card:
        hand = self.players[player_index].hand
        if not 0 <= hand_index < len(hand):
            raise InvalidPlay(f"no card at position {hand_index + 1}")
        card = hand[hand_index]
        top = self.deck.peek_top_discard()
        if not rules.is_valid_play(card, top, self.state.active_color):
            top_label = top.label() if top is not None else "an empty pile"
            raise InvalidPlay(f"cannot play {card.label()} on {top_label}")
        return card

    def _take_draw(self, player_index: int) -> None:
        player = self.players[player_index]
        card = self._draw_into(player_index, 1)[0]
        self._event(f"{player.name} draws a card")
        playable = rules.is_valid_play(card, self.deck.peek_top_discard(), self.state.active_color)
        if playable and self.providers[player_index].play_drawn_card(card, self.view_for(player_index)):
            self._play_card(player_index, len(player.hand) - 1)
            return
        self.state.advance()

    def _play_card(self, player_index: int, hand_index: int) -> None:
        state = self.state
        player = self.players[player_index]
        card = player.hand.pop(hand_index)
        self.deck.discard(card)
        self._event(f"{player.name} plays {card.label()}")

        effect = resolve(card, state.num_players)
        if effect != NO_EFFECT:
            self._event(f"{card.label()}: {describe(effect)}")
        if effect.reverse_direction:
            state.reverse()
        if not card.is_wild:
            state.active_color = card.color
        elif player.hand:
            state.active_color = self._ask_color(player_index)
        self._check_uno(player_index)

        origin = player_index
        if effect.draw_count_for_next:
            origin = self._resolve_forced_draw(player_index, card.kind, effect.draw_count_for_next)
        if not self.players[origin].hand:
            self._finish_round(origin)
            return
        state.current_player_index = state.next_index(origin, effect.skip_count + 1)

    def _resolve_forced_draw(self, origin: int, pending_kind: Kind, amount: int) -> int:
        """Hand out a forced draw, letting targets stack when allowed.

        Returns the seat of the last player who added to the pending draw.
        """

        state = self.state
        pending = amount
        while True:
            target = state.next_index(origin)
            target_player = self.players[target]
            if (
                self.config.allow_stacking
                and self.players[origin].hand
                and any(rules.can_stack(card, pending_kind) for card in target_player.hand)
            ):
                choice = self.providers[target].choose_stack(self.view_for(target), pending)
                stacked = self._stack(target, choice, pending_kind) if choice is not None else None
                if stacked is not None:
                    pending += resolve(stacked, state.num_players).draw_count_for_next
                    self._event(f"{target_player.name} stacks, pending draw is {pending}")
                    origin = target
                    continue
            self._draw_into(target, pending)
            self._event(f"{target_player.name} draws {pending} and is skipped")
            return origin

    def _stack(self, player_index: int, hand_index: int, pending_kind: Kind) -> Card | None:
        player = self.players[player_index]
        if not 0 <= hand_index < len(player.hand) or not rules.can_stack(
            player.hand[hand_index], pending_kind
        ):
            logger.warning("%s offered an invalid stack at position %d", player.name, hand_index)
            return None
        card = player.hand.pop(hand_index)
        self.deck.discard(card)
        if not card.is_wild:
            self.state.active_color = card.color
        elif player.hand:
            self.state.active_color = self._ask_color(player_index)
        self._check_uno(player_index)
        return card

    # Drivers -------------------------------------------------------------

    def play_round(self) -> RoundSummary:
        """Play turns until the current round is over."""

        if self.state.phase in (GamePhase.SETUP, GamePhase.ROUND_END):
            self.start_round()
        while self.state.phase is GamePhase.ROUND_IN_PROGRESS:
            self.play_turn()
        assert self.last_round is not None
        return self.last_round

    def play_game(self) -> Player:
        """Play rounds until a player reaches the winning score."""

        if self.state.phase is GamePhase.GAME_END:
            raise RuntimeError("game already finished; call new_game() first")
        while self.state.phase is not GamePhase.GAME_END:
            self.play_round()
        return self.game_winner()
