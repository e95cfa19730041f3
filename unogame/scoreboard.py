"""Round results and running standings for a game of UNO."""

from __future__ import annotations

from dataclasses import dataclass, field

from .rules import PlayerRoundScore

__all__ = ["RoundSummary", "PlayerMatchTotal", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """Outcome of one round, captured after its points were folded in.

    ``game_points`` is the standings snapshot taken once every seat's round
    and penalty points were moved into its game total.
    """

    round_number: int
    winner_index: int
    scores: tuple[PlayerRoundScore, ...]
    game_points: tuple[int, ...]

    @property
    def haul(self) -> int:
        """Hand points the winner collected from the other seats."""

        return sum(score.hand_points for score in self.scores if not score.won_round)

    def standings(self) -> list[int]:
        """Seat indices ordered by game points, earliest seat first on ties."""

        return sorted(range(len(self.game_points)), key=lambda idx: (-self.game_points[idx], idx))


@dataclass(frozen=True, slots=True)
class PlayerMatchTotal:
    """Per-seat totals across every recorded round."""

    player_index: int
    wins: int
    round_points: int
    penalty_points: int
    best_haul: int
    points_left_in_hand: int
    game_points: int


@dataclass(slots=True)
class MatchHistory:
    """Ordered log of the rounds played in the current game."""

    num_players: int
    rounds: list[RoundSummary] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.num_players <= 0:
            raise ValueError("num_players must be positive")

    def record(self, summary: RoundSummary) -> None:
        """Append ``summary`` after checking it belongs to this table."""

        if len(summary.scores) != self.num_players or len(summary.game_points) != self.num_players:
            raise ValueError("round summary does not match number of players")
        if not 0 <= summary.winner_index < self.num_players:
            raise ValueError("winner index out of range")
        if [score.player_index for score in summary.scores] != list(range(self.num_players)):
            raise ValueError("round scores must be listed in seating order")
        winners = [score.player_index for score in summary.scores if score.won_round]
        if winners != [summary.winner_index]:
            raise ValueError("exactly the recorded winner must be flagged as winning the round")
        if self.rounds and summary.round_number <= self.rounds[-1].round_number:
            raise ValueError("rounds must be recorded in play order")
        self.rounds.append(summary)

    @property
    def latest(self) -> RoundSummary | None:
        return self.rounds[-1] if self.rounds else None

    def leader(self) -> int | None:
        """Seat currently ahead on game points, or ``None`` before any round."""

        latest = self.latest
        return latest.standings()[0] if latest is not None else None

    def totals(self) -> list[PlayerMatchTotal]:
        """Return the cumulative totals for each player in seating order."""

        latest = self.latest
        totals = []
        for idx in range(self.num_players):
            scores = [summary.scores[idx] for summary in self.rounds]
            hauls = [summary.haul for summary in self.rounds if summary.winner_index == idx]
            totals.append(
                PlayerMatchTotal(
                    player_index=idx,
                    wins=len(hauls),
                    round_points=sum(score.round_points for score in scores),
                    penalty_points=sum(score.penalty_points for score in scores),
                    best_haul=max(hauls, default=0),
                    points_left_in_hand=sum(score.hand_points for score in scores if not score.won_round),
                    game_points=latest.game_points[idx] if latest is not None else 0,
                )
            )
        return totals
