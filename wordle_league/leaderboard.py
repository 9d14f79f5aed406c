"""Per-player leaderboard aggregation and ranking."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Literal, Union

from wordle_league.records import MAX_GUESSES, AttemptRecord

FAIL_GUESS_VALUE = 7
WORST_FAIL: Literal["fail"] = "fail"

Worst = Union[int, Literal["fail"], None]


def _empty_histogram() -> dict[int, int]:
    return {guesses: 0 for guesses in range(1, MAX_GUESSES + 1)}


@dataclass
class _Totals:
    games: int = 0
    wins: int = 0
    fails: int = 0
    win_guess_sum: int = 0
    best: int | None = None
    worst_win: int | None = None
    guess_counts: dict[int, int] = field(default_factory=_empty_histogram)

    def add_attempt(self, record: AttemptRecord) -> None:
        self.games += 1
        if record.failed:
            self.fails += 1
            return
        self.wins += 1
        self.win_guess_sum += record.guesses
        self.guess_counts[record.guesses] += 1
        if self.best is None or record.guesses < self.best:
            self.best = record.guesses
        if self.worst_win is None or record.guesses > self.worst_win:
            self.worst_win = record.guesses


@dataclass(frozen=True)
class LeaderboardRow:
    player: str
    games: int
    wins: int
    fails: int
    total_guesses: int
    average: float
    average_with_fails: float
    best: int | None
    worst: Worst
    guess_counts: dict[int, int]

    @property
    def twos(self) -> int:
        return self.guess_counts.get(2, 0)

    @property
    def threes(self) -> int:
        return self.guess_counts.get(3, 0)

    def serialise(self) -> dict:
        return {
            "player": self.player,
            "games": self.games,
            "wins": self.wins,
            "fails": self.fails,
            "totalGuesses": self.total_guesses,
            "avg": round(self.average, 2),
            "avgWithFails": round(self.average_with_fails, 2),
            "best": self.best,
            "worst": self.worst,
            "guessCounts": {str(guesses): count for guesses, count in self.guess_counts.items()},
        }


def _build_row(player: str, totals: _Totals) -> LeaderboardRow:
    average = totals.win_guess_sum / totals.wins if totals.wins else 0.0
    with_fails = (
        (totals.win_guess_sum + totals.fails * FAIL_GUESS_VALUE) / totals.games
        if totals.games
        else 0.0
    )
    worst: Worst = WORST_FAIL if totals.fails else totals.worst_win
    return LeaderboardRow(
        player=player,
        games=totals.games,
        wins=totals.wins,
        fails=totals.fails,
        total_guesses=totals.win_guess_sum + totals.fails * FAIL_GUESS_VALUE,
        average=average,
        average_with_fails=with_fails,
        best=totals.best,
        worst=worst,
        guess_counts=dict(totals.guess_counts),
    )


def ranking_key(row: LeaderboardRow) -> tuple[float, int, float]:
    """Fail-inclusive average, then fewer fails, then lower best (missing last)."""

    best = row.best if row.best is not None else math.inf
    return row.average_with_fails, row.fails, best


def fold_leaders(
    candidates: Iterable[tuple[str, float]],
    *,
    lowest: bool = False,
) -> tuple[float | None, list[str]]:
    """Best value and every holder tied at it, in encounter order.

    A strictly better value replaces the holder set; an equal one joins it.
    """

    best: float | None = None
    leaders: list[str] = []
    for holder, value in candidates:
        if best is None or (value < best if lowest else value > best):
            best = value
            leaders = [holder]
        elif value == best:
            leaders.append(holder)
    return best, leaders


def positive_leaders(
    candidates: Iterable[tuple[str, float]],
    *,
    lowest: bool = False,
) -> tuple[float | None, list[str]]:
    best, leaders = fold_leaders(candidates, lowest=lowest)
    if best is None or best <= 0:
        return None, []
    return best, leaders


def compute_leaderboard(records: Iterable[AttemptRecord]) -> list[LeaderboardRow]:
    totals: dict[str, _Totals] = {}
    for record in records:
        bucket = totals.get(record.player)
        if bucket is None:
            bucket = totals[record.player] = _Totals()
        bucket.add_attempt(record)

    rows = [_build_row(player, bucket) for player, bucket in totals.items() if bucket.games]
    # list.sort is stable: full ties keep first-seen order.
    rows.sort(key=ranking_key)
    return rows
