"""All-time superlatives over the full record history.

Every record keeps the complete set of tied holders. Candidates are folded in
encounter order: a strictly better value replaces the set, an equal value
joins it.
"""

from __future__ import annotations

import math
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable, Sequence

from wordle_league.leaderboard import (
    LeaderboardRow,
    compute_leaderboard,
    fold_leaders,
    positive_leaders,
)
from wordle_league.records import AttemptRecord
from wordle_league.streaks import compute_streaks

CONSISTENCY_MIN_WINS = 5


@dataclass(frozen=True)
class HallOfFameRecord:
    key: str
    title: str
    value: float | int | None
    leaders: list[str]
    count: int | None = None

    def serialise(self) -> dict:
        value = round(self.value, 2) if isinstance(self.value, float) else self.value
        return {
            "key": self.key,
            "title": self.title,
            "value": value,
            "leaders": list(self.leaders),
            "count": self.count,
        }


def _positive_record(
    key: str,
    title: str,
    candidates: Iterable[tuple[str, float]],
    *,
    lowest: bool = False,
) -> HallOfFameRecord:
    best, leaders = positive_leaders(candidates, lowest=lowest)
    return HallOfFameRecord(key, title, best, leaders)


def _best_single_solve(records: Sequence[AttemptRecord]) -> HallOfFameRecord:
    best: int | None = None
    solvers: Counter[str] = Counter()
    for record in records:
        if record.failed:
            continue
        if best is None or record.guesses < best:
            best = record.guesses
            solvers = Counter({record.player: 1})
        elif record.guesses == best:
            solvers[record.player] += 1

    frequency, leaders = fold_leaders(solvers.items())
    if best is None or not frequency:
        return HallOfFameRecord("best_solve", "Best Single Solve", None, [])
    return HallOfFameRecord("best_solve", "Best Single Solve", best, leaders, count=int(frequency))


def _population_sd(values: Sequence[int]) -> float:
    mean = sum(values) / len(values)
    return math.sqrt(sum((value - mean) ** 2 for value in values) / len(values))


def _wins_by_player(records: Sequence[AttemptRecord]) -> dict[str, list[int]]:
    wins: dict[str, list[int]] = defaultdict(list)
    for record in records:
        if not record.failed:
            wins[record.player].append(record.guesses)
    return wins


def _most_consistent(records: Sequence[AttemptRecord]) -> HallOfFameRecord:
    qualified = {
        player: guesses
        for player, guesses in _wins_by_player(records).items()
        if len(guesses) >= CONSISTENCY_MIN_WINS
    }
    best, leaders = fold_leaders(
        ((player, _population_sd(guesses)) for player, guesses in qualified.items()),
        lowest=True,
    )
    if best is None:
        return HallOfFameRecord("most_consistent", "Most Consistent", None, [])
    return HallOfFameRecord(
        "most_consistent",
        "Most Consistent",
        best,
        leaders,
        count=len(qualified[leaders[0]]),
    )


def _hardest_puzzle(records: Sequence[AttemptRecord]) -> HallOfFameRecord:
    by_puzzle: dict[int, list[int]] = defaultdict(list)
    for record in records:
        if not record.failed:
            by_puzzle[record.puzzle].append(record.guesses)
    return _positive_record(
        "hardest_puzzle",
        "Hardest Puzzle",
        ((str(puzzle), sum(guesses) / len(guesses)) for puzzle, guesses in by_puzzle.items()),
    )


def compute_hall_of_fame(
    records: Sequence[AttemptRecord],
    leaderboard: Sequence[LeaderboardRow] | None = None,
) -> dict[str, HallOfFameRecord]:
    """Build every all-time record from the full (imputed) record set."""

    if leaderboard is None:
        leaderboard = compute_leaderboard(records)
    streaks = compute_streaks(records)

    entries = [
        _positive_record(
            "king",
            "All-time King",
            ((row.player, row.average_with_fails) for row in leaderboard),
            lowest=True,
        ),
        _positive_record("most_wins", "Most Wins", ((row.player, row.wins) for row in leaderboard)),
        _best_single_solve(records),
        _positive_record("most_twos", "Most 2s", ((row.player, row.twos) for row in leaderboard)),
        _positive_record("most_threes", "Most 3s", ((row.player, row.threes) for row in leaderboard)),
        _positive_record(
            "streak_lord",
            "Streak Lord",
            ((row.player, streaks[row.player].longest) for row in leaderboard if row.player in streaks),
        ),
        _most_consistent(records),
        _hardest_puzzle(records),
        _positive_record("most_fails", "Most Fails", ((row.player, row.fails) for row in leaderboard)),
    ]
    return {entry.key: entry for entry in entries}
