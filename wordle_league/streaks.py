"""Consecutive-day win streaks.

Streaks are measured in distinct calendar days. A fail ends the run, and so
does any gap of more than one day between wins. Several records on the same
day (repeated puzzles in hand-entered data) count as one day.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from wordle_league.records import AttemptRecord, chronological_key


@dataclass(frozen=True)
class StreakState:
    current: int = 0
    longest: int = 0

    def serialise(self) -> dict[str, int]:
        return {"current": self.current, "longest": self.longest}


def _longest_streak(series: Sequence[AttemptRecord]) -> int:
    longest = 0
    running = 0
    last_day: date | None = None
    for record in series:
        if record.failed:
            running = 0
            last_day = None
            continue
        if last_day is not None:
            gap = (record.date - last_day).days
            if gap == 0:
                continue
            if gap > 1:
                running = 0
        running += 1
        last_day = record.date
        longest = max(longest, running)
    return longest


def _current_streak(series: Sequence[AttemptRecord]) -> int:
    current = 0
    last_day: date | None = None
    for record in reversed(series):
        if record.failed:
            break
        if last_day is not None:
            gap = (last_day - record.date).days
            if gap == 0:
                continue
            if gap > 1:
                break
        current += 1
        last_day = record.date
    return current


def streak_for(series: Iterable[AttemptRecord]) -> StreakState:
    ordered = sorted(series, key=chronological_key)
    return StreakState(current=_current_streak(ordered), longest=_longest_streak(ordered))


def compute_streaks(records: Iterable[AttemptRecord]) -> dict[str, StreakState]:
    by_player: dict[str, list[AttemptRecord]] = defaultdict(list)
    for record in records:
        by_player[record.player].append(record)
    return {player: streak_for(series) for player, series in by_player.items()}
