"""Form and group trends for the chart views."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Sequence

from wordle_league.leaderboard import LeaderboardRow, positive_leaders
from wordle_league.league_config import DEFAULT_ROLLING_WINDOW
from wordle_league.records import AttemptRecord, chronological_key
from wordle_league.streaks import StreakState


@dataclass(frozen=True)
class TrendPoint:
    date_key: str
    guesses: int
    rolling: float

    def serialise(self) -> dict:
        return {"date": self.date_key, "guesses": self.guesses, "rolling": round(self.rolling, 2)}


def rolling_average(
    records: Iterable[AttemptRecord],
    player: str,
    window: int = DEFAULT_ROLLING_WINDOW,
) -> list[TrendPoint]:
    """Trailing mean of a player's winning guess counts.

    Point ``i`` averages the last ``min(window, i + 1)`` wins; fails are left
    out of the series entirely.
    """

    if window < 1:
        raise ValueError(f"Rolling window must be at least 1, got {window}")
    wins = sorted(
        (record for record in records if record.player == player and not record.failed),
        key=chronological_key,
    )
    points: list[TrendPoint] = []
    for index, record in enumerate(wins):
        start = max(0, index - window + 1)
        trailing = [item.guesses for item in wins[start : index + 1]]
        points.append(
            TrendPoint(
                date_key=record.date_key,
                guesses=record.guesses,
                rolling=sum(trailing) / len(trailing),
            )
        )
    return points


def daily_group_average(records: Iterable[AttemptRecord]) -> list[tuple[str, float]]:
    """Mean winning guess count per calendar day, labelled with the first key typed."""

    by_date: dict[date, list[int]] = defaultdict(list)
    date_keys: dict[date, str] = {}
    for record in records:
        if record.failed:
            continue
        by_date[record.date].append(record.guesses)
        date_keys.setdefault(record.date, record.date_key)
    return [(date_keys[day], sum(by_date[day]) / len(by_date[day])) for day in sorted(by_date)]


def league_summary(
    leaderboard: Sequence[LeaderboardRow],
    streaks: Mapping[str, StreakState],
) -> dict | None:
    if not leaderboard:
        return None
    top = leaderboard[0]
    group_average = sum(row.average_with_fails for row in leaderboard) / len(leaderboard)

    best_current, streak_leaders = positive_leaders(
        (row.player, streaks.get(row.player, StreakState()).current) for row in leaderboard
    )

    return {
        "leader": top.player,
        "leaderAverage": round(top.average_with_fails, 2),
        "groupAverage": round(group_average, 2),
        "currentStreak": best_current or 0,
        "currentStreakLeaders": streak_leaders,
    }


def active_players(roster: Sequence[str], leaderboard: Sequence[LeaderboardRow]) -> list[str]:
    """Roster members with at least one leaderboard row, in roster order."""

    ranked = {row.player for row in leaderboard}
    return [player for player in roster if player in ranked]
