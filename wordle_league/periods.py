"""Weekly and monthly partitions, each with its own leaderboard and awards."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Sequence

from wordle_league.leaderboard import LeaderboardRow, compute_leaderboard, positive_leaders
from wordle_league.records import AttemptRecord
from wordle_league.streaks import StreakState, compute_streaks

PeriodKeyFn = Callable[[date], str]


def iso_week_key(value: date) -> str:
    iso_year, iso_week, _ = value.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def month_key(value: date) -> str:
    return f"{value.year}-{value.month:02d}"


@dataclass(frozen=True)
class Partition:
    keys: list[str]
    by_key: dict[str, list[AttemptRecord]]


def partition(records: Iterable[AttemptRecord], key_fn: PeriodKeyFn) -> Partition:
    by_key: dict[str, list[AttemptRecord]] = defaultdict(list)
    for record in records:
        by_key[key_fn(record.date)].append(record)
    return Partition(keys=sorted(by_key), by_key=dict(by_key))


@dataclass(frozen=True)
class Award:
    key: str
    title: str
    value: float | int | None
    leaders: list[str]

    def serialise(self) -> dict:
        value = round(self.value, 2) if isinstance(self.value, float) else self.value
        return {"key": self.key, "title": self.title, "value": value, "leaders": list(self.leaders)}


def period_awards(
    leaderboard: Sequence[LeaderboardRow],
    streaks: dict[str, StreakState],
) -> list[Award]:
    king = leaderboard[0] if leaderboard else None
    snipe_best, snipers = positive_leaders((row.player, row.twos + row.threes) for row in leaderboard)
    fail_best, bricks = positive_leaders((row.player, row.fails) for row in leaderboard)
    streak_best, streak_leaders = positive_leaders(
        (row.player, streaks.get(row.player, StreakState()).longest) for row in leaderboard
    )

    return [
        Award(
            "king",
            "Wordle King",
            king.average_with_fails if king else None,
            [king.player] if king else [],
        ),
        Award("sniper", "Sniper", snipe_best, snipers),
        Award("brick_wall", "Brick Wall", fail_best, bricks),
        Award("streak_lord", "Streak Lord", streak_best, streak_leaders),
    ]


@dataclass(frozen=True)
class PeriodView:
    key: str
    leaderboard: list[LeaderboardRow]
    streaks: dict[str, StreakState]
    awards: list[Award]

    def serialise(self) -> dict:
        return {
            "key": self.key,
            "leaderboard": [row.serialise() for row in self.leaderboard],
            "streaks": {player: state.serialise() for player, state in self.streaks.items()},
            "awards": [award.serialise() for award in self.awards],
        }


def build_period_views(records: Iterable[AttemptRecord], key_fn: PeriodKeyFn) -> list[PeriodView]:
    """Aggregate every period independently of the others."""

    parts = partition(records, key_fn)
    views: list[PeriodView] = []
    for key in parts.keys:
        period_records = parts.by_key[key]
        leaderboard = compute_leaderboard(period_records)
        streaks = compute_streaks(period_records)
        views.append(
            PeriodView(
                key=key,
                leaderboard=leaderboard,
                streaks=streaks,
                awards=period_awards(leaderboard, streaks),
            )
        )
    return views
