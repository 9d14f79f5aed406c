"""Typed attempt records: row parsing and the missing-day fail imputation."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from wordle_league.league_config import LeagueConfig
from wordle_league.names import NameResolver

MIN_ROW_FIELDS = 5
MAX_GUESSES = 6
FAIL_LABEL = "fail"


@dataclass(frozen=True)
class AttemptRecord:
    date_key: str
    date: date
    puzzle: int
    player: str
    guesses: int
    failed: bool
    synthetic: bool = False


def parse_date_dmy(value: str | None) -> date | None:
    """Parse ``dd/mm/yy`` or ``dd/mm/yyyy``; two-digit years land in 2000+."""

    if not value:
        return None
    parts = [part.strip() for part in value.strip().split("/")]
    if len(parts) != 3:
        return None
    if not all(part.isascii() and part.isdigit() for part in parts):
        return None
    day, month, year = (int(part) for part in parts)
    if year < 100:
        year += 2000
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _to_int(value: str | None) -> int:
    if value is None:
        return 0
    value = value.strip()
    if not value:
        return 0
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return 0


def chronological_key(record: AttemptRecord) -> tuple[date, int]:
    return record.date, record.puzzle


def _canonical_order(record: AttemptRecord) -> tuple[date, int, str]:
    return record.date, record.puzzle, record.player


def parse_row(
    row: Sequence[str],
    resolver: NameResolver,
    roster: Sequence[str],
) -> AttemptRecord | None:
    """Turn one sheet row into a record, or ``None`` when it must be dropped."""

    if len(row) < MIN_ROW_FIELDS:
        return None
    date_key = (row[0] or "").strip()
    parsed = parse_date_dmy(date_key)
    if parsed is None:
        return None
    player = resolver.canonical(row[2], roster)
    if player is None:
        return None

    guesses = _to_int(row[3])
    result = (row[4] or "").strip().lower()
    failed = result == FAIL_LABEL or guesses == 0
    if failed:
        guesses = 0
    elif not 1 <= guesses <= MAX_GUESSES:
        return None

    return AttemptRecord(
        date_key=date_key,
        date=parsed,
        puzzle=_to_int(row[1]),
        player=player,
        guesses=guesses,
        failed=failed,
    )


def ingest_rows(
    rows: Iterable[Sequence[str]],
    resolver: NameResolver,
    roster: Sequence[str],
) -> list[AttemptRecord]:
    records: list[AttemptRecord] = []
    for row in rows:
        record = parse_row(row, resolver, roster)
        if record is not None:
            records.append(record)
    records.sort(key=_canonical_order)
    return records


def impute_missing_days(
    records: Sequence[AttemptRecord],
    roster: Sequence[str],
) -> list[AttemptRecord]:
    """Add a synthetic fail for every roster member missing from a played date.

    Only calendar days that already carry at least one record are considered,
    so no dates are invented. Days are matched on the parsed date, so "1/1/24"
    and "01/01/2024" are the same day; a filler reuses the first key typed for
    it. The input sequence is left untouched.
    """

    players_by_date: dict[date, set[str]] = defaultdict(set)
    date_keys: dict[date, str] = {}
    for record in records:
        players_by_date[record.date].add(record.player)
        date_keys.setdefault(record.date, record.date_key)

    synthetic: list[AttemptRecord] = []
    for played, present in players_by_date.items():
        for player in roster:
            if player in present:
                continue
            synthetic.append(
                AttemptRecord(
                    date_key=date_keys[played],
                    date=played,
                    puzzle=0,
                    player=player,
                    guesses=0,
                    failed=True,
                    synthetic=True,
                )
            )
    return [*records, *synthetic]


def load_records(rows: Iterable[Sequence[str]], config: LeagueConfig) -> list[AttemptRecord]:
    """Ingest sheet body rows and run the missing-day imputation once."""

    resolver = NameResolver(config.aliases)
    records = ingest_rows(rows, resolver, config.roster)
    return impute_missing_days(records, config.roster)
