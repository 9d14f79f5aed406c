#!/usr/bin/env python3
"""Build the league JSON snapshot consumed by the static front end.

Reads the published results sheet (a local CSV or the ``SHEET_CSV_URL``
link), recomputes every view from scratch and writes one JSON payload with
the full-history leaderboard, streaks, weekly and monthly breakdowns, the
hall of fame and per-player form trends.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence

from wordle_league.hall_of_fame import compute_hall_of_fame
from wordle_league.leaderboard import compute_leaderboard
from wordle_league.league_config import (
    APP_VERSION,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_ROLLING_WINDOW,
    LeagueConfigError,
    load_league_config,
)
from wordle_league.periods import build_period_views, iso_week_key, month_key
from wordle_league.records import AttemptRecord, load_records
from wordle_league.sheet_source import SheetDownloadError, body_rows, csv_to_rows, load_sheet_text
from wordle_league.streaks import compute_streaks
from wordle_league.trends import active_players, daily_group_average, league_summary, rolling_average


class EmptyLeagueError(RuntimeError):
    """Raised when the sheet yields no usable attempts."""


def _timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


def _write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)
        handle.write("\n")


def build_snapshot(
    records: Sequence[AttemptRecord],
    roster: Sequence[str],
    *,
    window: int = DEFAULT_ROLLING_WINDOW,
) -> dict:
    if not records:
        raise EmptyLeagueError("No data found yet.")

    leaderboard = compute_leaderboard(records)
    streaks = compute_streaks(records)
    hall_of_fame = compute_hall_of_fame(records, leaderboard)
    players = active_players(roster, leaderboard)

    return {
        "generatedAt": _timestamp(),
        "version": APP_VERSION,
        "rollingWindow": window,
        "leaderboard": [row.serialise() for row in leaderboard],
        "streaks": {player: state.serialise() for player, state in streaks.items()},
        "summary": league_summary(leaderboard, streaks),
        "players": players,
        "groupAverage": [
            {"date": date_key, "average": round(average, 2)}
            for date_key, average in daily_group_average(records)
        ],
        "trends": {
            player: [point.serialise() for point in rolling_average(records, player, window)]
            for player in players
        },
        "weekly": [view.serialise() for view in build_period_views(records, iso_week_key)],
        "monthly": [view.serialise() for view in build_period_views(records, month_key)],
        "hallOfFame": [entry.serialise() for entry in hall_of_fame.values()],
    }


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--source",
        help="CSV path or published sheet URL (default: $SHEET_CSV_URL)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="League JSON with roster and aliases (default: $WORDLE_LEAGUE_CONFIG or league.json)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help="Where to write the snapshot (default: %(default)s)",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=DEFAULT_ROLLING_WINDOW,
        help="Rolling-average window for player form (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    if args.window < 1:
        raise SystemExit("--window must be at least 1")
    try:
        config = load_league_config(args.config)
    except LeagueConfigError as exc:
        raise SystemExit(str(exc)) from exc

    source = args.source or config.sheet_url
    if not source:
        print("Missing SHEET_CSV_URL (or --source).", file=sys.stderr)
        return 1

    print(f"Fetching data from {source}...", file=sys.stderr)
    try:
        text = load_sheet_text(source)
    except SheetDownloadError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    records = load_records(body_rows(csv_to_rows(text)), config)
    try:
        payload = build_snapshot(records, config.roster, window=args.window)
    except EmptyLeagueError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    _write_json(args.output, payload)
    print(f"Wrote {len(payload['leaderboard'])} players to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
