"""Tests for row ingestion, name resolution and missing-day imputation."""

from __future__ import annotations

from datetime import date

import pytest

from wordle_league import records
from wordle_league.league_config import DEFAULT_NAME_MAP, DEFAULT_ROSTER, LeagueConfig
from wordle_league.names import NameResolver, normalize_name

ROSTER = ("A", "B", "C")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("01/02/2024", date(2024, 2, 1)),
        ("1/2/24", date(2024, 2, 1)),
        (" 31 / 12 / 23 ", date(2023, 12, 31)),
        ("2024-02-01", None),
        ("1/2", None),
        ("aa/02/2024", None),
        ("31/02/2024", None),
        ("1_0/0_2/2_024", None),
        ("+1/02/2024", None),
        ("-1/02/2024", None),
        ("１/02/2024", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_date_dmy(raw: str | None, expected: date | None) -> None:
    """Day/month/year strings parse; anything else is rejected with ``None``."""

    assert records.parse_date_dmy(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("3", 3), (" 4.0 ", 4), ("", 0), (None, 0), ("x", 0), ("inf", 0)],
)
def test_to_int_defaults_to_zero(raw: str | None, expected: int) -> None:
    assert records._to_int(raw) == expected


def test_normalize_name_collapses_whitespace_and_case() -> None:
    assert normalize_name("  Lliam   McKINNON ") == "lliam mckinnon"
    assert normalize_name(None) == ""


def test_resolver_prefers_exact_then_normalized_alias() -> None:
    resolver = NameResolver(DEFAULT_NAME_MAP)

    assert resolver.resolve("Danny Denmark") == "Danny"
    assert resolver.resolve("  danny   DENMARK ") == "Danny"
    assert resolver.resolve("lliam mckinnon") == "Lliam"
    assert resolver.resolve(" Stranger ") == "Stranger"


def test_resolver_canonical_enforces_roster() -> None:
    resolver = NameResolver(DEFAULT_NAME_MAP)

    assert resolver.canonical("Dave White", DEFAULT_ROSTER) == "Dave"
    assert resolver.canonical("Danny", DEFAULT_ROSTER) == "Danny"
    assert resolver.canonical("Stranger", DEFAULT_ROSTER) is None
    assert resolver.canonical("   ", DEFAULT_ROSTER) is None


def test_parse_row_detects_fail_from_label_or_zero() -> None:
    resolver = NameResolver({})

    by_label = records.parse_row(["1/1/24", "900", "A", "4", "FAIL"], resolver, ROSTER)
    by_zero = records.parse_row(["1/1/24", "900", "A", "0", ""], resolver, ROSTER)
    win = records.parse_row(["1/1/24", "900", "A", "4", "win"], resolver, ROSTER)

    assert by_label is not None and by_label.failed and by_label.guesses == 0
    assert by_zero is not None and by_zero.failed
    assert win is not None and not win.failed and win.guesses == 4
    assert win.puzzle == 900 and win.date == date(2024, 1, 1) and win.date_key == "1/1/24"


@pytest.mark.parametrize(
    "row",
    [
        ["1/1/24", "900", "A", "3"],
        ["not a date", "900", "A", "3", ""],
        ["1/1/24", "900", "Nobody", "3", ""],
        ["1/1/24", "900", "A", "9", ""],
    ],
)
def test_parse_row_drops_malformed_rows(row: list[str]) -> None:
    assert records.parse_row(row, NameResolver({}), ROSTER) is None


def test_ingest_rows_sorts_by_date_puzzle_player() -> None:
    rows = [
        ["2/1/24", "901", "B", "3", ""],
        ["1/1/24", "900", "C", "2", ""],
        ["1/1/24", "900", "A", "5", ""],
        ["junk"],
        ["2/1/24", "901", "A", "4", ""],
    ]
    result = records.ingest_rows(rows, NameResolver({}), ROSTER)

    assert [(r.date_key, r.player) for r in result] == [
        ("1/1/24", "A"),
        ("1/1/24", "C"),
        ("2/1/24", "A"),
        ("2/1/24", "B"),
    ]


def test_impute_adds_one_fail_per_absent_roster_member() -> None:
    """C is missing on the only played date and gets exactly one synthetic fail."""

    rows = [["1/1/24", "900", "A", "3", ""], ["1/1/24", "900", "B", "4", ""]]
    real = records.ingest_rows(rows, NameResolver({}), ROSTER)
    result = records.impute_missing_days(real, ROSTER)

    synthetic = [r for r in result if r.synthetic]
    assert len(synthetic) == 1
    filler = synthetic[0]
    assert filler.player == "C"
    assert filler.failed and filler.guesses == 0 and filler.puzzle == 0
    assert filler.date_key == "1/1/24" and filler.date == date(2024, 1, 1)
    assert len(real) == 2


def test_impute_never_invents_dates() -> None:
    rows = [["1/1/24", "900", "A", "3", ""], ["3/1/24", "902", "A", "3", ""]]
    real = records.ingest_rows(rows, NameResolver({}), ROSTER)
    result = records.impute_missing_days(real, ROSTER)

    assert {r.date_key for r in result} == {"1/1/24", "3/1/24"}
    assert len(result) == 6
    assert records.impute_missing_days([], ROSTER) == []


def test_impute_matches_days_across_date_formats() -> None:
    """Short and long spellings of a date are one day, so nobody present gets a filler."""

    rows = [["1/1/24", "900", "A", "3", ""], ["01/01/2024", "900", "B", "4", ""]]
    real = records.ingest_rows(rows, NameResolver({}), ("A", "B"))

    result = records.impute_missing_days(real, ("A", "B"))

    assert [r for r in result if r.synthetic] == []

    with_absentee = records.impute_missing_days(real, ROSTER)
    (filler,) = [r for r in with_absentee if r.synthetic]
    assert filler.player == "C" and filler.date_key == "1/1/24"


def test_load_records_applies_aliases_and_imputation() -> None:
    config = LeagueConfig(roster=("Danny", "Dave"), aliases={"Dave White": "Dave"})
    rows = [["1/1/24", "900", "dave  white", "3", ""], ["1/1/24", "900", "Eve", "2", ""]]

    result = records.load_records(rows, config)

    assert sorted((r.player, r.failed) for r in result) == [("Danny", True), ("Dave", False)]
