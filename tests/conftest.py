from __future__ import annotations

from datetime import date, timedelta

import pytest

from wordle_league.records import AttemptRecord

BASE_DATE = date(2024, 1, 1)


def make_record(
    player: str,
    day: int,
    guesses: int,
    *,
    puzzle: int | None = None,
    synthetic: bool = False,
) -> AttemptRecord:
    """Record for ``player`` on ``BASE_DATE + day - 1``; ``guesses=0`` is a fail."""

    played = BASE_DATE + timedelta(days=day - 1)
    return AttemptRecord(
        date_key=played.strftime("%d/%m/%Y"),
        date=played,
        puzzle=puzzle if puzzle is not None else 1000 + day,
        player=player,
        guesses=guesses,
        failed=guesses == 0,
        synthetic=synthetic,
    )


@pytest.fixture
def record():
    return make_record
