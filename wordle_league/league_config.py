"""League roster, name aliases and build defaults.

The roster and alias table are deployment data rather than engine logic. The
defaults below describe the founding group; a different league can ship a JSON
file shaped like::

    {
      "roster": ["Danny", "Luis"],
      "aliases": {"Danny Denmark": "Danny"}
    }

and point ``--config`` (or ``WORDLE_LEAGUE_CONFIG``) at it.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

ROOT = Path(__file__).resolve().parents[1]
PUBLIC_DATA_DIR = ROOT / "public" / "data"
DEFAULT_OUTPUT_PATH = PUBLIC_DATA_DIR / "league.json"
DEFAULT_CONFIG_PATH = ROOT / "league.json"

APP_VERSION = "v19"
DEFAULT_ROLLING_WINDOW = 5

# Spellings seen in the shared sheet. Keys are matched exactly first, then by
# their normalized form.
DEFAULT_NAME_MAP: dict[str, str] = {
    "Danny - Denmark": "Danny",
    "Danny Denmark": "Danny",
    "Luis": "Luis",
    "Lliam Mckinnon": "Lliam",
    "Lliam McKinnon": "Lliam",
    "Jamie Marshall": "Jamie",
    "Barry Barry": "Barry Barry",
    "Dave White": "Dave",
}

DEFAULT_ROSTER: tuple[str, ...] = ("Danny", "Luis", "Lliam", "Jamie", "Barry Barry", "Dave")


class LeagueConfigError(ValueError):
    pass


@dataclass(frozen=True)
class LeagueConfig:
    roster: tuple[str, ...] = DEFAULT_ROSTER
    aliases: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_NAME_MAP))
    sheet_url: str | None = None


def _clean_roster(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        raise LeagueConfigError("'roster' must be a list of player names")
    roster: list[str] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, str):
            raise LeagueConfigError(f"Roster entry {entry!r} is not a string")
        name = entry.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        roster.append(name)
    if not roster:
        raise LeagueConfigError("Roster is empty")
    return tuple(roster)


def _clean_aliases(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        raise LeagueConfigError("'aliases' must map raw names to roster names")
    aliases: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise LeagueConfigError(f"Alias {key!r} -> {value!r} must be a pair of strings")
        aliases[key] = value.strip()
    return aliases


def load_league_config(path: Path | None = None) -> LeagueConfig:
    """Read the league config, falling back to the built-in defaults.

    Only the implicit ``league.json`` next to the package may be missing. A
    file named by the caller or ``WORDLE_LEAGUE_CONFIG`` must exist, and an
    unreadable or malformed one raises :class:`LeagueConfigError`.
    """

    if path is None:
        env_path = os.environ.get("WORDLE_LEAGUE_CONFIG")
        path = Path(env_path) if env_path else None
    sheet_url = os.environ.get("SHEET_CSV_URL") or None

    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return LeagueConfig(sheet_url=sheet_url)
    elif not path.exists():
        raise LeagueConfigError(f"Config file {path} does not exist")

    try:
        with path.open(encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LeagueConfigError(f"Unable to read {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise LeagueConfigError(f"{path} must contain a JSON object")

    roster = _clean_roster(payload["roster"]) if "roster" in payload else DEFAULT_ROSTER
    aliases = _clean_aliases(payload["aliases"]) if "aliases" in payload else dict(DEFAULT_NAME_MAP)
    return LeagueConfig(
        roster=roster,
        aliases=aliases,
        sheet_url=sheet_url or payload.get("sheetUrl") or None,
    )
