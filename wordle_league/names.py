"""Map the free-text player names typed into the sheet to roster identities."""

from __future__ import annotations

import re
from typing import Collection, Mapping

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_name(value: str | None) -> str:
    if value is None:
        return ""
    return _WHITESPACE_RE.sub(" ", str(value).strip()).casefold()


class NameResolver:
    """Resolve raw names through an alias table.

    Lookup order is exact key, then normalized key (first match in table
    order), then the trimmed input unchanged. Nothing is raised for unknown
    names; :meth:`canonical` is where roster membership is enforced.
    """

    def __init__(self, aliases: Mapping[str, str]) -> None:
        self._aliases = dict(aliases)
        self._normalized: list[tuple[str, str]] = [
            (normalize_name(key), target) for key, target in self._aliases.items()
        ]

    def resolve(self, raw: str | None) -> str:
        text = (raw or "").strip()
        if text in self._aliases:
            return self._aliases[text]
        normalized = normalize_name(text)
        for key, target in self._normalized:
            if key == normalized:
                return target
        return text

    def canonical(self, raw: str | None, roster: Collection[str]) -> str | None:
        resolved = self.resolve(raw)
        if not resolved or resolved not in roster:
            return None
        return resolved
