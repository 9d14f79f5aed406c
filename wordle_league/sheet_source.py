"""Read the published results sheet from disk or over HTTP."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable

import requests


class SheetDownloadError(RuntimeError):
    pass


def load_sheet_text(source: str, *, timeout: int = 30) -> str:
    """Return CSV text from a local file or a published sheet URL."""

    if not source.startswith(("http://", "https://")):
        path = Path(source)
        try:
            return path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise SheetDownloadError(f"Could not read sheet file {path}: {exc}") from exc

    try:
        response = requests.get(source, timeout=timeout, headers={"Cache-Control": "no-store"})
        response.raise_for_status()
    except requests.RequestException as exc:
        raise SheetDownloadError(
            f"Could not load sheet from {source}. Check Publish to web + CSV link. ({exc})"
        ) from exc
    return response.text


def csv_to_rows(text: str) -> list[list[str]]:
    if not text.strip():
        return []
    reader = csv.reader(io.StringIO(text.strip()))
    return [row for row in reader]


def body_rows(rows: Iterable[list[str]]) -> list[list[str]]:
    """Drop the header row. Short rows are filtered during ingestion."""

    iterator = iter(rows)
    next(iterator, None)
    return list(iterator)
