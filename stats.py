from __future__ import annotations

from dataclasses import dataclass, asdict
import datetime as dt
from pathlib import Path
from typing import Any

from config import HISTORY_FILE
from metrics import TypingScore
from storage import JsonListStore


@dataclass(frozen=True)
class HistoryRecord:
    passage: str
    typed: str
    gross_wpm: float
    net_wpm: float
    accuracy: float
    errors: int
    elapsed_minutes: float
    date: str

    @classmethod
    def from_score(cls, passage: str, typed: str, score: TypingScore) -> HistoryRecord:
        return cls(
            passage=passage,
            typed=typed,
            gross_wpm=score.gross_wpm,
            net_wpm=score.net_wpm,
            accuracy=score.accuracy,
            errors=score.errors,
            elapsed_minutes=round(score.elapsed_minutes, 4),
            date=dt.datetime.now(dt.timezone.utc).isoformat(),
        )


class HistoryStore(JsonListStore[HistoryRecord]):
    """Append-only log of finished tests, oldest first."""

    key = "history"

    def __init__(self, path: Path = HISTORY_FILE) -> None:
        super().__init__(path)

    def _encode(self, item: HistoryRecord) -> dict[str, Any]:
        return asdict(item)

    def _decode(self, raw: Any) -> HistoryRecord:
        if not isinstance(raw, dict):
            raise TypeError(f"expected a record object, got {type(raw).__name__}")
        # Older or partial records fill in blanks instead of failing the whole log.
        return HistoryRecord(
            passage=str(raw.get("passage", "")),
            typed=str(raw.get("typed", "")),
            gross_wpm=float(raw.get("gross_wpm", 0.0)),
            net_wpm=float(raw.get("net_wpm", 0.0)),
            accuracy=float(raw.get("accuracy", 0.0)),
            errors=int(raw.get("errors", 0)),
            elapsed_minutes=float(raw.get("elapsed_minutes", 0.0)),
            date=str(raw.get("date", "")),
        )


def summarize(records: list[HistoryRecord]) -> dict[str, int | float]:
    total = len(records)
    return {
        "total": total,
        "avg_net_wpm": sum(r.net_wpm for r in records) / total if total else 0.0,
        "avg_accuracy": sum(r.accuracy for r in records) / total if total else 0.0,
    }


_TIME_UNITS = (
    ("minute", 60, 3600),
    ("hour", 3600, 86400),
    ("day", 86400, 86400 * 30),
    ("month", 86400 * 30, 86400 * 365),
)


def humanize_timestamp(iso_ts: str, now: dt.datetime | None = None) -> str:
    if not iso_ts:
        return "Unknown time"
    try:
        parsed = dt.datetime.fromisoformat(iso_ts)
    except ValueError:
        return iso_ts
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    now = now or dt.datetime.now(dt.timezone.utc)
    seconds = max((now - parsed).total_seconds(), 0.0)

    if seconds < 60:
        return "just now"
    for unit, size, upper in _TIME_UNITS:
        if seconds < upper:
            count = int(seconds // size)
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    years = int(seconds // (86400 * 365))
    return f"{years} year{'s' if years != 1 else ''} ago"
