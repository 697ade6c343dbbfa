from __future__ import annotations

import logging
import math
import time
from typing import Callable

from config import MIN_ELAPSED_MINUTES
from metrics import TypingScore, score_test


logger = logging.getLogger(__name__)


class NoTestAvailable(ValueError):
    """There is no passage or no time limit to run a test with."""


class TypingSession:
    """One timed attempt at a passage, from start to submit."""

    def __init__(
        self,
        passage: str,
        duration_minutes: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        passage = (passage or "").strip()
        if not passage:
            raise NoTestAvailable("No passage to type")
        if not duration_minutes or duration_minutes <= 0:
            raise NoTestAvailable("Time limit must be a positive number of minutes")

        self.passage = passage
        self.duration_minutes = duration_minutes
        self._clock = clock
        self._started_at: float | None = None
        self._submitted_at: float | None = None
        self.score: TypingScore | None = None

    @property
    def started(self) -> bool:
        return self._started_at is not None

    @property
    def submitted(self) -> bool:
        return self._submitted_at is not None

    def start(self) -> None:
        self._started_at = self._clock()
        self._submitted_at = None
        self.score = None
        logger.info("Session started: %d min, %d chars", self.duration_minutes, len(self.passage))

    def elapsed_seconds(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._submitted_at if self._submitted_at is not None else self._clock()
        return max(end - self._started_at, 0.0)

    def remaining_seconds(self) -> int:
        remaining = self.duration_minutes * 60 - self.elapsed_seconds()
        return max(math.ceil(remaining), 0)

    def is_expired(self) -> bool:
        return self.started and self.elapsed_seconds() >= self.duration_minutes * 60

    def submit(self, typed_text: str) -> TypingScore:
        """Stop the clock and score the typed text. Later calls return the same score."""
        if self._started_at is None:
            raise NoTestAvailable("Session was never started")
        if self.score is not None:
            return self.score

        self._submitted_at = self._clock()
        elapsed_minutes = max(self.elapsed_seconds() / 60.0, MIN_ELAPSED_MINUTES)
        self.score = score_test(self.passage, typed_text or "", elapsed_minutes)
        logger.info(
            "Session submitted after %.2f min: %d words, %d errors",
            elapsed_minutes,
            self.score.typed_count,
            self.score.errors,
        )
        return self.score


def format_countdown(seconds: int) -> str:
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"Time: {minutes:02d}:{secs:02d}"
