from __future__ import annotations

from dataclasses import dataclass

from aligner import Alignment, align
from config import MIN_ELAPSED_MINUTES


@dataclass(frozen=True)
class TypingScore:
    reference_words: tuple[str, ...]
    typed_words: tuple[str, ...]
    alignment: Alignment
    elapsed_minutes: float
    gross_wpm: float
    net_wpm: float
    accuracy: float

    @property
    def errors(self) -> int:
        return self.alignment.errors

    @property
    def typed_count(self) -> int:
        return len(self.typed_words)


def tokenize(text: str) -> list[str]:
    return text.split()


def compute_scores(typed_count: int, errors: int, elapsed_minutes: float) -> dict:
    minutes = max(elapsed_minutes, MIN_ELAPSED_MINUTES)
    correct = typed_count - errors
    accuracy = (correct / typed_count * 100.0) if typed_count > 0 else 0.0

    return {
        "gross_wpm": round(typed_count / minutes, 2),
        "net_wpm": round(correct / minutes, 2),
        "accuracy": round(accuracy, 2),
    }


def score_test(reference_text: str, typed_text: str, elapsed_minutes: float) -> TypingScore:
    reference_words = tokenize(reference_text)
    typed_words = tokenize(typed_text)
    alignment = align(reference_words, typed_words)
    scores = compute_scores(len(typed_words), alignment.errors, elapsed_minutes)

    return TypingScore(
        reference_words=tuple(reference_words),
        typed_words=tuple(typed_words),
        alignment=alignment,
        elapsed_minutes=max(elapsed_minutes, MIN_ELAPSED_MINUTES),
        **scores,
    )
