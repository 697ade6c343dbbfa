from __future__ import annotations

from typing import Sequence

from rich.text import Text

from config import PREVIEW_WORDS


REFERENCE_ERROR_STYLE = "black on yellow"
TYPED_ERROR_STYLE = "underline red"


def highlight_words(words: Sequence[str], marks: Sequence[bool], error_style: str) -> Text:
    """Join ``words`` with spaces, styling each marked word with ``error_style``."""
    text = Text()
    for index, (word, marked) in enumerate(zip(words, marks)):
        if index:
            text.append(" ")
        text.append(word, style=error_style if marked else None)
    return text


def highlight_reference(words: Sequence[str], marks: Sequence[bool]) -> Text:
    return highlight_words(words, marks, REFERENCE_ERROR_STYLE)


def highlight_typed(words: Sequence[str], marks: Sequence[bool]) -> Text:
    return highlight_words(words, marks, TYPED_ERROR_STYLE)


def preview(text: str, words: int = PREVIEW_WORDS) -> str:
    tokens = text.split()
    head = " ".join(tokens[:words])
    return f"{head}..." if len(tokens) > words else head
