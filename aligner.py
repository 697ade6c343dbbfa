"""Word-level alignment of a typed transcript against a reference passage.

The distance is Levenshtein over whole tokens: substituting, inserting or
deleting a word costs 1, an exact match costs nothing. The full
(m + 1) x (n + 1) matrix is kept so the traceback can mark which words took
part in an edit. Memory grows as m * n integer cells; a 1000-word passage
typed in full needs about a million cells. Anything above
``config.ALIGNMENT_WARN_CELLS`` is logged as a warning.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

from config import ALIGNMENT_WARN_CELLS


logger = logging.getLogger(__name__)


class AlignmentError(RuntimeError):
    """The distance matrix does not follow its own recurrence."""


@dataclass(frozen=True)
class Alignment:
    errors: int
    reference_marks: tuple[bool, ...]
    typed_marks: tuple[bool, ...]


def distance_matrix(reference: Sequence[str], typed: Sequence[str]) -> list[list[int]]:
    m, n = len(reference), len(typed)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        ref_word = reference[i - 1]
        row, prev = dp[i], dp[i - 1]
        for j in range(1, n + 1):
            if ref_word == typed[j - 1]:
                row[j] = prev[j - 1]
            else:
                row[j] = 1 + min(prev[j - 1], prev[j], row[j - 1])
    return dp


def align(reference: Sequence[str], typed: Sequence[str]) -> Alignment:
    m, n = len(reference), len(typed)
    cells = (m + 1) * (n + 1)
    if cells > ALIGNMENT_WARN_CELLS:
        logger.warning("Aligning %d x %d words allocates %d cells", m, n, cells)

    dp = distance_matrix(reference, typed)
    reference_marks = [False] * m
    typed_marks = [False] * n

    i, j = m, n
    while i > 0 and j > 0:
        cost = dp[i][j]
        if reference[i - 1] == typed[j - 1]:
            i -= 1
            j -= 1
        # Substitution wins ties so a wrong word pairs with the word it replaced.
        elif cost == dp[i - 1][j - 1] + 1:
            reference_marks[i - 1] = True
            typed_marks[j - 1] = True
            i -= 1
            j -= 1
        elif cost == dp[i - 1][j] + 1:
            reference_marks[i - 1] = True
            i -= 1
        elif cost == dp[i][j - 1] + 1:
            typed_marks[j - 1] = True
            j -= 1
        else:
            raise AlignmentError(f"cell ({i}, {j}) = {cost} matches no neighbour")

    # Whatever is left on one axis has no partner on the other.
    while i > 0:
        reference_marks[i - 1] = True
        i -= 1
    while j > 0:
        typed_marks[j - 1] = True
        j -= 1

    logger.debug("Aligned %d reference / %d typed words: %d errors", m, n, dp[m][n])
    return Alignment(
        errors=dp[m][n],
        reference_marks=tuple(reference_marks),
        typed_marks=tuple(typed_marks),
    )
