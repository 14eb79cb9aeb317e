"""Smith-Waterman local alignment scoring for query/name pairs."""

from __future__ import annotations

MATCH_SCORE: int = 2
MISMATCH_PENALTY: int = -1
GAP_PENALTY: int = -2

EXACT_MATCH_BOOST: int = 10000
PREFIX_MATCH_BOOST: int = 5000


def alignment_score(query: str, candidate: str) -> int:
    """Return the best local alignment score between ``query`` and ``candidate``.

    The first row and column of the table stay at zero, so unmatched leading
    characters cost nothing. Every cell is floored at zero and the result is
    the largest cell anywhere in the table.

    Only two rows are kept in memory; the values are identical to the full
    table.
    """
    if not query or not candidate:
        return 0

    width = len(candidate) + 1
    previous = [0] * width
    best = 0
    for q_char in query:
        current = [0] * width
        for j in range(1, width):
            if q_char == candidate[j - 1]:
                diag = previous[j - 1] + MATCH_SCORE
            else:
                diag = previous[j - 1] + MISMATCH_PENALTY
            up = previous[j] + GAP_PENALTY
            left = current[j - 1] + GAP_PENALTY
            cell = max(0, diag, up, left)
            current[j] = cell
            if cell > best:
                best = cell
        previous = current
    return best


def fuzzy_score(query: str, candidate: str) -> int:
    """Alignment score plus the exact/prefix boosts.

    Callers are expected to case-fold both arguments beforehand when the
    search is case-insensitive.
    """
    if not query or not candidate:
        return 0

    score = alignment_score(query, candidate)
    if query == candidate:
        score += EXACT_MATCH_BOOST
    elif candidate.startswith(query):
        score += PREFIX_MATCH_BOOST
    return score
