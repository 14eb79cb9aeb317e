from __future__ import annotations

import heapq
from collections.abc import Iterable
from functools import cmp_to_key
from pathlib import PurePath

from .schemas import RankedResult, ScoredCandidate


def _path_key(scored: ScoredCandidate) -> tuple[str, ...]:
    return PurePath(scored.path).parts


def compare_scored(left: ScoredCandidate, right: ScoredCandidate) -> int:
    """Order by score descending, then by path ascending, then files before directories.

    Paths compare component by component, so ``a/b`` sorts before ``a-b``.
    Returns a negative number when ``left`` ranks ahead of ``right``.
    """
    if left.score != right.score:
        return -1 if left.score > right.score else 1
    left_key = _path_key(left)
    right_key = _path_key(right)
    if left_key != right_key:
        return -1 if left_key < right_key else 1
    if left.is_dir != right.is_dir:
        return 1 if left.is_dir else -1
    return 0


_RANK_KEY = cmp_to_key(compare_scored)


def rank(scored: Iterable[ScoredCandidate], k: int) -> RankedResult:
    """Return the ``k`` best candidates in display order.

    Keeps a heap of at most ``k`` entries instead of sorting everything.
    Entries with identical score, path and type are all kept.
    """
    if k <= 0:
        return RankedResult([])
    best = heapq.nsmallest(k, scored, key=_RANK_KEY)
    return RankedResult(best)
