"""
Shodh Core Module

Scoring and ranking for fuzzy path search.

This module implements the search pipeline core:
- Smith-Waterman local alignment with exact/prefix boosts
- Per-candidate type filtering, case folding and scoring
- Bounded top-K ranking with a deterministic tie-break
- Sequential or parallel scoring over a shared read-only query

The pipeline entry point lives in ``shodh_core.pipeline``.
"""

__version__ = "0.1.0"

from .alignment import alignment_score, fuzzy_score
from .ranking import compare_scored, rank
from .schemas import (
    Candidate,
    CaseSensitivity,
    Query,
    RankedResult,
    ScoredCandidate,
    SearchConfig,
    TypeFilter,
)
from .scoring import evaluate

__all__ = [
    "Candidate",
    "CaseSensitivity",
    "Query",
    "RankedResult",
    "ScoredCandidate",
    "SearchConfig",
    "TypeFilter",
    "alignment_score",
    "compare_scored",
    "evaluate",
    "fuzzy_score",
    "rank",
]
