from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from functools import partial

from tqdm import tqdm

from traversal import DiagnosticsSummary, WalkDiagnostic, walk

from .parallel import parallel_map
from .ranking import rank
from .schemas import Candidate, Query, RankedResult, ScoredCandidate, SearchConfig
from .scoring import evaluate

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    results: RankedResult
    total_candidates: int
    scored_candidates: int
    diagnostics: list[WalkDiagnostic] = field(default_factory=list)
    summary: DiagnosticsSummary = field(default_factory=DiagnosticsSummary)

    @property
    def is_empty(self) -> bool:
        return len(self.results) == 0


def _progress(results: Iterable[ScoredCandidate | None], total: int, enabled: bool):
    if not enabled:
        return results
    return tqdm(
        results,
        total=total,
        desc="Scoring",
        unit="path",
        leave=False,
        ncols=80,
        bar_format="{desc}: {n_fmt}/{total_fmt} |{bar}| {elapsed}<{remaining}",
    )


def score_candidates(
    candidates: Sequence[Candidate],
    query: Query,
    *,
    parallel: bool = True,
    max_workers: int | None = None,
    parallel_threshold: int = 0,
    show_progress: bool = False,
) -> list[ScoredCandidate]:
    """Evaluate every candidate and keep the ones scoring above zero.

    All candidates are scored before this returns. Inputs shorter than
    ``parallel_threshold`` are scored inline even when ``parallel`` is set,
    since pool start-up would dominate; the resulting set is the same.
    """
    scorer = partial(evaluate, query=query)
    use_pool = parallel and len(candidates) > 0 and len(candidates) >= parallel_threshold
    if use_pool:
        logger.debug(f"Scoring {len(candidates)} candidates in parallel")
        results = parallel_map(candidates, scorer, max_workers=max_workers)
    else:
        logger.debug(f"Scoring {len(candidates)} candidates sequentially")
        results = map(scorer, candidates)

    return [
        scored
        for scored in _progress(results, len(candidates), show_progress)
        if scored is not None
    ]


def search(config: SearchConfig) -> SearchOutcome:
    """Walk ``config.root``, score every entry and keep the top ``config.num``.

    Raises:
        TraversalError: If the root itself cannot be read
    """
    walked = walk(config.root, follow_symlinks=config.follow_symlinks)
    if not walked.ok:
        logger.debug(f"Walk of {config.root} skipped {len(walked.diagnostics)} entries")
    scored = score_candidates(
        walked.candidates,
        config.to_query(),
        parallel=config.parallel,
        max_workers=config.max_workers,
        parallel_threshold=config.parallel_threshold,
        show_progress=config.show_progress,
    )
    return SearchOutcome(
        results=rank(scored, config.num),
        total_candidates=len(walked.candidates),
        scored_candidates=len(scored),
        diagnostics=list(walked.diagnostics),
        summary=walked.summary(),
    )
