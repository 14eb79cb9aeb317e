from __future__ import annotations

from pathlib import PurePath

from .alignment import fuzzy_score
from .schemas import CaseSensitivity, Candidate, Query, ScoredCandidate, TypeFilter


def extract_name(path: str) -> str | None:
    """Final path component of ``path``, or None when there is no usable name.

    Names holding undecodable bytes (surfaced by ``os`` as surrogate escapes)
    are treated as having no text form.
    """
    name = PurePath(path).name
    if not name:
        return None
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return name


def passes_type_filter(candidate: Candidate, filters: tuple[TypeFilter, ...]) -> bool:
    for type_filter in filters:
        if type_filter is TypeFilter.FILES and not candidate.is_file:
            return False
        if type_filter is TypeFilter.DIRS and not candidate.is_dir:
            return False
    return True


def evaluate(candidate: Candidate, query: Query) -> ScoredCandidate | None:
    """Score one candidate against the query.

    Returns None when the candidate is filtered out by type, has no usable
    name, or does not score above zero.
    """
    if not passes_type_filter(candidate, query.type_filters):
        return None

    name = extract_name(candidate.path)
    if name is None:
        return None

    if query.case is CaseSensitivity.INSENSITIVE:
        name = name.lower()

    score = fuzzy_score(query.folded_text, name)
    if score <= 0:
        return None
    return ScoredCandidate(candidate=candidate, score=score)
