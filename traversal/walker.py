"""Recursive directory walk that keeps going past unreadable entries."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass, field

from shodh_core.schemas import Candidate

from .failure_taxonomy import DiagnosticsSummary, FailureKind, classify_error

logger = logging.getLogger(__name__)


class TraversalError(Exception):
    """The walk root itself could not be read."""


@dataclass(frozen=True)
class WalkDiagnostic:
    path: str
    message: str
    kind: FailureKind


@dataclass
class WalkResult:
    """Everything a walk produced, plus what it had to skip."""

    candidates: list[Candidate] = field(default_factory=list)
    diagnostics: list[WalkDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def record_failure(self, path: str, error: BaseException) -> None:
        kind = classify_error(error)
        message = getattr(error, "strerror", None) or str(error)
        self.diagnostics.append(WalkDiagnostic(path=path, message=message, kind=kind))
        logger.debug(f"Skipping {path}: {message} ({kind.value})")

    def record_loop(self, path: str) -> None:
        self.diagnostics.append(
            WalkDiagnostic(path=path, message="already being walked", kind=FailureKind.LOOP)
        )
        logger.debug(f"Skipping {path}: already being walked")

    def summary(self) -> DiagnosticsSummary:
        summary = DiagnosticsSummary()
        for diagnostic in self.diagnostics:
            summary.record(diagnostic.kind)
        return summary


def _list_dir(path: str) -> list[os.DirEntry[str]]:
    with os.scandir(path) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def _entry_candidate(entry: os.DirEntry[str], result: WalkResult) -> Candidate:
    try:
        is_dir = entry.is_dir()
        is_file = not is_dir and entry.is_file()
    except OSError as e:
        result.record_failure(entry.path, e)
        is_dir = is_file = False
    return Candidate(path=entry.path, is_dir=is_dir, is_file=is_file)


def _real_path(path: str) -> str:
    return os.path.realpath(path)


def walk(root: str | os.PathLike[str], *, follow_symlinks: bool = True) -> WalkResult:
    """Collect every file and directory below ``root`` in pre-order.

    The root itself is not reported unless it is a file, in which case it is
    the only candidate. Entries are visited in name order. Subdirectories that
    cannot be read are recorded as diagnostics and skipped.

    Symlinked directories are descended into unless ``follow_symlinks`` is
    cleared. A link back to a directory that is still being walked is
    recorded as a loop instead of being entered again.

    Raises:
        TraversalError: If ``root`` does not exist or cannot be listed
    """
    root_path = os.fspath(root)
    try:
        root_stat = os.stat(root_path)
    except OSError as e:
        raise TraversalError(f"{root_path}: {e.strerror or e}") from e

    result = WalkResult()
    if not stat.S_ISDIR(root_stat.st_mode):
        result.candidates.append(
            Candidate(path=root_path, is_dir=False, is_file=stat.S_ISREG(root_stat.st_mode))
        )
        return result

    try:
        top = _list_dir(root_path)
    except OSError as e:
        raise TraversalError(f"{root_path}: {e.strerror or e}") from e

    # Real paths of the directories currently open on the stack
    ancestors: set[str] = {_real_path(root_path)} if follow_symlinks else set()
    stack: list[tuple[Iterator[os.DirEntry[str]], str | None]] = [(iter(top), None)]
    while stack:
        entries, real_dir = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            if real_dir is not None:
                ancestors.discard(real_dir)
            continue

        candidate = _entry_candidate(entry, result)
        result.candidates.append(candidate)
        if not candidate.is_dir:
            continue

        real = None
        if follow_symlinks:
            real = _real_path(entry.path)
            if real in ancestors:
                result.record_loop(entry.path)
                continue
        else:
            try:
                if entry.is_symlink():
                    continue
            except OSError as e:
                result.record_failure(entry.path, e)
                continue

        try:
            children = _list_dir(entry.path)
        except OSError as e:
            result.record_failure(entry.path, e)
            continue
        if real is not None:
            ancestors.add(real)
        stack.append((iter(children), real))

    logger.debug(
        f"Walked {root_path}: {len(result.candidates)} entries, "
        f"{len(result.diagnostics)} skipped"
    )
    return result
