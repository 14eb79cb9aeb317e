"""Parallel map helpers for candidate scoring."""

from __future__ import annotations

import multiprocessing
import os
import sys
import threading
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import TypeVar

T = TypeVar("T")
U = TypeVar("U")

# Keeps per-task pickling overhead low without starving workers on small inputs.
_CHUNKS_PER_WORKER = 4


def gil_disabled() -> bool:
    """Return True when running on a free-threaded interpreter."""
    checker = getattr(sys, "_is_gil_enabled", None)
    if not callable(checker):
        return False
    try:
        return not bool(checker())
    except (RuntimeError, TypeError, ValueError):
        return False


def supports_fork() -> bool:
    if "fork" not in multiprocessing.get_all_start_methods():
        return False
    return threading.active_count() <= 1


def resolve_max_workers(max_workers: int | None) -> int:
    if max_workers is not None:
        return max(1, max_workers)
    return max(1, os.cpu_count() or 1)


def resolve_chunksize(n_items: int, workers: int) -> int:
    if n_items <= 0:
        return 1
    return max(1, n_items // (workers * _CHUNKS_PER_WORKER))


def _make_executor(workers: int) -> Executor:
    if gil_disabled():
        return ThreadPoolExecutor(max_workers=workers)
    ctx = (
        multiprocessing.get_context("fork")
        if supports_fork()
        else multiprocessing.get_context("spawn")
    )
    return ProcessPoolExecutor(max_workers=workers, mp_context=ctx)


def parallel_map(
    items: Sequence[T],
    fn: Callable[[T], U],
    *,
    max_workers: int | None = None,
    chunksize: int | None = None,
) -> Iterator[U]:
    """Map ``fn`` over ``items`` in parallel, yielding results in input order.

    Uses worker processes unless the interpreter is free-threaded, in which
    case threads are enough. ``fn`` and every item must be picklable.
    """
    workers = resolve_max_workers(max_workers)
    if chunksize is None:
        chunksize = resolve_chunksize(len(items), workers)
    with _make_executor(workers) as executor:
        for result in executor.map(fn, items, chunksize=chunksize):
            yield result


__all__ = [
    "gil_disabled",
    "parallel_map",
    "resolve_chunksize",
    "resolve_max_workers",
    "supports_fork",
]
