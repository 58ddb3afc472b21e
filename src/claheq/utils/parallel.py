# -*- coding: utf-8 -*-
"""
Thread-pool helper shared by the tile stage and the interpolation sweep.

Tasks write disjoint slices of preallocated arrays, so no result is
returned and no locking is needed. ``run_tasks`` returns only after every
task has finished, which is the barrier between the two stages.
"""

from __future__ import annotations
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed, Future
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from tqdm import tqdm

__all__ = ["run_tasks", "chunk_ranges"]

T = TypeVar("T")


def chunk_ranges(n: int, parts: int) -> List[range]:
    """Split ``range(n)`` into at most ``parts`` contiguous, non-empty ranges."""
    parts = max(1, min(int(parts), n)) if n > 0 else 0
    if parts == 0:
        return []
    step, extra = divmod(n, parts)
    out, start = [], 0
    for i in range(parts):
        stop = start + step + (1 if i < extra else 0)
        out.append(range(start, stop))
        start = stop
    return out


def run_tasks(
    fn: Callable[[T], None],
    items: Iterable[T],
    *,
    workers: int = 1,
    progress: bool = False,
    desc: Optional[str] = None,
    unit: str = "it",
) -> None:
    """
    Call ``fn(item)`` for every item, inline or on a thread pool.

    The first exception raised by a task is re-raised once all submitted
    tasks have settled.
    """
    todo: Sequence[T] = list(items)
    pbar = tqdm(total=len(todo), desc=desc, unit=unit, file=sys.stdout) if progress else None
    try:
        if workers <= 1 or len(todo) <= 1:
            for item in todo:
                fn(item)
                if pbar: pbar.update(1)
            return

        with ThreadPoolExecutor(max_workers=int(workers)) as ex:
            futures: List[Future] = [ex.submit(fn, item) for item in todo]
            for fut in as_completed(futures):
                fut.result()
                if pbar: pbar.update(1)
    finally:
        if pbar: pbar.close()
