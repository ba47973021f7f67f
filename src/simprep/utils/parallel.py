"""Parallel processing utilities for row-partitioned batch work."""

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from simprep.core.logging import progress_bar

T = TypeVar("T")
R = TypeVar("R")

# Arguments shared by every task, installed once per worker process.
_shared: Tuple[Any, ...] = ()


def _init_worker(shared: Tuple[Any, ...]) -> None:
    global _shared
    _shared = shared


def _call(func: Callable[..., R], item: Any) -> R:
    return func(item, *_shared)


def resolve_workers(n_jobs: Optional[int] = None) -> int:
    if n_jobs is None or n_jobs <= 0:
        return os.cpu_count() or 1
    return n_jobs


def parallel_map(
    func: Callable[..., R],
    items: Sequence[T],
    n_jobs: Optional[int] = 1,
    desc: str = "Processing",
    shared: Tuple[Any, ...] = (),
    disable: bool = False,
) -> List[R]:
    """Apply ``func(item, *shared)`` to every item, preserving item order.

    Each item is one unit of work whose result lands at its own index, so
    the output does not depend on worker count or completion order. The
    progress bar ticks once per finished item.
    """
    n_jobs = min(resolve_workers(n_jobs), max(len(items), 1))
    if n_jobs == 1:
        return [
            func(item, *shared)
            for item in progress_bar(items, total=len(items), desc=desc, disable=disable)
        ]

    results: List[Any] = [None] * len(items)
    with ProcessPoolExecutor(
        max_workers=n_jobs, initializer=_init_worker, initargs=(shared,)
    ) as executor:
        futures = {
            executor.submit(_call, func, item): i for i, item in enumerate(items)
        }
        for future in progress_bar(
            as_completed(futures), total=len(futures), desc=desc, disable=disable
        ):
            idx = futures[future]
            results[idx] = future.result()
    return results
