"""Bounded thread pool for I/O-bound fetches, with a Rich progress bar."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import TypeVar

from castwatch.utils.progress import create_progress

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def run_parallel(
    fn: Callable[[T], R],
    items: Iterable[T],
    *,
    max_workers: int = 3,
    label: str = "Fetching",
    show_progress: bool = True,
) -> list[tuple[T, R]]:
    """Call *fn* on every item with at most *max_workers* calls in flight.

    Parameters
    ----------
    fn:
        Fetch function taking one item.  Typically network-bound, e.g.
        pulling a premiere's credits from a third-party API.
    items:
        The items to process.
    max_workers:
        Upper bound on concurrent calls; keep it small to respect upstream
        rate limits.
    label:
        Description shown in the progress bar.
    show_progress:
        Render a Rich progress bar while waiting.

    Returns
    -------
    list[tuple[T, R]]
        ``(item, result)`` pairs in *input* order.  Items whose call raised
        are logged and left out; a failed fetch never aborts the batch.

    Only the fetch runs on worker threads.  Callers consume the returned
    pairs on their own thread, so anything stateful done with the results
    (dedup, persistence) stays sequential.
    """
    items_list = list(items)
    if not items_list:
        return []

    workers = max(1, min(max_workers, len(items_list)))
    results: dict[int, R] = {}

    progress = create_progress(disable=not show_progress)
    with progress:
        task = progress.add_task(label, total=len(items_list))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_index: dict[Future[R], int] = {
                executor.submit(fn, item): i for i, item in enumerate(items_list)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except Exception as exc:
                    logger.error("Failed processing %s: %s", items_list[index], exc)
                progress.advance(task)

    return [(items_list[i], results[i]) for i in sorted(results)]
