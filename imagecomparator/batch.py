"""
Batch execution for comparisons over many candidates.

Runs one scoring call per candidate on a bounded thread pool and returns
results keyed like the input. Errors are fail-fast. The first failure
aborts the batch and queued work is cancelled. Once running work has finished,
the error of the earliest failing candidate in input order is re-raised with
its key attached.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Hashable, Iterable, Mapping, Optional, TypeVar, Union

from .config import DEFAULT_WORKERS
from .exceptions import ResourceError
from .dependencies import HAS_TQDM, _tqdm_class

_logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

Candidates = Union[Mapping[Hashable, T], Iterable[T]]


def keyed_items(candidates: Candidates) -> list[tuple[Hashable, Any]]:
    """
    Return (key, candidate) pairs in input order.

    Mappings keep their keys; any other iterable is keyed by position.
    """
    if isinstance(candidates, Mapping):
        return list(candidates.items())
    return list(enumerate(candidates))


def run_batch(
    func: Callable[[T], R],
    candidates: Candidates,
    max_workers: int = DEFAULT_WORKERS,
    show_progress: bool = False,
    desc: str = "Comparing images",
) -> dict[Hashable, R]:
    """
    Apply func to every candidate and collect results by key.

    Args:
        func: Called once per candidate
        candidates: Mapping of key -> candidate, or a sequence (keys = indices)
        max_workers: Thread pool size; 1 runs inline in the calling thread
        show_progress: Whether to show a tqdm progress bar
        desc: Progress bar label

    Returns:
        Dict with the same keys, in input order

    Raises:
        ResourceError: For the earliest candidate in input order that fails to
                       load (key set)
        Exception: Any other error from func, unchanged
    """
    items = keyed_items(candidates)
    if not items:
        return {}

    results: dict[Hashable, R] = {}

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(total=len(items), desc=desc, unit="img", ncols=80)

    try:
        if max_workers <= 1 or len(items) == 1:
            for key, candidate in items:
                results[key] = _call(func, key, candidate)
                if pbar is not None:
                    pbar.update(1)
        else:
            with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
                futures = [
                    (key, executor.submit(_call, func, key, candidate))
                    for key, candidate in items
                ]
                for future in as_completed(f for _, f in futures):
                    if future.exception() is not None:
                        # Queued work is dropped; running work finishes
                        for _, pending in futures:
                            pending.cancel()
                        break
                    if pbar is not None:
                        pbar.update(1)

            # Every future that was not cancelled has finished by now.
            # Candidates run in submission order, so the earliest failure
            # in input order is never among the cancelled ones.
            for key, future in futures:
                if future.cancelled():
                    continue
                error = future.exception()
                if error is not None:
                    raise error
                results[key] = future.result()
    finally:
        if pbar is not None:
            pbar.close()

    _logger.debug(f"Batch finished: {len(items)} candidates")
    # Completion order is arbitrary; report in input order
    return {key: results[key] for key, _ in items}


def _call(func: Callable[[T], R], key: Hashable, candidate: T) -> R:
    try:
        return func(candidate)
    except ResourceError as e:
        if e.key is None:
            e.key = key
        _logger.debug(f"Candidate {key!r} failed: {e}")
        raise


__all__ = ['keyed_items', 'run_batch']
