"""Parallel classification.

Classifying an issue reads only the issue, the catalog and the prebuilt
link index, so issues can be fanned out to a thread pool. ``Executor.map``
yields results in submission order, which keeps output rows in the corpus
order. Issues are pulled from the input one batch at a time, so at most
``batch_size`` issues are held ahead of the consumer.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice

from .catalog import Catalog
from .classifier import classify
from .logging import get_logger
from .models import ClassificationResult, Issue


@dataclass
class ConcurrencyConfig:
    enabled: bool = False
    max_workers: int = 4
    batch_size: int = 500


def get_optimal_worker_count(issue_count: int, max_workers: int = 4) -> int:
    """Get optimal worker count based on issue count."""
    small_threshold = 50
    medium_threshold = 500
    if issue_count <= small_threshold:
        return 1
    elif issue_count <= medium_threshold:
        return min(2, max_workers)
    else:
        return max(1, max_workers)


def _batches(issues: Iterable[Issue], size: int) -> Iterator[list[Issue]]:
    it = iter(issues)
    while batch := list(islice(it, max(1, size))):
        yield batch


def classify_concurrently(
    issues: Iterable[Issue],
    link_index: frozenset[int],
    catalog: Catalog,
    config: ConcurrencyConfig,
) -> Iterator[tuple[Issue, ClassificationResult]]:
    """Classify ``issues`` and yield ``(issue, result)`` pairs in input order."""
    if not config.enabled:
        for issue in issues:
            yield issue, classify(issue, link_index, catalog)
        return

    logger = get_logger()
    executor: ThreadPoolExecutor | None = None
    try:
        for batch in _batches(issues, config.batch_size):
            workers = get_optimal_worker_count(len(batch), config.max_workers)
            if workers <= 1:
                for issue in batch:
                    yield issue, classify(issue, link_index, catalog)
                continue
            if executor is None:
                executor = ThreadPoolExecutor(max_workers=max(1, config.max_workers))
            start = time.perf_counter()
            results = list(
                executor.map(lambda issue: classify(issue, link_index, catalog), batch)
            )
            logger.log_performance(
                "concurrent_classify",
                (time.perf_counter() - start) * 1000,
                issue_count=len(batch),
                max_workers=workers,
            )
            yield from zip(batch, results)
    finally:
        if executor is not None:
            executor.shutdown(wait=True)


__all__ = ["ConcurrencyConfig", "classify_concurrently", "get_optimal_worker_count"]
