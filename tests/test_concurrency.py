from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone

from issuetriage.catalog import default_catalog
from issuetriage.concurrency import (
    ConcurrencyConfig,
    classify_concurrently,
    get_optimal_worker_count,
)
from issuetriage.models import Issue


def test_concurrency_config_defaults() -> None:
    config = ConcurrencyConfig()
    assert config.enabled is False
    assert config.max_workers == 4
    assert config.batch_size == 500


def test_get_optimal_worker_count() -> None:
    assert get_optimal_worker_count(10) == 1
    assert get_optimal_worker_count(100, max_workers=8) == 2
    assert get_optimal_worker_count(1000, max_workers=8) == 8
    assert get_optimal_worker_count(1000, max_workers=0) == 1


def test_classify_concurrently_preserves_order() -> None:
    updated = datetime(2021, 6, 1, tzinfo=timezone.utc)
    issues = [Issue(number=n, title=str(n), updated=updated) for n in range(600)]
    index = frozenset(range(0, 600, 2))
    pairs = list(
        classify_concurrently(issues, index, default_catalog(), ConcurrencyConfig(True, 4))
    )
    assert [issue.number for issue, _ in pairs] == list(range(600))
    assert [result.state for _, result in pairs[:4]] == ["pending", "open", "pending", "open"]


def test_classify_concurrently_disabled_is_sequential() -> None:
    updated = datetime(2021, 6, 1, tzinfo=timezone.utc)
    issues = [Issue(number=1, title="a", updated=updated, closed=True)]
    pairs = list(classify_concurrently(issues, frozenset(), default_catalog(), ConcurrencyConfig()))
    assert pairs[0][1].state == "closed"


def test_classify_concurrently_reads_one_batch_ahead() -> None:
    updated = datetime(2021, 6, 1, tzinfo=timezone.utc)
    pulled: list[int] = []

    def stream() -> Iterator[Issue]:
        for n in range(1000):
            pulled.append(n)
            yield Issue(number=n, title=str(n), updated=updated)

    config = ConcurrencyConfig(enabled=True, max_workers=4, batch_size=100)
    pairs = classify_concurrently(stream(), frozenset(), default_catalog(), config)
    first_issue, first_result = next(pairs)
    assert first_issue.number == 0
    assert first_result.state == "open"
    assert len(pulled) <= config.batch_size
    rest = list(pairs)
    assert [issue.number for issue, _ in rest] == list(range(1, 1000))


def test_classify_concurrently_uses_pool_for_large_batches() -> None:
    updated = datetime(2021, 6, 1, tzinfo=timezone.utc)
    issues = [Issue(number=n, title=str(n), updated=updated) for n in range(120)]
    config = ConcurrencyConfig(enabled=True, max_workers=2, batch_size=60)
    pairs = list(classify_concurrently(issues, frozenset({119}), default_catalog(), config))
    assert [issue.number for issue, _ in pairs] == list(range(120))
    assert pairs[-1][1].state == "pending"
