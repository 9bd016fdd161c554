"""Record emission.

:class:`Emitter` walks issues in the order the corpus yields them, drops the
ones the inclusion filter rejects, classifies the rest and produces one
:class:`~issuetriage.models.IssueRecord` per issue. Rows are never sorted or
deduplicated.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from typing import TextIO

from .catalog import Catalog
from .classifier import classify, is_included
from .concurrency import ConcurrencyConfig, classify_concurrently
from .models import ClassificationResult, Issue, IssueRecord

COLUMNS = ("number", "updated_date", "state", "when", "assignees", "title")


def format_date(value: datetime) -> str:
    """Render ``value`` as a UTC calendar date; naive datetimes are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


def make_record(issue: Issue, result: ClassificationResult) -> IssueRecord:
    return IssueRecord(
        number=issue.number,
        updated_date=format_date(issue.updated),
        state=result.state,
        when=result.when,
        assignees=result.assignees,
        title=issue.title,
    )


class Emitter:
    def __init__(
        self,
        catalog: Catalog,
        link_index: frozenset[int],
        concurrency: ConcurrencyConfig | None = None,
    ) -> None:
        self.catalog = catalog
        self.link_index = link_index
        self.concurrency = concurrency or ConcurrencyConfig()

    def run(self, issues: Iterable[Issue]) -> Iterator[IssueRecord]:
        """Yield records lazily; every call starts a fresh pass over ``issues``.

        With concurrency enabled, issues are read ahead one batch
        (``ConcurrencyConfig.batch_size``) at a time.
        """
        retained = (issue for issue in issues if is_included(issue, self.catalog))
        if self.concurrency.enabled:
            pairs = classify_concurrently(retained, self.link_index, self.catalog, self.concurrency)
            for issue, result in pairs:
                yield make_record(issue, result)
            return
        for issue in retained:
            yield make_record(issue, classify(issue, self.link_index, self.catalog))


def write_csv(records: Iterable[IssueRecord], stream: TextIO) -> int:
    """Write records without a header row; returns the number of rows written."""
    writer = csv.writer(stream, lineterminator="\n")
    count = 0
    for record in records:
        writer.writerow(record.as_row())
        count += 1
    return count


__all__ = ["COLUMNS", "Emitter", "format_date", "make_record", "write_csv"]
