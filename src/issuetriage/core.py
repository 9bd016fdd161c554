"""Run-level orchestration.

:class:`IssueTriage` ties a :class:`~issuetriage.config.TriageConfig` to a
corpus: every call builds the Change-Link Index from that corpus's own
changes exactly once, then hands its issues to an
:class:`~issuetriage.emitter.Emitter`.
"""

from __future__ import annotations

import os
from collections import Counter
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, TextIO

from .config import TriageConfig, load_config
from .corpus import Corpus, load_corpus
from .emitter import Emitter, write_csv
from .errors import ConfigError
from .linkindex import build_change_link_index
from .logging import configure_logging
from .models import IssueRecord


class IssueTriage:
    def __init__(self, cfg: TriageConfig):
        self.cfg = cfg
        self._debug = os.environ.get("ISSUETRIAGE_DEBUG") == "1"
        self._logger = configure_logging(
            json_logging=cfg.logging_json_enabled,
            level="DEBUG" if self._debug else cfg.logging_level,
        )

    @classmethod
    def from_config_path(cls, path: str | Path) -> IssueTriage:
        return cls(load_config(path))

    def load(self) -> Corpus:
        if self.cfg.snapshot_file is None:
            raise ConfigError("No snapshot configured (set source.snapshot or pass --snapshot)")
        with self._logger.timed_operation("load_snapshot", path=str(self.cfg.snapshot_file)):
            return load_corpus(self.cfg.snapshot_file, self.cfg.tracker_repo)

    def build_index(self, corpus: Corpus) -> frozenset[int]:
        with self._logger.timed_operation("index_build", repo=self.cfg.tracker_repo):
            link_index = build_change_link_index(
                corpus.iter_changes(),
                self.cfg.tracker_repo,
                review_category=self.cfg.review_category,
                block_score=self.cfg.block_score,
            )
        self._logger.info("change-link index built", linked_issues=len(link_index))
        return link_index

    def emitter(self, corpus: Corpus) -> Emitter:
        return Emitter(self.cfg.catalog, self.build_index(corpus), self.cfg.concurrency)

    def records(self, corpus: Corpus) -> Iterator[IssueRecord]:
        return self.emitter(corpus).run(corpus.iter_issues())

    def export(self, corpus: Corpus, stream: TextIO) -> int:
        with self._logger.timed_operation("export", repo=self.cfg.tracker_repo):
            count = write_csv(self.records(corpus), stream)
        self._logger.info("export complete", rows=count)
        return count


def summarize(records: Iterable[IssueRecord]) -> dict[str, Any]:
    """Count records per state and per when bucket."""
    states: Counter[str] = Counter()
    whens: Counter[str] = Counter()
    total = 0
    for record in records:
        total += 1
        states[record.state] += 1
        whens[record.when or "-"] += 1
    return {
        "total": total,
        "state": dict(sorted(states.items())),
        "when": dict(sorted(whens.items())),
    }


__all__ = ["IssueTriage", "summarize"]
