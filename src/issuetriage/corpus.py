"""Snapshot corpus.

Fetching issues and changes from the tracker and the code review server is
somebody else's job; IssueTriage reads the JSON snapshot they leave behind.
The document shape is described by the ``snapshot`` schema in
:mod:`issuetriage.schemas` and is validated with ``jsonschema`` on load.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from jsonschema import Draft7Validator

from .errors import CorpusError
from .models import (
    Assignee,
    ChangeProposal,
    ChangeStatus,
    Issue,
    IssueRef,
    Label,
    Milestone,
    ReviewDecision,
)
from .schemas import get_schemas

logger = logging.getLogger(__name__)

_SNAPSHOT_VALIDATOR: Draft7Validator | None = None


class Corpus(Protocol):
    repo: str

    def iter_issues(self) -> Iterator[Issue]: ...

    def iter_changes(self) -> Iterator[ChangeProposal]: ...


def _validator() -> Draft7Validator:
    global _SNAPSHOT_VALIDATOR  # noqa: PLW0603
    if _SNAPSHOT_VALIDATOR is None:
        _SNAPSHOT_VALIDATOR = Draft7Validator(get_schemas()["snapshot"])
    return _SNAPSHOT_VALIDATOR


def validate_snapshot(document: Any) -> list[str]:
    """Return human readable schema violations (empty when valid)."""
    errors = sorted(
        _validator().iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path]
    )
    out: list[str] = []
    for err in errors:
        location = "/".join(str(p) for p in err.absolute_path) or "<root>"
        out.append(f"{location}: {err.message}")
    return out


def parse_timestamp(value: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise CorpusError(f"Invalid timestamp {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_issue(raw: Mapping[str, Any]) -> Issue:
    milestone_raw = raw.get("milestone")
    milestone = None
    if isinstance(milestone_raw, Mapping):
        milestone = Milestone(
            number=int(milestone_raw["number"]), title=str(milestone_raw.get("title") or "")
        )
    labels = tuple(
        Label(id=int(entry["id"]), name=str(entry.get("name") or ""))
        for entry in raw.get("labels") or ()
    )
    assignees = tuple(
        Assignee(login=str(entry.get("login") or "")) for entry in raw.get("assignees") or ()
    )
    return Issue(
        number=int(raw["number"]),
        title=str(raw.get("title") or ""),
        updated=parse_timestamp(str(raw["updated"])),
        closed=bool(raw.get("closed", False)),
        locked=bool(raw.get("locked", False)),
        milestone=milestone,
        labels=labels,
        assignees=assignees,
        is_pull_request=bool(raw.get("pull_request", False)),
        exists=not bool(raw.get("not_exist", False)),
    )


def _parse_change(raw: Mapping[str, Any]) -> ChangeProposal:
    decisions = tuple(
        ReviewDecision(
            votes={
                str(category): tuple(int(v) for v in scores)
                for category, scores in (entry.get("votes") or {}).items()
            }
        )
        for entry in raw.get("decisions") or ()
    )
    refs = tuple(
        IssueRef(repo=str(ref["repo"]), number=int(ref["number"]))
        for ref in raw.get("issue_refs") or ()
    )
    return ChangeProposal(
        number=int(raw["number"]),
        status=ChangeStatus.parse(str(raw.get("status"))),
        decisions=decisions,
        issue_refs=refs,
    )


class SnapshotCorpus:
    """In-memory corpus built from a validated snapshot document."""

    def __init__(
        self,
        repo: str,
        issues: tuple[Issue, ...] = (),
        changes: tuple[ChangeProposal, ...] = (),
    ) -> None:
        self.repo = repo
        self._issues = issues
        self._changes = changes

    @classmethod
    def from_document(cls, document: Any) -> SnapshotCorpus:
        problems = validate_snapshot(document)
        if problems:
            raise CorpusError("Snapshot failed validation: " + "; ".join(problems[:5]))
        return cls(
            repo=str(document["repo"]),
            issues=tuple(_parse_issue(raw) for raw in document["issues"]),
            changes=tuple(_parse_change(raw) for raw in document.get("changes") or ()),
        )

    @classmethod
    def from_path(cls, path: str | Path) -> SnapshotCorpus:
        p = Path(path)
        if not p.exists():
            raise CorpusError(f"Snapshot file not found: {p}")
        try:
            document = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CorpusError(f"Snapshot {p} is not valid JSON: {exc}") from exc
        corpus = cls.from_document(document)
        logger.debug(
            "loaded snapshot %s: %d issues, %d changes",
            p,
            len(corpus._issues),
            len(corpus._changes),
        )
        return corpus

    def iter_issues(self) -> Iterator[Issue]:
        return iter(self._issues)

    def iter_changes(self) -> Iterator[ChangeProposal]:
        return iter(self._changes)

    def counts(self) -> dict[str, int]:
        return {"issues": len(self._issues), "changes": len(self._changes)}


def load_corpus(path: str | Path, repo: str | None = None) -> SnapshotCorpus:
    """Load a snapshot and make sure it covers ``repo`` when one is given."""
    corpus = SnapshotCorpus.from_path(path)
    if repo and corpus.repo != repo:
        raise CorpusError(f"github.com/{repo} not found (snapshot covers {corpus.repo})")
    return corpus


__all__ = [
    "Corpus",
    "SnapshotCorpus",
    "load_corpus",
    "parse_timestamp",
    "validate_snapshot",
]
