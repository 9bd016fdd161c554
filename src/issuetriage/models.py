from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ChangeStatus(str, Enum):
    NEW = "new"
    DRAFT = "draft"
    MERGED = "merged"
    ABANDONED = "abandoned"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> ChangeStatus:
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class Milestone:
    number: int
    title: str


@dataclass(frozen=True)
class Label:
    id: int
    name: str = ""


@dataclass(frozen=True)
class Assignee:
    login: str


@dataclass(frozen=True)
class IssueRef:
    repo: str  # owner/name
    number: int


@dataclass(frozen=True)
class Issue:
    """Snapshot of one tracker issue as handed to the classifier."""

    number: int
    title: str
    updated: datetime
    closed: bool = False
    locked: bool = False
    milestone: Milestone | None = None
    labels: tuple[Label, ...] = ()
    assignees: tuple[Assignee, ...] = ()
    is_pull_request: bool = False
    exists: bool = True

    def label_ids(self) -> frozenset[int]:
        return frozenset(label.id for label in self.labels)


@dataclass(frozen=True)
class ReviewDecision:
    """Scores recorded by one review update, keyed by category (e.g. Code-Review)."""

    votes: Mapping[str, tuple[int, ...]] = field(default_factory=dict)

    def scores(self, category: str) -> tuple[int, ...]:
        return tuple(self.votes.get(category, ()))


@dataclass(frozen=True)
class ChangeProposal:
    number: int
    status: ChangeStatus
    decisions: tuple[ReviewDecision, ...] = ()
    issue_refs: tuple[IssueRef, ...] = ()

    @property
    def latest_decision(self) -> ReviewDecision | None:
        return self.decisions[-1] if self.decisions else None


@dataclass(frozen=True)
class ClassificationResult:
    state: str
    when: str
    assignees: str


@dataclass(frozen=True)
class IssueRecord:
    number: int
    updated_date: str  # YYYY-MM-DD
    state: str
    when: str
    assignees: str
    title: str

    def as_row(self) -> list[str]:
        return [
            str(self.number),
            self.updated_date,
            self.state,
            self.when,
            self.assignees,
            self.title,
        ]


__all__ = [
    "Assignee",
    "ChangeProposal",
    "ChangeStatus",
    "ClassificationResult",
    "Issue",
    "IssueRecord",
    "IssueRef",
    "Label",
    "Milestone",
    "ReviewDecision",
]
