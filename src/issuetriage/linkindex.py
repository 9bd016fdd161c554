"""Change-Link Index.

Scans pending change-proposals once per run and collects the numbers of
tracker issues that have an active, non-rejected change linked to them.
Issues in the resulting set classify as ``pending`` instead of ``open``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import ChangeProposal, ChangeStatus

DEFAULT_REVIEW_CATEGORY = "Code-Review"
DEFAULT_BLOCK_SCORE = -2

_CLOSED_STATUSES = frozenset({ChangeStatus.MERGED, ChangeStatus.ABANDONED})

logger = logging.getLogger(__name__)


def is_rejected(
    change: ChangeProposal,
    review_category: str = DEFAULT_REVIEW_CATEGORY,
    block_score: int = DEFAULT_BLOCK_SCORE,
) -> bool:
    """True when the most recent review decision carries a blocking score.

    Earlier decisions are ignored; a change without decisions is never rejected.
    """
    latest = change.latest_decision
    if latest is None:
        return False
    return any(score == block_score for score in latest.scores(review_category))


def linked_issue_numbers(change: ChangeProposal, repo: str) -> list[int]:
    return [ref.number for ref in change.issue_refs if ref.repo == repo]


def build_change_link_index(
    changes: Iterable[ChangeProposal],
    repo: str,
    *,
    review_category: str = DEFAULT_REVIEW_CATEGORY,
    block_score: int = DEFAULT_BLOCK_SCORE,
) -> frozenset[int]:
    issue_numbers: set[int] = set()
    for change in changes:
        if change.status in _CLOSED_STATUSES:
            continue
        numbers = linked_issue_numbers(change, repo)
        if not numbers:
            continue
        if is_rejected(change, review_category, block_score):
            logger.debug("skipping rejected change %s", change.number)
            continue
        issue_numbers.update(numbers)
    return frozenset(issue_numbers)


__all__ = [
    "DEFAULT_BLOCK_SCORE",
    "DEFAULT_REVIEW_CATEGORY",
    "build_change_link_index",
    "is_rejected",
    "linked_issue_numbers",
]
