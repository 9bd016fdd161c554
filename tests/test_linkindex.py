from __future__ import annotations

from issuetriage.linkindex import build_change_link_index, is_rejected
from issuetriage.models import ChangeProposal, ChangeStatus, IssueRef, ReviewDecision

REPO = "golang/go"


def _change(
    number: int,
    *issues: int,
    status: ChangeStatus = ChangeStatus.NEW,
    votes: list[dict[str, tuple[int, ...]]] | None = None,
    repo: str = REPO,
) -> ChangeProposal:
    return ChangeProposal(
        number=number,
        status=status,
        decisions=tuple(ReviewDecision(v) for v in votes or []),
        issue_refs=tuple(IssueRef(repo, n) for n in issues),
    )


def test_open_change_without_decisions_counts() -> None:
    assert build_change_link_index([_change(1, 10, 11)], REPO) == {10, 11}


def test_merged_and_abandoned_changes_skipped() -> None:
    changes = [
        _change(1, 10, status=ChangeStatus.MERGED),
        _change(2, 11, status=ChangeStatus.ABANDONED),
        _change(3, 12, status=ChangeStatus.DRAFT),
    ]
    assert build_change_link_index(changes, REPO) == {12}


def test_other_repositories_filtered() -> None:
    mixed = ChangeProposal(
        number=1,
        status=ChangeStatus.NEW,
        issue_refs=(IssueRef("golang/go", 5), IssueRef("golang/tools", 6)),
    )
    foreign = _change(2, 7, repo="golang/tools")
    assert build_change_link_index([mixed, foreign], REPO) == {5}


def test_latest_rejection_wins_over_earlier_approvals() -> None:
    change = _change(1, 10, votes=[{"Code-Review": (2,)}, {"Code-Review": (1, -2)}])
    assert is_rejected(change)
    assert build_change_link_index([change], REPO) == frozenset()


def test_earlier_rejection_is_forgotten() -> None:
    change = _change(1, 10, votes=[{"Code-Review": (-2,)}, {"Code-Review": (1,)}])
    assert not is_rejected(change)
    assert build_change_link_index([change], REPO) == {10}


def test_other_categories_do_not_reject() -> None:
    change = _change(1, 10, votes=[{"Run-TryBot": (-2,)}, {"TryBot-Result": (-1,)}])
    assert build_change_link_index([change], REPO) == {10}


def test_configurable_category_and_score() -> None:
    change = _change(1, 10, votes=[{"Verified": (-1,)}])
    index = build_change_link_index([change], REPO, review_category="Verified", block_score=-1)
    assert index == frozenset()


def test_membership_independent_of_order() -> None:
    changes = [
        _change(1, 10),
        _change(2, 10, votes=[{"Code-Review": (-2,)}]),
        _change(3, 11),
    ]
    assert build_change_link_index(changes, REPO) == build_change_link_index(
        list(reversed(changes)), REPO
    )
    assert build_change_link_index(changes, REPO) == {10, 11}


def test_status_parse_keeps_unknown_values_as_other() -> None:
    assert ChangeStatus.parse("MERGED") is ChangeStatus.MERGED
    assert ChangeStatus.parse("submitted") is ChangeStatus.OTHER
    assert ChangeStatus.parse(None) is ChangeStatus.OTHER
