"""Issue classification.

Every retained issue resolves to exactly one ``state`` and one ``when``:

state
    ``closed`` > ``locked`` > label-driven ``waiting`` / ``deciding`` >
    ``pending`` (has an active change) > ``open``.

when
    Milestone kinds give the default bucket. Labels then move it along
    :data:`WHEN_LADDER`, highest priority first::

        soon > release-blocker > early-in-cycle > feature-request
             > performance / tool-speed > testing > documentation

    A rule may replace ``""`` or a value written by a rule below it, never
    one written by a rule above it. ``soon`` replaces anything, including
    milestone defaults; nothing else replaces a milestone default.

Labels are visited in the issue's own order, so the ladder only decides
ties, it never reorders them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .catalog import Catalog, LabelKind, MilestoneKind
from .models import Assignee, ClassificationResult, Issue

STATE_CLOSED = "closed"
STATE_LOCKED = "locked"
STATE_WAITING = "waiting"
STATE_DECIDING = "deciding"
STATE_PENDING = "pending"
STATE_OPEN = "open"

RELEASE_WHEN = "release"
HELP_WHEN = "help"


@dataclass(frozen=True)
class WhenRule:
    """One rung of the ``when`` ladder.

    ``value`` of ``None`` means "the milestone title, or ``release`` when the
    issue has no milestone".
    """

    kinds: frozenset[LabelKind]
    value: str | None
    overrides: frozenset[str]
    unconditional: bool = False

    def allows(self, current: str) -> bool:
        return self.unconditional or current in self.overrides

    def resolve(self, issue: Issue) -> str:
        if self.value is not None:
            return self.value
        if issue.milestone is not None:
            return issue.milestone.title
        return RELEASE_WHEN


@dataclass(frozen=True)
class StateRule:
    kinds: frozenset[LabelKind]
    value: str
    overrides: frozenset[str]


def _build_when_ladder(
    rungs: list[tuple[frozenset[LabelKind], str | None]],
) -> tuple[WhenRule, ...]:
    """Derive each rung's replaceable values from the rungs below it."""
    rules: list[WhenRule] = []
    lower: set[str] = {""}
    for kinds, value in reversed(rungs[1:]):
        rules.append(WhenRule(kinds, value, frozenset(lower)))
        if value is not None:
            lower.add(value)
    top_kinds, top_value = rungs[0]
    rules.append(WhenRule(top_kinds, top_value, frozenset(lower), unconditional=True))
    return tuple(reversed(rules))


WHEN_LADDER: tuple[WhenRule, ...] = _build_when_ladder(
    [
        (frozenset({LabelKind.SOON}), "soon"),
        (frozenset({LabelKind.RELEASE_BLOCKER}), None),
        (frozenset({LabelKind.EARLY_IN_CYCLE}), "early"),
        (frozenset({LabelKind.FEATURE_REQUEST}), "feature"),
        (frozenset({LabelKind.PERFORMANCE, LabelKind.TOOL_SPEED}), "performance"),
        (frozenset({LabelKind.TESTING}), "test"),
        (frozenset({LabelKind.DOCUMENTATION}), "doc"),
    ]
)

STATE_RULES: tuple[StateRule, ...] = (
    StateRule(
        frozenset({LabelKind.WAITING_FOR_INFO, LabelKind.PROPOSAL_HOLD}),
        STATE_WAITING,
        frozenset({"", STATE_DECIDING}),
    ),
    StateRule(frozenset({LabelKind.NEEDS_DECISION}), STATE_DECIDING, frozenset({""})),
)

MILESTONE_WHEN: dict[MilestoneKind, str] = {
    MilestoneKind.UNPLANNED: "unplanned",
    MilestoneKind.UNRELEASED: "unreleased",
    MilestoneKind.PROPOSAL: "proposal",
    MilestoneKind.GO2: "go2",
    MilestoneKind.GCCGO: "gccgo",
    MilestoneKind.GOLLVM: "gollvm",
}

_WHEN_BY_KIND: dict[LabelKind, WhenRule] = {
    kind: rule for rule in WHEN_LADDER for kind in rule.kinds
}
_STATE_BY_KIND: dict[LabelKind, StateRule] = {
    kind: rule for rule in STATE_RULES for kind in rule.kinds
}


def is_included(issue: Issue, catalog: Catalog) -> bool:
    """Deleted issues, pull requests and age-frozen locked issues are skipped."""
    if not issue.exists or issue.is_pull_request:
        return False
    return not (issue.locked and catalog.has_label(issue, LabelKind.FROZEN_DUE_TO_AGE))


def base_state(issue: Issue) -> str:
    if issue.closed:
        return STATE_CLOSED
    if issue.locked:
        return STATE_LOCKED
    return ""


def milestone_when(issue: Issue, catalog: Catalog) -> str:
    kind = catalog.milestone_kind(issue.milestone)
    if kind is None:
        return ""
    if kind is MilestoneKind.UNPLANNED and catalog.has_label(issue, LabelKind.HELP_WANTED):
        return HELP_WHEN
    return MILESTONE_WHEN[kind]


def join_assignees(assignees: Iterable[Assignee]) -> str:
    return ",".join(a.login for a in assignees if a.login)


def classify(issue: Issue, link_index: frozenset[int], catalog: Catalog) -> ClassificationResult:
    state = base_state(issue)
    when = milestone_when(issue, catalog)

    for kind in catalog.label_kinds(issue):
        state_rule = _STATE_BY_KIND.get(kind)
        if state_rule is not None and state in state_rule.overrides:
            state = state_rule.value
        when_rule = _WHEN_BY_KIND.get(kind)
        if when_rule is not None and when_rule.allows(when):
            when = when_rule.resolve(issue)

    if not state:
        state = STATE_PENDING if issue.number in link_index else STATE_OPEN

    return ClassificationResult(state=state, when=when, assignees=join_assignees(issue.assignees))


__all__ = [
    "MILESTONE_WHEN",
    "STATE_RULES",
    "StateRule",
    "WHEN_LADDER",
    "WhenRule",
    "base_state",
    "classify",
    "is_included",
    "join_assignees",
    "milestone_when",
]
