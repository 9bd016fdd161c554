"""Label and milestone catalog.

The classifier never looks at raw tracker identifiers. Each label id and
milestone number is translated through a :class:`Catalog` into a semantic
kind first, so the same rules can run against any tracker whose taxonomy
can be mapped onto :class:`LabelKind` and :class:`MilestoneKind`.

The default catalog describes the ``golang/go`` GitHub repository. Label ids
can be extracted with::

    curl -sn https://api.github.com/repos/golang/go/labels/$LABELNAME | jq .id
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .errors import ConfigError
from .models import Issue, Label, Milestone


class LabelKind(str, Enum):
    GO2 = "go2"
    DOCUMENTATION = "documentation"
    EARLY_IN_CYCLE = "early-in-cycle"
    FEATURE_REQUEST = "feature-request"
    HELP_WANTED = "help-wanted"
    NEEDS_DECISION = "needs-decision"
    NEEDS_FIX = "needs-fix"
    NEEDS_INVESTIGATION = "needs-investigation"
    PERFORMANCE = "performance"
    PROPOSAL = "proposal"
    PROPOSAL_HOLD = "proposal-hold"
    RELEASE_BLOCKER = "release-blocker"
    SOON = "soon"
    TESTING = "testing"
    TOOL_SPEED = "tool-speed"
    WAITING_FOR_INFO = "waiting-for-info"
    FROZEN_DUE_TO_AGE = "frozen-due-to-age"


class MilestoneKind(str, Enum):
    UNPLANNED = "unplanned"
    UNRELEASED = "unreleased"
    PROPOSAL = "proposal"
    GO2 = "go2"
    GCCGO = "gccgo"
    GOLLVM = "gollvm"


def _freeze(mapping: Mapping[int, Any]) -> Mapping[int, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Catalog:
    """Immutable lookup from tracker identifiers to semantic kinds."""

    labels: Mapping[int, LabelKind] = field(default_factory=dict)
    milestones: Mapping[int, MilestoneKind] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", _freeze(self.labels))
        object.__setattr__(self, "milestones", _freeze(self.milestones))

    def label_kind(self, label: Label) -> LabelKind | None:
        return self.labels.get(label.id)

    def milestone_kind(self, milestone: Milestone | None) -> MilestoneKind | None:
        if milestone is None:
            return None
        return self.milestones.get(milestone.number)

    def label_kinds(self, issue: Issue) -> list[LabelKind]:
        """Kinds of the issue's labels in label order; unknown ids are dropped."""
        kinds: list[LabelKind] = []
        for label in issue.labels:
            kind = self.label_kind(label)
            if kind is not None:
                kinds.append(kind)
        return kinds

    def has_label(self, issue: Issue, kind: LabelKind) -> bool:
        return any(self.labels.get(label.id) is kind for label in issue.labels)


GOLANG_GO_LABELS: dict[int, LabelKind] = {
    150880249: LabelKind.GO2,
    150880209: LabelKind.DOCUMENTATION,
    626114143: LabelKind.EARLY_IN_CYCLE,
    373540105: LabelKind.FEATURE_REQUEST,
    150880243: LabelKind.HELP_WANTED,
    373401956: LabelKind.NEEDS_DECISION,
    373399998: LabelKind.NEEDS_FIX,
    373402289: LabelKind.NEEDS_INVESTIGATION,
    150880191: LabelKind.PERFORMANCE,
    236419512: LabelKind.PROPOSAL,
    477156222: LabelKind.PROPOSAL_HOLD,
    626114820: LabelKind.RELEASE_BLOCKER,
    936464699: LabelKind.SOON,
    150880205: LabelKind.TESTING,
    358732225: LabelKind.TOOL_SPEED,
    357033853: LabelKind.WAITING_FOR_INFO,
    398069301: LabelKind.FROZEN_DUE_TO_AGE,
}

# Milestone numbers, not GitHub node ids.
GOLANG_GO_MILESTONES: dict[int, MilestoneKind] = {
    6: MilestoneKind.UNPLANNED,
    22: MilestoneKind.UNRELEASED,
    30: MilestoneKind.PROPOSAL,
    72: MilestoneKind.GO2,
    23: MilestoneKind.GCCGO,
    100: MilestoneKind.GOLLVM,
}


def default_catalog() -> Catalog:
    return Catalog(labels=GOLANG_GO_LABELS, milestones=GOLANG_GO_MILESTONES)


def _coerce_key(section: str, key: Any) -> int:
    try:
        return int(key)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"catalog.{section}: identifier {key!r} is not an integer") from exc


def catalog_from_mapping(raw: Mapping[str, Any] | None) -> Catalog:
    """Build a catalog from a ``{"labels": {...}, "milestones": {...}}`` mapping.

    Keys are tracker identifiers (ints or numeric strings, as YAML tends to
    produce either), values are kind names such as ``help-wanted``. An absent
    or empty mapping yields the default ``golang/go`` catalog.
    """
    if not raw:
        return default_catalog()
    labels_raw = raw.get("labels") or {}
    milestones_raw = raw.get("milestones") or {}
    if not isinstance(labels_raw, Mapping) or not isinstance(milestones_raw, Mapping):
        raise ConfigError("catalog.labels and catalog.milestones must be mappings")
    labels: dict[int, LabelKind] = {}
    for key, name in labels_raw.items():
        try:
            labels[_coerce_key("labels", key)] = LabelKind(str(name))
        except ValueError as exc:
            raise ConfigError(f"catalog.labels: unknown label kind {name!r}") from exc
    milestones: dict[int, MilestoneKind] = {}
    for key, name in milestones_raw.items():
        try:
            milestones[_coerce_key("milestones", key)] = MilestoneKind(str(name))
        except ValueError as exc:
            raise ConfigError(f"catalog.milestones: unknown milestone kind {name!r}") from exc
    return Catalog(labels=labels, milestones=milestones)


__all__ = [
    "Catalog",
    "GOLANG_GO_LABELS",
    "GOLANG_GO_MILESTONES",
    "LabelKind",
    "MilestoneKind",
    "catalog_from_mapping",
    "default_catalog",
]
