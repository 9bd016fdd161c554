"""IssueTriage - classify tracker issues into workflow buckets.

High-level public API (stable):

from issuetriage import IssueTriage, load_config

triage = IssueTriage.from_config_path('issue_triage.config.yaml')
corpus = triage.load()
for record in triage.records(corpus):
    print(record.as_row())

The engine pieces are usable on their own: build_change_link_index() over
change-proposals, then classify() each Issue against a Catalog.
"""

from __future__ import annotations

from .catalog import Catalog, LabelKind, MilestoneKind, catalog_from_mapping, default_catalog
from .classifier import classify, is_included
from .config import TriageConfig, load_config
from .core import IssueTriage, summarize
from .emitter import Emitter, write_csv
from .linkindex import build_change_link_index
from .models import ClassificationResult, Issue, IssueRecord

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "ClassificationResult",
    "Emitter",
    "Issue",
    "IssueRecord",
    "IssueTriage",
    "LabelKind",
    "MilestoneKind",
    "TriageConfig",
    "build_change_link_index",
    "catalog_from_mapping",
    "classify",
    "default_catalog",
    "is_included",
    "load_config",
    "summarize",
    "write_csv",
    "__version__",
]
