"""Error taxonomy for IssueTriage.

The classification engine itself never raises: unknown labels and
milestones are ignored. Everything that can fail lives at the edges
(configuration loading and snapshot reading) and is reported through the
small hierarchy below.

Public API:
- TriageError / ConfigError / CorpusError
- classify_error(exc) -> ErrorInfo
- redact(text) -> str
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


class TriageError(RuntimeError):
    pass


class ConfigError(TriageError):
    pass


class CorpusError(TriageError):
    pass


_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"ghp_[A-Za-z0-9]{20,40}"),  # GitHub classic tokens
    re.compile(r"github_pat_\w{20,}"),  # GitHub fine-grained tokens
    re.compile(r"git-[\w.-]+=[\w/+-]{20,}"),  # Gerrit .gitcookies entries
]

_REDACTION_PLACEHOLDER = "<redacted>"


@dataclass
class ErrorInfo:
    category: str
    message: str
    original_type: str
    details: dict[str, Any] | None = None


def redact(text: str) -> str:
    """Replace credential-looking substrings before they reach a log line."""
    if not text:
        return text
    redacted = text
    for pat in _SENSITIVE_PATTERNS:
        redacted = pat.sub(_REDACTION_PLACEHOLDER, redacted)
    return redacted


def classify_error(exc: BaseException) -> ErrorInfo:
    """Best-effort classification of an exception for CLI reporting.

    - ConfigError -> 'config'
    - CorpusError -> 'corpus'
    - YAML / JSON decode problems -> 'parse'
    - OSError -> 'io'
    - Fallback -> 'generic'
    """
    msg = str(exc) if exc else ""
    low = msg.lower()
    name = exc.__class__.__name__

    if isinstance(exc, ConfigError):
        return ErrorInfo("config", redact(msg), name)
    if isinstance(exc, CorpusError):
        return ErrorInfo("corpus", redact(msg), name)
    if any(k in low for k in ("yaml", "scannererror", "parsererror", "expecting value")):
        return ErrorInfo("parse", redact(msg), name)
    if isinstance(exc, OSError):
        return ErrorInfo("io", redact(msg), name)
    return ErrorInfo("generic", redact(msg), name)


__all__ = [
    "ConfigError",
    "CorpusError",
    "ErrorInfo",
    "TriageError",
    "classify_error",
    "redact",
]
