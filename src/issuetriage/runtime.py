"""Runtime helpers for IssueTriage CLI orchestration."""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from issuetriage.config import TriageConfig, load_config, validate_repo
from issuetriage.errors import TriageError, classify_error
from issuetriage.logging import get_logger
from issuetriage.ux import print_error

_NO_CONFIG_COMMANDS = {"schema"}


class _HandlerCallable(Protocol):
    def __call__(self) -> Any: ...


def prepare_config(
    args: Any, *, loader: Callable[[str], TriageConfig] = load_config
) -> TriageConfig | None:
    """Load and post-process TriageConfig for the given argparse namespace.

    A missing config file is tolerated when ``--snapshot`` is supplied; the
    defaults (golang/go catalog) apply in that case.
    """
    if getattr(args, "cmd", None) in _NO_CONFIG_COMMANDS:
        return None
    if not hasattr(args, "config"):
        raise AttributeError("Command namespace is missing 'config' attribute")
    snapshot_override = getattr(args, "snapshot", None)
    if snapshot_override and not Path(args.config).exists():
        cfg = TriageConfig()
    else:
        cfg = loader(args.config)
    repo_override = getattr(args, "repo", None)
    if repo_override:
        cfg.tracker_repo = validate_repo(repo_override)
    if snapshot_override:
        cfg.snapshot_file = Path(snapshot_override)
    return cfg


def execute_command(
    handler: _HandlerCallable, args: Any, cfg: TriageConfig | None, command: str
) -> int:
    """Run a command handler; triage errors become exit code 1 with a short report."""
    start = time.monotonic()
    logger = get_logger()
    try:
        result = handler()
        exit_code = int(result) if result is not None else 0
    except TriageError as exc:
        info = classify_error(exc)
        print_error(f"[{command}] {info.category}: {info.message}")
        exit_code = 1
    duration_ms = max(0.0, time.monotonic() - start) * 1000
    logger.debug(
        f"command {command} finished", command=command, exit_code=exit_code, duration_ms=duration_ms
    )
    return exit_code


__all__ = ["prepare_config", "execute_command"]
