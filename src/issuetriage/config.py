from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

import yaml

from .catalog import Catalog, catalog_from_mapping, default_catalog
from .concurrency import ConcurrencyConfig
from .errors import ConfigError
from .linkindex import DEFAULT_BLOCK_SCORE, DEFAULT_REVIEW_CATEGORY

CONFIG_DEFAULT = "issue_triage.config.yaml"
DEFAULT_REPO = "golang/go"


@dataclass
class TriageConfig:
    version: int = 1
    source_file: Path | None = None
    snapshot_file: Path | None = None
    tracker_repo: str = DEFAULT_REPO
    review_category: str = DEFAULT_REVIEW_CATEGORY
    block_score: int = DEFAULT_BLOCK_SCORE
    catalog: Catalog = field(default_factory=default_catalog)
    output_csv: str = ""
    # Logging configuration
    logging_json_enabled: bool = False
    logging_level: str = "INFO"
    # Concurrency configuration
    concurrency_enabled: bool = False
    concurrency_max_workers: int = 4
    concurrency_batch_size: int = 500

    @property
    def concurrency(self) -> ConcurrencyConfig:
        return ConcurrencyConfig(
            enabled=self.concurrency_enabled,
            max_workers=self.concurrency_max_workers,
            batch_size=self.concurrency_batch_size,
        )


def _resolve_env_var(value: Any) -> Any:
    """Resolve environment variable if value starts with $."""
    if isinstance(value, str) and value.startswith('$'):
        return os.getenv(value[1:], value)
    return value


def validate_repo(repo: str) -> str:
    owner, sep, name = repo.partition('/')
    if not sep or not owner or not name or '/' in name:
        raise ConfigError(f"tracker.repo must look like owner/name, got {repo!r}")
    return repo


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {}) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' section must be a mapping")
    return cast(dict[str, Any], value)


def config_from_mapping(raw: dict[str, Any], base_dir: Path | None = None) -> TriageConfig:
    src = _section(raw, 'source')
    tracker = _section(raw, 'tracker')
    out = _section(raw, 'output')
    logging_config = _section(raw, 'logging')
    concurrency_config = _section(raw, 'concurrency')
    base = base_dir or Path.cwd()

    snapshot = src.get('snapshot')
    csv_path = out.get('csv')
    repo = validate_repo(str(_resolve_env_var(tracker.get('repo', DEFAULT_REPO)) or DEFAULT_REPO))
    try:
        return TriageConfig(
            version=int(raw.get('version', 1)),
            snapshot_file=base / snapshot if snapshot else None,
            tracker_repo=repo,
            review_category=str(tracker.get('review_category', DEFAULT_REVIEW_CATEGORY)),
            block_score=int(tracker.get('block_score', DEFAULT_BLOCK_SCORE)),
            catalog=catalog_from_mapping(_section(raw, 'catalog')),
            output_csv=str(base / str(csv_path)) if csv_path else '',
            logging_json_enabled=bool(logging_config.get('json_enabled', False)),
            logging_level=str(logging_config.get('level', 'INFO')),
            concurrency_enabled=bool(concurrency_config.get('enabled', False)),
            concurrency_max_workers=int(concurrency_config.get('max_workers', 4)),
            concurrency_batch_size=int(concurrency_config.get('batch_size', 500)),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc


def load_config(path: str | Path) -> TriageConfig:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f'Configuration file not found: {p}')
    try:
        loaded = yaml.safe_load(p.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f'Invalid YAML in {p}: {exc}') from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f'Configuration root in {p} must be a mapping')
    cfg = config_from_mapping(cast(dict[str, Any], loaded), base_dir=p.parent)
    cfg.source_file = p
    return cfg


__all__ = [
    "CONFIG_DEFAULT",
    "DEFAULT_REPO",
    "TriageConfig",
    "config_from_mapping",
    "load_config",
    "validate_repo",
]
