from __future__ import annotations

from pathlib import Path

import pytest

from issuetriage.catalog import LabelKind, default_catalog
from issuetriage.config import load_config, validate_repo
from issuetriage.errors import ConfigError

FULL_CONFIG = """
version: 1
source:
  snapshot: data/corpus.json
tracker:
  repo: $TRIAGE_TEST_REPO
  review_category: Verified
  block_score: -1
catalog:
  labels:
    "11": soon
  milestones:
    "2": unplanned
output:
  csv: out/issues.csv
logging:
  json_enabled: true
  level: DEBUG
concurrency:
  enabled: true
  max_workers: 8
  batch_size: 64
"""


def test_load_config_defaults(tmp_path: Path) -> None:
    cfg_path = tmp_path / "issue_triage.config.yaml"
    cfg_path.write_text("version: 1\n")
    cfg = load_config(cfg_path)
    assert cfg.tracker_repo == "golang/go"
    assert cfg.review_category == "Code-Review"
    assert cfg.block_score == -2
    assert cfg.snapshot_file is None
    assert cfg.catalog == default_catalog()
    assert cfg.concurrency.enabled is False
    assert cfg.source_file == cfg_path


def test_load_config_full(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIAGE_TEST_REPO", "example/tracker")
    cfg_path = tmp_path / "issue_triage.config.yaml"
    cfg_path.write_text(FULL_CONFIG)
    cfg = load_config(cfg_path)
    assert cfg.tracker_repo == "example/tracker"
    assert cfg.snapshot_file == tmp_path / "data" / "corpus.json"
    assert cfg.review_category == "Verified"
    assert cfg.block_score == -1
    assert cfg.catalog.labels == {11: LabelKind.SOON}
    assert cfg.output_csv == str(tmp_path / "out" / "issues.csv")
    assert cfg.logging_json_enabled is True
    assert cfg.logging_level == "DEBUG"
    assert cfg.concurrency.max_workers == 8
    assert cfg.concurrency.batch_size == 64


@pytest.mark.parametrize(
    "body",
    [
        "tracker:\n  repo: not-a-repo\n",
        "tracker: [1, 2]\n",
        "- just\n- a list\n",
        "tracker:\n  block_score: lots\n",
        "catalog:\n  labels:\n    '1': nonsense\n",
        "version: [\n",
    ],
)
def test_load_config_errors(tmp_path: Path, body: str) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text(body)
    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_output_csv_is_relative_to_config_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    cfg_path = config_dir / "issue_triage.config.yaml"
    cfg_path.write_text("output:\n  csv: issues.csv\n")
    monkeypatch.chdir(tmp_path)
    cfg = load_config(cfg_path)
    assert cfg.output_csv == str(config_dir / "issues.csv")


@pytest.mark.parametrize("repo", ["golang", "/go", "golang/", "a/b/c"])
def test_validate_repo_rejects_malformed(repo: str) -> None:
    with pytest.raises(ConfigError):
        validate_repo(repo)
