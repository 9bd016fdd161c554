from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from issuetriage import runtime
from issuetriage.config import TriageConfig
from issuetriage.errors import ConfigError, CorpusError


def test_prepare_config_returns_none_for_schema_command() -> None:
    args = SimpleNamespace(cmd="schema")
    assert runtime.prepare_config(args) is None


def test_prepare_config_requires_config_attribute() -> None:
    args = SimpleNamespace(cmd="export")
    with pytest.raises(AttributeError):
        runtime.prepare_config(args)


def test_prepare_config_applies_overrides(tmp_path: Path) -> None:
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text("version: 1\n")
    args = SimpleNamespace(
        cmd="export", config=str(cfg_path), repo="owner/repo", snapshot="snap.json"
    )
    seen: list[str] = []

    def loader(path: str) -> TriageConfig:
        seen.append(path)
        return TriageConfig()

    cfg = runtime.prepare_config(args, loader=loader)
    assert cfg is not None
    assert seen == [str(cfg_path)]
    assert cfg.tracker_repo == "owner/repo"
    assert cfg.snapshot_file == Path("snap.json")


def test_prepare_config_skips_missing_file_when_snapshot_given(tmp_path: Path) -> None:
    args = SimpleNamespace(cmd="export", config=str(tmp_path / "missing.yaml"), snapshot="s.json")

    def loader(path: str) -> TriageConfig:  # pragma: no cover - must not run
        raise AssertionError("loader should not be called")

    cfg = runtime.prepare_config(args, loader=loader)
    assert cfg is not None and cfg.tracker_repo == "golang/go"


def test_execute_command_success() -> None:
    assert runtime.execute_command(lambda: 0, SimpleNamespace(), None, "export") == 0
    assert runtime.execute_command(lambda: None, SimpleNamespace(), None, "export") == 0


def test_execute_command_reports_triage_errors(capsys: pytest.CaptureFixture[str]) -> None:
    def handler() -> int:
        raise CorpusError("snapshot exploded")

    assert runtime.execute_command(handler, SimpleNamespace(), None, "export") == 1
    assert "[export] corpus: snapshot exploded" in capsys.readouterr().err


def test_execute_command_propagates_other_errors() -> None:
    def handler() -> int:
        raise KeyError("bug")

    with pytest.raises(KeyError):
        runtime.execute_command(handler, SimpleNamespace(), None, "export")


def test_prepare_config_rejects_malformed_repo_override(tmp_path: Path) -> None:
    args = SimpleNamespace(
        cmd="export", config=str(tmp_path / "missing.yaml"), repo="badrepo", snapshot="s.json"
    )
    with pytest.raises(ConfigError, match="owner/name"):
        runtime.prepare_config(args)
