"""IssueTriage CLI.

Subcommands:
  export    -> classify every issue in the snapshot and write CSV rows
  summary   -> counts per state and per when bucket
  validate  -> schema-check the snapshot and report what it contains
  schema    -> write JSON Schemas for the snapshot and record formats

Rows are ``number,updated_date,state,when,assignees,title`` with no header.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

from issuetriage.config import CONFIG_DEFAULT, TriageConfig
from issuetriage.core import IssueTriage, summarize
from issuetriage.errors import TriageError, classify_error
from issuetriage.runtime import execute_command, prepare_config
from issuetriage.schema_registry import get_schema_descriptor
from issuetriage.schemas import get_schemas
from issuetriage.ux import STATE_COLORS, print_counts, print_error, print_header, print_success

REPO_HELP = "Override tracker repository (owner/repo)"
SNAPSHOT_HELP = "Snapshot JSON file (overrides source.snapshot)"

_MAX_HELP_WIDTH = 100


class _HelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog: str) -> None:
        super().__init__(prog, max_help_position=30, width=_MAX_HELP_WIDTH)


class _FormatterArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("formatter_class", _HelpFormatter)
        super().__init__(*args, **kwargs)


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=CONFIG_DEFAULT)
    p.add_argument("--snapshot", help=SNAPSHOT_HELP)
    p.add_argument("--repo", help=REPO_HELP)


def _build_parser() -> argparse.ArgumentParser:
    p = _FormatterArgumentParser(
        prog="issuetriage", description="Classify tracker issues into state/when buckets"
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output (env: ISSUETRIAGE_QUIET=1)",
    )
    sub = p.add_subparsers(
        dest="cmd",
        required=True,
        parser_class=_FormatterArgumentParser,
        metavar="<command>",
    )

    pe = sub.add_parser("export", help="Write one CSV row per retained issue")
    _add_source_args(pe)
    pe.add_argument("--output", help="CSV file (default: output.csv from config, else stdout)")

    ps = sub.add_parser("summary", help="Count issues per state and when bucket")
    _add_source_args(ps)
    ps.add_argument("--json", action="store_true", help="Print the summary as JSON")

    pv = sub.add_parser("validate", help="Validate the snapshot against its schema")
    _add_source_args(pv)

    psc = sub.add_parser("schema", help="Write JSON Schemas for snapshot and record formats")
    psc.add_argument("--output-dir", default=".", help="Directory for schema files")
    psc.add_argument("--stdout", action="store_true", help="Print schemas instead of writing")
    return p


def _quiet(args: argparse.Namespace) -> bool:
    return bool(getattr(args, "quiet", False)) or os.environ.get("ISSUETRIAGE_QUIET") == "1"


def _cmd_export(cfg: TriageConfig, args: argparse.Namespace) -> int:
    triage = IssueTriage(cfg)
    corpus = triage.load()
    target = args.output or cfg.output_csv
    if not target:
        triage.export(corpus, sys.stdout)
        sys.stdout.flush()
        return 0
    out_path = Path(target)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as fh:
        count = triage.export(corpus, fh)
    if not _quiet(args):
        print_success(f"Exported {count} issues to {out_path}", stream=sys.stderr)
    return 0


def _cmd_summary(cfg: TriageConfig, args: argparse.Namespace) -> int:
    triage = IssueTriage(cfg)
    corpus = triage.load()
    summary = summarize(triage.records(corpus))
    if args.json:
        print(json.dumps(summary, indent=2, sort_keys=True))
        return 0
    if _quiet(args):
        print(f"Total: {summary['total']}")
        return 0
    print_header(f"Issue Summary for {cfg.tracker_repo} ({summary['total']} issues)")
    print_counts("state", summary["state"], STATE_COLORS)
    print_counts("when", summary["when"])
    return 0


def _cmd_validate(cfg: TriageConfig, args: argparse.Namespace) -> int:
    triage = IssueTriage(cfg)
    corpus = triage.load()
    counts = corpus.counts()
    if not _quiet(args):
        print_success(
            f"Snapshot for {corpus.repo} is valid: "
            f"{counts['issues']} issues, {counts['changes']} changes"
        )
    return 0


def _cmd_schema(args: argparse.Namespace) -> int:
    schemas = get_schemas()
    if args.stdout:
        print(json.dumps(schemas, indent=2))
        return 0
    out_dir = Path(args.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for name, schema in schemas.items():
        path = out_dir / get_schema_descriptor(name).filename
        path.write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")
        if not _quiet(args):
            print(f"[schema] wrote {path}")
    return 0


def _require_cfg(cfg: TriageConfig | None) -> TriageConfig:
    if cfg is None:  # pragma: no cover - defensive guard
        raise RuntimeError("Configuration not loaded")
    return cfg


def _build_handlers(args: argparse.Namespace, cfg: TriageConfig | None) -> dict[str, Any]:
    return {
        "export": lambda: _cmd_export(_require_cfg(cfg), args),
        "summary": lambda: _cmd_summary(_require_cfg(cfg), args),
        "validate": lambda: _cmd_validate(_require_cfg(cfg), args),
        "schema": lambda: _cmd_schema(args),
    }


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = prepare_config(args)
    except TriageError as exc:
        info = classify_error(exc)
        print_error(f"[{args.cmd}] {info.category}: {info.message}")
        return 1
    if cfg is not None and _quiet(args):
        cfg.logging_level = "WARNING"
    handler = _build_handlers(args, cfg).get(args.cmd)
    if handler is None:  # pragma: no cover - argparse enforces valid choices
        parser.print_help()
        return 1
    return execute_command(handler, args, cfg, args.cmd)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
