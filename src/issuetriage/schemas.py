"""JSON Schemas for the snapshot input and the classified record output.

The snapshot schema checks the fields the classifier reads and leaves
everything else open, so snapshots produced by newer exporters with extra
keys still load.
"""

from __future__ import annotations

from typing import Any

from .schema_registry import get_schema_descriptor

SCHEMA_KEY = "$schema"
SCHEMA_URL = "http://json-schema.org/draft-07/schema#"

_ISSUE_REF: dict[str, Any] = {
    "type": "object",
    "required": ["repo", "number"],
    "properties": {
        "repo": {"type": "string", "pattern": "^[^/]+/[^/]+$"},
        "number": {"type": "integer"},
    },
}


def get_schemas() -> dict[str, Any]:
    """Return a mapping of schema name -> JSON Schema dictionary.

    Keys:
        snapshot: Schema describing the snapshot document (issues + changes).
        records:  Schema describing the list of classified records.
    """
    snapshot_descriptor = get_schema_descriptor("snapshot")
    snapshot_schema: dict[str, Any] = {
        SCHEMA_KEY: SCHEMA_URL,
        "$comment": f"IssueTriage snapshot schema v{snapshot_descriptor.version}",
        "title": "IssueSnapshot",
        "type": "object",
        "required": ["repo", "issues"],
        "properties": {
            "repo": {"type": "string", "pattern": "^[^/]+/[^/]+$"},
            "issues": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["number", "updated"],
                    "properties": {
                        "number": {"type": "integer"},
                        "title": {"type": "string"},
                        "closed": {"type": "boolean"},
                        "locked": {"type": "boolean"},
                        "updated": {"type": "string", "minLength": 10},
                        "pull_request": {"type": "boolean"},
                        "not_exist": {"type": "boolean"},
                        "milestone": {
                            "type": ["object", "null"],
                            "required": ["number"],
                            "properties": {
                                "number": {"type": "integer"},
                                "title": {"type": "string"},
                            },
                        },
                        "labels": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "required": ["id"],
                                "properties": {
                                    "id": {"type": "integer"},
                                    "name": {"type": "string"},
                                },
                            },
                        },
                        "assignees": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {"login": {"type": "string"}},
                            },
                        },
                    },
                },
            },
            "changes": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["number", "status"],
                    "properties": {
                        "number": {"type": "integer"},
                        "status": {"type": "string"},
                        "issue_refs": {"type": "array", "items": _ISSUE_REF},
                        "decisions": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {
                                    "votes": {
                                        "type": "object",
                                        "additionalProperties": {
                                            "type": "array",
                                            "items": {"type": "integer"},
                                        },
                                    }
                                },
                            },
                        },
                    },
                },
            },
        },
    }

    records_descriptor = get_schema_descriptor("records")
    records_schema: dict[str, Any] = {
        SCHEMA_KEY: SCHEMA_URL,
        "$comment": f"IssueTriage records schema v{records_descriptor.version}",
        "title": "IssueRecords",
        "type": "array",
        "items": {
            "type": "object",
            "required": ["number", "updated_date", "state", "when", "assignees", "title"],
            "properties": {
                "number": {"type": "integer"},
                "updated_date": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
                "state": {
                    "enum": ["closed", "locked", "waiting", "deciding", "pending", "open"]
                },
                "when": {"type": "string"},
                "assignees": {"type": "string"},
                "title": {"type": "string"},
            },
            "additionalProperties": False,
        },
    }

    return {"snapshot": snapshot_schema, "records": records_schema}


__all__ = ["SCHEMA_KEY", "SCHEMA_URL", "get_schemas"]
