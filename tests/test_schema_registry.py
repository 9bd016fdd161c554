from jsonschema import Draft7Validator

from issuetriage.schema_registry import get_schema_descriptor, get_schema_registry
from issuetriage.schemas import get_schemas


def test_schema_registry_contains_expected_entries() -> None:
    registry = get_schema_registry()
    assert set(registry) == {"snapshot", "records"}
    assert registry["records"].filename == "issue_records.schema.json"


def test_get_schema_descriptor_returns_copy() -> None:
    first = get_schema_descriptor("snapshot")
    assert first == get_schema_descriptor("snapshot")
    assert first is not get_schema_descriptor("snapshot")


def test_schemas_are_valid_draft7() -> None:
    for schema in get_schemas().values():
        Draft7Validator.check_schema(schema)


def test_records_schema_accepts_emitted_rows() -> None:
    validator = Draft7Validator(get_schemas()["records"])
    record = {
        "number": 100,
        "updated_date": "2019-05-01",
        "state": "open",
        "when": "help",
        "assignees": "",
        "title": "t",
    }
    assert list(validator.iter_errors([record])) == []
    assert list(validator.iter_errors([{**record, "state": "weird"}]))
