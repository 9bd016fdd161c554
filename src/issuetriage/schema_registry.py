"""Central schema registry with version metadata and filenames."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SchemaDescriptor:
    """Describes a schema artifact shipped with IssueTriage."""

    name: str
    version: str
    filename: str
    description: str


_REGISTRY: dict[str, SchemaDescriptor] = {
    "snapshot": SchemaDescriptor(
        name="snapshot",
        version="1",
        filename="issue_snapshot.schema.json",
        description="Issue and change-proposal snapshot consumed by export runs.",
    ),
    "records": SchemaDescriptor(
        name="records",
        version="1",
        filename="issue_records.schema.json",
        description="Classified issue records, one per retained issue.",
    ),
}


def get_schema_descriptor(name: str) -> SchemaDescriptor:
    """Return a copy of a schema descriptor by name."""

    try:
        descriptor = _REGISTRY[name]
    except KeyError as exc:
        raise KeyError(f"Unknown schema '{name}'") from exc
    return replace(descriptor)


def get_schema_registry() -> dict[str, SchemaDescriptor]:
    return {name: replace(descriptor) for name, descriptor in _REGISTRY.items()}


def iter_schema_descriptors() -> Iterable[SchemaDescriptor]:
    for descriptor in _REGISTRY.values():
        yield replace(descriptor)


__all__ = [
    "SchemaDescriptor",
    "get_schema_descriptor",
    "get_schema_registry",
    "iter_schema_descriptors",
]
