"""Parsers for BioMart martservice responses."""

from __future__ import annotations

from dataclasses import dataclass
from xml.etree import ElementTree as ET

from protein_idmap.core.exceptions import ServiceError

__all__ = [
    "COMPLETION_STAMP",
    "DatasetInfo",
    "MartInfo",
    "parse_datasets",
    "parse_query_rows",
    "parse_registry",
]

COMPLETION_STAMP = "[success]"


@dataclass(frozen=True, slots=True)
class MartInfo:
    name: str
    display_name: str
    virtual_schema: str = "default"


@dataclass(frozen=True, slots=True)
class DatasetInfo:
    name: str
    description: str
    version: str | None = None


def _raise_on_error(text: str) -> None:
    stripped = text.lstrip()
    if stripped.startswith("Query ERROR") or stripped.startswith("<html") or stripped.startswith("<!DOCTYPE html"):
        first_line = stripped.splitlines()[0] if stripped else ""
        raise ServiceError(f"BioMart returned an error: {first_line[:200]}")


def parse_registry(text: str) -> list[MartInfo]:
    """Parse the ``type=registry`` XML into mart descriptions."""

    _raise_on_error(text)
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ServiceError(f"Malformed BioMart registry: {exc}") from exc

    marts: list[MartInfo] = []
    for node in root.iter():
        if node.tag not in {"MartURLLocation", "MartDBLocation"}:
            continue
        name = node.get("name")
        if not name:
            continue
        marts.append(
            MartInfo(
                name=name,
                display_name=node.get("displayName") or name,
                virtual_schema=node.get("serverVirtualSchema") or "default",
            )
        )
    return marts


def parse_datasets(text: str) -> list[DatasetInfo]:
    """Parse the ``type=datasets`` TSV listing of a mart."""

    _raise_on_error(text)
    datasets: list[DatasetInfo] = []
    for line in text.splitlines():
        fields = line.split("\t")
        if len(fields) < 3 or not fields[1].strip():
            continue
        version = fields[4].strip() if len(fields) > 4 and fields[4].strip() else None
        datasets.append(DatasetInfo(name=fields[1].strip(), description=fields[2].strip(), version=version))
    return datasets


def parse_query_rows(text: str, *, columns: int) -> list[tuple[str, ...]]:
    """Parse a TSV query result with a completion stamp into row tuples.

    Rows keep service order. Short rows are padded with empty strings.
    """

    _raise_on_error(text)
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines or lines[-1].strip() != COMPLETION_STAMP:
        raise ServiceError("BioMart response is incomplete (missing completion stamp)")

    rows: list[tuple[str, ...]] = []
    for line in lines[:-1]:
        if not line:
            continue
        fields = line.split("\t")
        fields.extend([""] * (columns - len(fields)))
        rows.append(tuple(fields[:columns]))
    return rows
