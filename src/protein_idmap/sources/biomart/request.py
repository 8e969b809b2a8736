"""Builders for BioMart martservice requests."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from xml.etree import ElementTree as ET

__all__ = ["build_query_xml", "normalize_host", "service_url"]

_XML_PREAMBLE = '<?xml version="1.0" encoding="UTF-8"?><!DOCTYPE Query>'


def normalize_host(host: str) -> str:
    """Return ``host`` with a scheme, defaulting to HTTPS for bare host names."""

    value = host.strip().rstrip("/")
    if not value.startswith(("http://", "https://")):
        value = f"https://{value}"
    return value


def service_url(host: str, path: str = "/biomart/martservice") -> str:
    return f"{normalize_host(host)}/{path.strip('/')}"


def build_query_xml(
    dataset: str,
    *,
    attributes: Sequence[str],
    filter_name: str,
    values: Iterable[str],
    virtual_schema: str = "default",
) -> str:
    """Build a TSV query returning ``attributes`` for rows matching ``values``.

    The query asks for a completion stamp so truncated responses can be
    detected.
    """

    query = ET.Element(
        "Query",
        {
            "virtualSchemaName": virtual_schema,
            "formatter": "TSV",
            "header": "0",
            "uniqueRows": "1",
            "count": "",
            "completionStamp": "1",
            "datasetConfigVersion": "0.6",
        },
    )
    dataset_node = ET.SubElement(query, "Dataset", {"name": dataset, "interface": "default"})
    ET.SubElement(dataset_node, "Filter", {"name": filter_name, "value": ",".join(values)})
    for attribute in attributes:
        ET.SubElement(dataset_node, "Attribute", {"name": attribute})
    return _XML_PREAMBLE + ET.tostring(query, encoding="unicode")
