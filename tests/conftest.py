"""Shared pytest fixtures for protein_idmap tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any
from unittest.mock import MagicMock
from xml.etree import ElementTree as ET

import pandas as pd
import pytest
from requests import Response

from protein_idmap.core.logger import UnifiedLogger

REGISTRY_XML = """<?xml version="1.0" encoding="UTF-8"?>
<MartRegistry>
  <MartURLLocation database="ensembl_mart_110" default="1" displayName="Ensembl Genes 110"
    host="www.ensembl.org" name="ENSEMBL_MART_ENSEMBL" path="/biomart/martservice"
    port="443" serverVirtualSchema="default" visible="1" />
  <MartURLLocation database="mouse_mart_110" default="0" displayName="Mouse strains 110"
    host="www.ensembl.org" name="ENSEMBL_MART_MOUSE" path="/biomart/martservice"
    port="443" serverVirtualSchema="default" visible="1" />
</MartRegistry>
"""

DATASETS_TSV = (
    "\n"
    "TableSet\thsapiens_gene_ensembl\tHuman genes (GRCh38.p14)\t1\tGRCh38.p14\t200\t50000\tdefault\t2023-05-01\n"
    "TableSet\tmmusculus_gene_ensembl\tMouse genes (GRCm39)\t1\tGRCm39\t200\t50000\tdefault\t2023-05-01\n"
)


@pytest.fixture(autouse=True)
def _isolate_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    UnifiedLogger.reset()
    yield
    UnifiedLogger.reset()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def proteomics_frame() -> pd.DataFrame:
    """Peptide-level table with simple, composite and contaminant identifiers."""

    return pd.DataFrame(
        {
            "Sequence": ["AAK", "LLR", "GHK", "VVK", "TTR", "MMK"],
            "Protein": [
                "P63261",
                "2/P63261/P60709",
                "CONT_BOVINE",
                "",
                "Q99999",
                "P60709",
            ],
            "Intensity": ["10", "20", "30", "40", "50", "60"],
        }
    )


@pytest.fixture()
def stub_lookup() -> Callable[[Mapping[str, Sequence[str]]], Any]:
    """Factory for lookup callables answering from an in-memory table.

    The returned callable records each call in its ``calls`` attribute.
    """

    def _factory(table: Mapping[str, Sequence[str]]) -> Any:
        calls: list[tuple[str, str, list[str]]] = []

        def _lookup(source: str, target: str, keys: Sequence[str]) -> list[tuple[str, str]]:
            calls.append((source, target, list(keys)))
            return [(key, value) for key in keys for value in table.get(key, ())]

        _lookup.calls = calls  # type: ignore[attr-defined]
        return _lookup

    return _factory


def make_response(text: str, status_code: int = 200) -> MagicMock:
    """Build a ``requests.Response`` double carrying ``text``."""

    response = MagicMock(spec=Response)
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture()
def biomart_session() -> MagicMock:
    """Session mock serving registry, datasets and query responses.

    Query answers come from ``session.query_rows``, a mapping of filter value
    to attribute rows. ``session.registry_xml`` and ``session.datasets_tsv``
    hold the listing bodies.
    """

    session = MagicMock()
    session.headers = {}
    session.query_rows = {}
    session.registry_xml = REGISTRY_XML
    session.datasets_tsv = DATASETS_TSV

    def _request(method: str, url: str, **kwargs: Any) -> MagicMock:
        params = kwargs.get("params") or {}
        if params.get("type") == "registry":
            return make_response(session.registry_xml)
        if params.get("type") == "datasets":
            return make_response(session.datasets_tsv)
        query = (kwargs.get("data") or {}).get("query", "")
        node = ET.fromstring(query[query.index("<Query") :]).find("Dataset/Filter")
        values = node.get("value", "").split(",") if node is not None else []
        lines = ["\t".join(row) for value in values for row in session.query_rows.get(value, ())]
        return make_response("\n".join([*lines, "[success]"]) + "\n")

    session.request.side_effect = _request
    return session


@pytest.fixture()
def response_factory() -> Callable[..., MagicMock]:
    return make_response


@pytest.fixture()
def registry_xml() -> str:
    return REGISTRY_XML
