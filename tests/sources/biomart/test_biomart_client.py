"""Tests for BioMartClient with a mocked session."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from protein_idmap.config.models import HTTPClientConfig, MartConfig
from protein_idmap.core.exceptions import ServiceError
from protein_idmap.sources.biomart.client import BioMartClient


@pytest.mark.unit
class TestBioMartClient:
    def test_url_from_bare_host(self, biomart_session):
        client = BioMartClient(MartConfig(host="dec2017.archive.ensembl.org"), session=biomart_session)

        assert client.url == "https://dec2017.archive.ensembl.org/biomart/martservice"

    def test_list_marts(self, biomart_session):
        client = BioMartClient(session=biomart_session)

        marts = client.list_marts()

        assert [mart.name for mart in marts] == ["ENSEMBL_MART_ENSEMBL", "ENSEMBL_MART_MOUSE"]
        kwargs = biomart_session.request.call_args[1]
        assert kwargs["params"] == {"type": "registry"}

    def test_list_datasets_uses_configured_mart(self, biomart_session):
        client = BioMartClient(session=biomart_session)

        datasets = client.list_datasets()

        assert datasets[0].name == "hsapiens_gene_ensembl"
        assert datasets[0].version == "GRCh38.p14"
        kwargs = biomart_session.request.call_args[1]
        assert kwargs["params"] == {"type": "datasets", "mart": "ENSEMBL_MART_ENSEMBL"}

    def test_query_batches_values(self, biomart_session):
        biomart_session.query_rows = {
            "P1": [("P1", "G1")],
            "P2": [("P2", "G2"), ("P2", "G2B")],
            "P3": [("P3", "G3")],
        }
        client = BioMartClient(http=HTTPClientConfig(batch_size=2), session=biomart_session)

        rows = client.query(
            "hsapiens_gene_ensembl",
            attributes=("uniprotswissprot", "hgnc_symbol"),
            filter_name="uniprotswissprot",
            values=["P1", "P2", "P3"],
        )

        assert rows == [("P1", "G1"), ("P2", "G2"), ("P2", "G2B"), ("P3", "G3")]
        assert biomart_session.request.call_count == 2
        method, _ = biomart_session.request.call_args[0]
        assert method == "POST"

    def test_query_error_body_raises(self, response_factory):
        session = MagicMock()
        session.request.return_value = response_factory("Query ERROR: caught BioMart::Exception")
        client = BioMartClient(session=session)

        with pytest.raises(ServiceError):
            client.query("hsapiens_gene_ensembl", attributes=("a", "b"), filter_name="a", values=["P1"])

    def test_close_closes_session(self):
        session = MagicMock()
        BioMartClient(session=session).close()

        session.close.assert_called_once()
