from __future__ import annotations

import pytest

from protein_idmap.core.exceptions import (
    ConfigurationError,
    MappingTableError,
    ProteinIdMapError,
    ServiceError,
)


@pytest.mark.unit
def test_missing_column_lists_available_columns():
    error = ConfigurationError.missing_column("Accession", ["Sequence", "Protein"])

    assert str(error) == (
        "Column name does not exist in data: 'Accession'. Available columns: Sequence, Protein"
    )
    assert error.column == "Accession"
    assert error.available_columns == ["Sequence", "Protein"]


@pytest.mark.unit
@pytest.mark.parametrize("error_type", [ConfigurationError, ServiceError, MappingTableError])
def test_errors_share_base_class(error_type):
    assert issubclass(error_type, ProteinIdMapError)


@pytest.mark.unit
def test_service_error_carries_request_details():
    error = ServiceError("failed", url="https://www.ensembl.org", status_code=500)

    assert error.url == "https://www.ensembl.org"
    assert error.status_code == 500
