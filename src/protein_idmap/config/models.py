"""Configuration models for identifier annotation runs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt, field_validator

__all__ = ["HTTPClientConfig", "MartConfig", "AnnotationConfig"]


class HTTPClientConfig(BaseModel):
    """Settings for the HTTP client talking to the annotation service."""

    model_config = ConfigDict(extra="forbid")

    timeout_sec: PositiveFloat = Field(
        default=300.0, description="Total request timeout in seconds."
    )
    connect_timeout_sec: PositiveFloat = Field(
        default=15.0,
        description="Connection timeout in seconds.",
    )
    headers: Mapping[str, str] = Field(
        default_factory=lambda: {
            "User-Agent": "protein-idmap/0.1 (BioMartClient)",
            "Accept-Encoding": "gzip, deflate",
        },
        description="Default headers sent with each request.",
    )
    batch_size: PositiveInt = Field(
        default=500,
        description="Maximum number of filter values sent in one lookup request.",
    )


class MartConfig(BaseModel):
    """Location of the BioMart dataset used for lookups."""

    model_config = ConfigDict(extra="forbid")

    species: str = Field(
        default="hsapiens_gene_ensembl",
        description="BioMart dataset name, e.g. 'mmusculus_gene_ensembl'.",
    )
    host: str = Field(
        default="https://www.ensembl.org",
        description="Ensembl host, archived hosts such as 'dec2017.archive.ensembl.org' work too.",
    )
    mart: str = Field(default="ENSEMBL_MART_ENSEMBL", description="BioMart mart name.")
    path: str = Field(default="/biomart/martservice", description="Mart service path on the host.")
    virtual_schema: str | None = Field(
        default=None,
        description="Virtual schema of the mart; taken from the service registry when unset.",
    )

    @field_validator("species", "host", "mart")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class AnnotationConfig(BaseModel):
    """Full configuration of one annotation run."""

    model_config = ConfigDict(extra="forbid")

    column_name: str = Field(
        default="Protein",
        description="Column holding the protein identifiers to convert.",
    )
    source_attribute: str = Field(
        default="uniprotswissprot",
        description="Type of the original identifiers, e.g. 'ensembl_peptide_id'.",
    )
    target_attribute: str = Field(
        default="hgnc_symbol",
        description="Type of the converted identifiers, e.g. 'mgi_symbol'.",
    )
    separator: Annotated[str, Field(min_length=1)] = Field(
        default="/",
        description="Separator between protein identifiers of shared peptides.",
    )
    copy_unconverted: bool = Field(
        default=True,
        description="Copy identifiers that cannot be converted into the target column.",
    )
    verbose: bool = Field(
        default=False,
        description="Write a file with the version of the database used.",
    )
    contaminant_prefix: str = Field(default="CONT_")
    max_reported: PositiveInt = Field(
        default=20,
        description="Maximum number of unconverted identifiers listed in the diagnostic.",
    )
    mart: MartConfig = Field(default_factory=MartConfig)
    http: HTTPClientConfig = Field(default_factory=HTTPClientConfig)

    @field_validator("separator")
    @classmethod
    def _separator_not_digit(cls, value: str) -> str:
        if value.isdigit():
            raise ValueError("separator must not consist of digits")
        return value
