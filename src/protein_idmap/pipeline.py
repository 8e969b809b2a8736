"""Entry operations: annotate a record table with converted identifiers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import uuid4

import pandas as pd
import requests
from pydantic import ValidationError

from protein_idmap.config.models import AnnotationConfig
from protein_idmap.core.exceptions import ConfigurationError
from protein_idmap.core.logger import UnifiedLogger
from protein_idmap.io import annotated_path, read_table, write_table
from protein_idmap.mapping.collapser import collapse_mappings
from protein_idmap.mapping.extractor import extract_query_ids
from protein_idmap.mapping.merger import UnresolvedReport, merge_annotations
from protein_idmap.mapping.resolver import Lookup, resolve_mappings
from protein_idmap.sources.biomart.connection import load_mart

__all__ = [
    "AnnotationResult",
    "add_gene_symbols",
    "annotate",
    "build_config",
    "convert_protein_ids",
]

logger = UnifiedLogger.get(__name__)


@dataclass(slots=True)
class AnnotationResult:
    """Artefacts of one annotation run."""

    dataframe: pd.DataFrame
    mapping: dict[str, str]
    query_ids: list[str]
    unresolved: UnresolvedReport
    run_id: str


def build_config(config: AnnotationConfig | None = None, **overrides: Any) -> AnnotationConfig:
    """Return ``config`` (or the defaults) with the non-``None`` ``overrides`` applied.

    ``species``, ``host`` and ``mart`` are routed to the ``mart`` section.
    """

    base = config or AnnotationConfig()
    values = {key: value for key, value in overrides.items() if value is not None}
    mart_values = {key: values.pop(key) for key in ("species", "host", "mart") if key in values}
    payload = base.model_dump()
    payload.update(values)
    payload["mart"] = {**payload["mart"], **mart_values}
    try:
        return AnnotationConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid annotation settings: {exc}") from exc


def annotate(
    data_table: pd.DataFrame,
    config: AnnotationConfig | None = None,
    *,
    lookup: Lookup | None = None,
    session: requests.Session | None = None,
    report_dir: Path | None = None,
) -> AnnotationResult:
    """Convert the identifiers of ``data_table`` and return all run artefacts.

    ``lookup`` replaces the BioMart connection, e.g. with a local mapping
    source. Without it a connection is opened from ``config.mart``.
    """

    cfg = config or AnnotationConfig()
    run_id = str(uuid4())

    with UnifiedLogger.scoped(run_id=run_id, component="annotate"):
        with UnifiedLogger.stage("extract"):
            query_ids = extract_query_ids(
                data_table,
                cfg.column_name,
                separator=cfg.separator,
                contaminant_prefix=cfg.contaminant_prefix,
            )

        connection = None
        if lookup is None:
            with UnifiedLogger.stage("connect"):
                connection = load_mart(
                    cfg.mart.species,
                    cfg.mart.host,
                    cfg.mart.mart,
                    verbose=cfg.verbose,
                    http=cfg.http,
                    session=session,
                    report_dir=report_dir,
                    virtual_schema=cfg.mart.virtual_schema,
                )
            lookup = connection

        try:
            with UnifiedLogger.stage("resolve"):
                pairs = resolve_mappings(
                    lookup,
                    query_ids,
                    source_attribute=cfg.source_attribute,
                    target_attribute=cfg.target_attribute,
                )
        finally:
            if connection is not None:
                connection.close()

        with UnifiedLogger.stage("collapse"):
            mapping = collapse_mappings(pairs, separator=cfg.separator)

        with UnifiedLogger.stage("merge"):
            merged = merge_annotations(
                data_table,
                mapping,
                column_name=cfg.column_name,
                source_attribute=cfg.source_attribute,
                target_attribute=cfg.target_attribute,
                separator=cfg.separator,
                copy_unconverted=cfg.copy_unconverted,
                max_reported=cfg.max_reported,
            )

        logger.info(
            "annotation_completed",
            rows=len(merged.dataframe),
            query_ids=len(query_ids),
            mapped_keys=len(mapping),
            unresolved_rows=merged.unresolved.total_rows,
        )

    return AnnotationResult(
        dataframe=merged.dataframe,
        mapping=mapping,
        query_ids=query_ids,
        unresolved=merged.unresolved,
        run_id=run_id,
    )


def convert_protein_ids(
    data_table: pd.DataFrame | str | Path,
    *,
    column_name: str | None = None,
    species: str | None = None,
    host: str | None = None,
    mart: str | None = None,
    source_attribute: str | None = None,
    target_attribute: str | None = None,
    separator: str | None = None,
    copy_unconverted: bool | None = None,
    verbose: bool | None = None,
    config: AnnotationConfig | None = None,
    lookup: Lookup | None = None,
    output_path: str | Path | None = None,
) -> pd.DataFrame | Path:
    """Add a column of converted identifiers to a table or a tab-separated file.

    Arguments left as ``None`` take their value from ``config`` (or the
    defaults: column ``Protein``, ``hsapiens_gene_ensembl`` on
    ``https://www.ensembl.org``, ``uniprotswissprot`` to ``hgnc_symbol``,
    separator ``/``, unconverted identifiers copied).

    A DataFrame input returns the annotated DataFrame with the new column
    first. A file input is written to ``<name>_annotated.<ext>`` (or
    ``output_path``) and the written path is returned.
    """

    cfg = build_config(
        config,
        column_name=column_name,
        species=species,
        host=host,
        mart=mart,
        source_attribute=source_attribute,
        target_attribute=target_attribute,
        separator=separator,
        copy_unconverted=copy_unconverted,
        verbose=verbose,
    )

    if isinstance(data_table, pd.DataFrame):
        return annotate(data_table, cfg, lookup=lookup).dataframe

    source_path = Path(data_table)
    frame = read_table(source_path)
    result = annotate(frame, cfg, lookup=lookup)
    return write_table(result.dataframe, output_path or annotated_path(source_path))


def add_gene_symbols(
    data_table: pd.DataFrame,
    mapping_table: pd.DataFrame | Mapping[str, str],
    *,
    column_name: str = "Protein",
    source_attribute: str = "uniprotswissprot",
    target_attribute: str = "hgnc_symbol",
    separator: str = "/",
    copy_unconverted: bool = True,
) -> pd.DataFrame:
    """Add gene symbols from an existing mapping table to ``data_table``.

    ``mapping_table`` must have unique ``source_attribute`` values, as
    produced by :func:`~protein_idmap.mapping.collapser.collapse_mappings`.
    """

    return merge_annotations(
        data_table,
        mapping_table,
        column_name=column_name,
        source_attribute=source_attribute,
        target_attribute=target_attribute,
        separator=separator,
        copy_unconverted=copy_unconverted,
    ).dataframe
