"""Pandera schema for collapsed mapping tables."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd
import pandera.pandas as pa
from pandera.errors import SchemaError, SchemaErrors

from protein_idmap.core.exceptions import MappingTableError

__all__ = ["mapping_table_schema", "validate_mapping_table", "mapping_table_to_dict"]


def mapping_table_schema(source_attribute: str, target_attribute: str) -> pa.DataFrameSchema:
    """Schema of a mapping table: unique non-null source keys and optional string targets."""

    return pa.DataFrameSchema(
        columns={
            source_attribute: pa.Column(str, nullable=False, unique=True, coerce=True),
            target_attribute: pa.Column(str, nullable=True, coerce=True),
        },
        strict="filter",
        name="mapping_table",
    )


def validate_mapping_table(
    table: pd.DataFrame,
    *,
    source_attribute: str,
    target_attribute: str,
) -> pd.DataFrame:
    missing = [name for name in (source_attribute, target_attribute) if name not in table.columns]
    if missing:
        raise MappingTableError(
            f"Mapping table lacks column(s) {', '.join(missing)}; "
            f"available: {', '.join(str(name) for name in table.columns)}"
        )
    schema = mapping_table_schema(source_attribute, target_attribute)
    try:
        return schema.validate(table, lazy=True)
    except (SchemaError, SchemaErrors) as exc:
        raise MappingTableError(f"Invalid mapping table: {exc}") from exc


def mapping_table_to_dict(
    table: pd.DataFrame | Mapping[str, str | None],
    *,
    source_attribute: str,
    target_attribute: str,
) -> dict[str, str]:
    """Return the mapping as a ``{source: target}`` dict, validating tables first.

    Entries with a missing or empty target carry no mapping and are left
    out, so their identifiers stay unresolved.
    """

    if isinstance(table, pd.DataFrame):
        validated = validate_mapping_table(
            table,
            source_attribute=source_attribute,
            target_attribute=target_attribute,
        )
        has_target = table[target_attribute].notna().to_numpy()
        pairs: Iterable[tuple[str, object]] = zip(
            validated.loc[has_target, source_attribute].tolist(),
            validated.loc[has_target, target_attribute].tolist(),
            strict=True,
        )
    else:
        pairs = ((str(key), value) for key, value in table.items() if not _is_missing(value))
    return {source: str(target) for source, target in pairs if str(target) != ""}


def _is_missing(value: object) -> bool:
    return value is None or (not isinstance(value, str) and bool(pd.isna(value)))
