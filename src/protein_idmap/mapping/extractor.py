"""Extraction of the atomic identifiers to send to the annotation service."""

from __future__ import annotations

import pandas as pd

from protein_idmap.core.exceptions import ConfigurationError
from protein_idmap.core.logger import UnifiedLogger

from .identifiers import (
    CONTAMINANT_PREFIX,
    is_composite,
    is_contaminant,
    normalize_identifier,
    strip_count_prefix,
)

__all__ = ["extract_query_ids", "require_column"]

logger = UnifiedLogger.get(__name__)


def require_column(df: pd.DataFrame, column: str) -> None:
    """Raise :class:`ConfigurationError` when ``column`` is absent from ``df``."""

    if column not in df.columns:
        raise ConfigurationError.missing_column(column, [str(name) for name in df.columns])


def extract_query_ids(
    df: pd.DataFrame,
    column: str,
    *,
    separator: str = "/",
    contaminant_prefix: str = CONTAMINANT_PREFIX,
) -> list[str]:
    """Return the distinct atomic identifiers found in ``df[column]``.

    Composite entries lose their leading count token and are split on
    ``separator``. Contaminant tokens and empty strings are left out. The
    result keeps first-seen order: simple identifiers, then tokens taken
    from composite entries.
    """

    require_column(df, column)

    raw_ids = list(dict.fromkeys(normalize_identifier(value) for value in df[column].tolist()))
    simple = [value for value in raw_ids if not is_composite(value, separator)]
    composite = [value for value in raw_ids if is_composite(value, separator)]

    composite_tokens: list[str] = []
    for value in composite:
        composite_tokens.extend(strip_count_prefix(value, separator).split(separator))

    query_ids: dict[str, None] = {}
    excluded = 0
    for token in [*simple, *composite_tokens]:
        if not token:
            continue
        if is_contaminant(token, contaminant_prefix):
            excluded += 1
            continue
        query_ids.setdefault(token, None)

    logger.info(
        "query_ids_extracted",
        column=column,
        distinct_values=len(raw_ids),
        composite_values=len(composite),
        contaminants_excluded=excluded,
        query_ids=len(query_ids),
    )
    return list(query_ids)
