"""Merging of resolved gene symbols back onto the record table.

Rows are first joined on their exact identifier. Rows of shared peptides
whose composite identifier has no direct mapping are then resolved token by
token, so that ``"2/P63261/P60709"`` becomes ``"P63261/ACTB"`` when only
``P60709`` maps to ``ACTB``. Rows still without a value are reported and,
depending on ``copy_unconverted``, receive their own identifier.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

import pandas as pd

from protein_idmap.core.exceptions import ConfigurationError
from protein_idmap.core.frame import safe_left_join
from protein_idmap.core.logger import UnifiedLogger

from .assembler import assemble_output
from .extractor import require_column
from .identifiers import normalize_identifier, split_composite
from .schemas import mapping_table_to_dict

__all__ = [
    "DEFAULT_MAX_REPORTED",
    "MergeResult",
    "UnresolvedReport",
    "merge_annotations",
    "resolve_composite",
]

logger = UnifiedLogger.get(__name__)

DEFAULT_MAX_REPORTED = 20

_KEY_COLUMN = "__protein_idmap_key__"


@dataclass(frozen=True, slots=True)
class UnresolvedReport:
    """Identifiers left without a converted value after the merge."""

    total_rows: int
    identifiers: tuple[str, ...]
    copied: bool
    max_reported: int = DEFAULT_MAX_REPORTED

    @property
    def shown(self) -> tuple[str, ...]:
        return self.identifiers[: self.max_reported]

    @property
    def message(self) -> str:
        if not self.total_rows:
            return ""
        action = " and will be copied" if self.copied else ""
        listed = ", ".join(self.shown)
        if len(self.identifiers) > self.max_reported:
            return (
                f"The following {self.total_rows} identifiers were not converted{action} "
                f"(the first {self.max_reported} are shown): {listed}"
            )
        return f"The following {self.total_rows} identifiers were not converted{action}: {listed}"


@dataclass(slots=True)
class MergeResult:
    """Annotated table together with the unresolved report."""

    dataframe: pd.DataFrame
    unresolved: UnresolvedReport
    composite_resolved: dict[str, str] = field(default_factory=dict)


def resolve_composite(
    identifier: str,
    mapping: Mapping[str, str],
    *,
    separator: str = "/",
    copy_unconverted: bool = True,
) -> str | None:
    """Convert the tokens of a composite identifier.

    Mapped tokens are replaced by their target value in place. Unmapped
    tokens are kept when ``copy_unconverted`` is true and dropped otherwise.
    Returns ``None`` when no token maps.
    """

    tokens = split_composite(identifier, separator)
    if not any(token in mapping for token in tokens):
        return None
    converted = [
        mapping[token] if token in mapping else token
        for token in tokens
        if token in mapping or copy_unconverted
    ]
    return separator.join(converted)


def merge_annotations(
    df: pd.DataFrame,
    mapping: pd.DataFrame | Mapping[str, str],
    *,
    column_name: str = "Protein",
    source_attribute: str = "uniprotswissprot",
    target_attribute: str = "hgnc_symbol",
    separator: str = "/",
    copy_unconverted: bool = True,
    max_reported: int = DEFAULT_MAX_REPORTED,
) -> MergeResult:
    """Add ``target_attribute`` to ``df`` using ``mapping`` and place it first.

    ``mapping`` is either a collapsed mapping table with the columns
    ``source_attribute`` and ``target_attribute`` or a ready ``{source:
    target}`` dict. An existing ``target_attribute`` column in ``df`` is
    replaced.
    """

    require_column(df, column_name)
    if target_attribute == column_name:
        raise ConfigurationError(
            f"Target attribute {target_attribute!r} would overwrite the identifier column",
            column=column_name,
            available_columns=[str(name) for name in df.columns],
        )

    lookup = mapping_table_to_dict(
        mapping,
        source_attribute=source_attribute,
        target_attribute=target_attribute,
    )

    working = df.drop(columns=[target_attribute]) if target_attribute in df.columns else df
    keys = working[column_name].map(normalize_identifier).astype(object)

    right = pd.DataFrame(
        {_KEY_COLUMN: list(lookup.keys()), target_attribute: list(lookup.values())},
        dtype=object,
    )
    joined = safe_left_join(working.assign(**{_KEY_COLUMN: keys}), right, on=_KEY_COLUMN)
    target = joined.pop(target_attribute).where(lambda values: values.notna(), "").astype(object)
    joined = joined.drop(columns=[_KEY_COLUMN])
    direct_hits = int((target != "").sum())

    pending = (target == "") & keys.str.contains(separator, regex=False).astype(bool)
    resolutions: dict[str, str] = {}
    for identifier in dict.fromkeys(keys[pending].tolist()):
        resolved = resolve_composite(
            identifier,
            lookup,
            separator=separator,
            copy_unconverted=copy_unconverted,
        )
        if resolved:
            resolutions[identifier] = resolved

    # Single pass after all composites are resolved: rows sharing an identifier share its value.
    if resolutions:
        shared = pending & keys.isin(resolutions.keys())
        target = target.mask(shared, keys.map(resolutions))

    unresolved_mask = target == ""
    report = UnresolvedReport(
        total_rows=int(unresolved_mask.sum()),
        identifiers=tuple(dict.fromkeys(keys[unresolved_mask].tolist())),
        copied=copy_unconverted,
        max_reported=max_reported,
    )
    if report.total_rows:
        logger.warning(
            "identifiers_not_converted",
            total=report.total_rows,
            distinct=len(report.identifiers),
            shown=list(report.shown),
            copy_unconverted=copy_unconverted,
            detail=report.message,
        )
        if copy_unconverted:
            target = target.mask(unresolved_mask, keys)

    joined[target_attribute] = target
    logger.info(
        "annotations_merged",
        rows=len(joined),
        direct_hits=direct_hits,
        composite_resolved=len(resolutions),
        unresolved_rows=report.total_rows,
    )
    return MergeResult(
        dataframe=assemble_output(joined, target_attribute),
        unresolved=report,
        composite_resolved=resolutions,
    )
