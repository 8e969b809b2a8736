"""DataFrame helpers for deterministic joins."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import pandas as pd
from pandas.errors import MergeError

from protein_idmap.core.exceptions import MappingTableError

__all__ = ["safe_left_join"]


def safe_left_join(
    left: pd.DataFrame,
    right: pd.DataFrame,
    *,
    on: Sequence[str] | str,
    validate: Literal["one_to_one", "1:1", "many_to_one", "m:1"] = "many_to_one",
) -> pd.DataFrame:
    """Left join keeping every row of ``left`` once, in order and with its index.

    Columns of ``left`` come first, followed by the new columns of ``right``.
    A ``right`` table with duplicated join keys raises
    :class:`MappingTableError`.
    """

    try:
        merged = left.merge(right, how="left", on=on, validate=validate, sort=False)
    except MergeError as exc:
        raise MappingTableError(f"Join keys of the right table are not unique: {exc}") from exc
    merged.index = left.index
    ordered_columns = list(dict.fromkeys([*left.columns, *right.columns]))
    return merged.loc[:, [column for column in ordered_columns if column in merged.columns]]
