"""Final column ordering of the annotated table."""

from __future__ import annotations

import pandas as pd

__all__ = ["assemble_output"]


def assemble_output(df: pd.DataFrame, target_column: str) -> pd.DataFrame:
    """Return ``df`` with ``target_column`` moved to the front."""

    if target_column not in df.columns:
        raise KeyError(target_column)
    remaining = [column for column in df.columns if column != target_column]
    return df.loc[:, [target_column, *remaining]]
