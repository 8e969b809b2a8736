"""Reading and writing tab-separated record tables."""

from __future__ import annotations

import csv
import os
from pathlib import Path

import pandas as pd

from protein_idmap.core.logger import UnifiedLogger

__all__ = ["ANNOTATED_SUFFIX", "annotated_path", "read_table", "write_table"]

logger = UnifiedLogger.get(__name__)

ANNOTATED_SUFFIX = "_annotated"


def read_table(path: str | Path) -> pd.DataFrame:
    """Load a tab-separated file with a header row, keeping every value as text."""

    resolved = Path(path)
    frame = pd.read_csv(
        resolved,
        sep="\t",
        dtype=str,
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
    )
    logger.info("table_read", path=str(resolved), rows=len(frame), columns=len(frame.columns))
    return frame


def annotated_path(path: str | Path) -> Path:
    """Return ``path`` with ``_annotated`` inserted before its extension."""

    source = Path(path)
    return source.with_name(f"{source.stem}{ANNOTATED_SUFFIX}{source.suffix}")


def write_table(df: pd.DataFrame, path: str | Path) -> Path:
    """Write ``df`` tab-separated without quoting, replacing ``path`` atomically."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_suffix(target.suffix + ".tmp")
    df.to_csv(
        tmp_path,
        sep="\t",
        index=False,
        quoting=csv.QUOTE_NONE,
        escapechar="\\",
        lineterminator="\n",
        encoding="utf-8",
    )
    os.replace(tmp_path, target)
    logger.info("table_written", path=str(target), rows=len(df), columns=len(df.columns))
    return target
