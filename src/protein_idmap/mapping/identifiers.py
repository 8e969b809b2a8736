"""Parsing rules for composite protein identifier strings.

A composite identifier lists the proteins a shared peptide maps to, joined by
a separator and optionally prefixed by a protein count, e.g.
``"2/P63261/P60709"``.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

__all__ = [
    "CONTAMINANT_PREFIX",
    "MAX_COUNT_DIGITS",
    "is_composite",
    "is_contaminant",
    "normalize_identifier",
    "split_composite",
    "strip_count_prefix",
]

CONTAMINANT_PREFIX = "CONT_"
MAX_COUNT_DIGITS = 3


def normalize_identifier(value: Any) -> str:
    """Return ``value`` as an identifier string, mapping missing values to ``""``."""

    if value is None:
        return ""
    if not isinstance(value, str) and pd.isna(value):
        return ""
    return str(value)


def is_composite(identifier: str, separator: str) -> bool:
    return separator in identifier


def is_contaminant(token: str, prefix: str = CONTAMINANT_PREFIX) -> bool:
    return bool(prefix) and token.startswith(prefix)


def strip_count_prefix(identifier: str, separator: str, *, max_digits: int | None = None) -> str:
    """Drop a leading numeric count token such as ``"2/"``.

    ``max_digits`` limits the length of the count token; without it any
    all-digit leading token is removed.
    """

    head, sep, rest = identifier.partition(separator)
    if not sep or not head.isascii() or not head.isdigit():
        return identifier
    if max_digits is not None and len(head) > max_digits:
        return identifier
    return rest


def split_composite(
    identifier: str,
    separator: str,
    *,
    max_count_digits: int | None = MAX_COUNT_DIGITS,
) -> list[str]:
    """Split a composite identifier into atomic tokens after removing the count token."""

    return strip_count_prefix(identifier, separator, max_digits=max_count_digits).split(separator)
