"""Batch lookup of identifiers against an annotation service."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeAlias

from protein_idmap.core.logger import UnifiedLogger

__all__ = ["Lookup", "MappingPair", "resolve_mappings"]

logger = UnifiedLogger.get(__name__)

MappingPair: TypeAlias = tuple[str, str]
Lookup: TypeAlias = Callable[[str, str, Sequence[str]], Iterable[MappingPair]]
"""``lookup(source_attribute, target_attribute, keys) -> (key, value) pairs``."""


def resolve_mappings(
    lookup: Lookup,
    query_ids: Sequence[str],
    *,
    source_attribute: str,
    target_attribute: str,
) -> list[MappingPair]:
    """Return the raw ``(source, target)`` pairs the service reports for ``query_ids``.

    Pairs are returned in service order without filtering; failures of
    ``lookup`` propagate unchanged.
    """

    if not query_ids:
        logger.info("mapping_lookup_skipped", reason="empty_query")
        return []

    pairs = [(str(key), str(value)) for key, value in lookup(source_attribute, target_attribute, list(query_ids))]
    logger.info(
        "mapping_lookup_completed",
        source_attribute=source_attribute,
        target_attribute=target_attribute,
        keys=len(query_ids),
        pairs=len(pairs),
    )
    return pairs
