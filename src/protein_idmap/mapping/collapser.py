"""Collapsing of one-to-many identifier mappings."""

from __future__ import annotations

from collections.abc import Iterable

from protein_idmap.core.logger import UnifiedLogger

from .resolver import MappingPair

__all__ = ["collapse_mappings"]

logger = UnifiedLogger.get(__name__)


def collapse_mappings(pairs: Iterable[MappingPair], *, separator: str = "/") -> dict[str, str]:
    """Reduce ``pairs`` to a single target value per source key.

    Keys with several targets get them joined by ``separator`` in the order
    the service returned them. Pairs with an empty target carry no mapping
    and are dropped. The returned dict preserves first-seen key order.
    """

    grouped: dict[str, list[str]] = {}
    dropped = 0
    for source, target in pairs:
        if target is None or target == "":
            dropped += 1
            continue
        values = grouped.setdefault(source, [])
        if target not in values:
            values.append(target)

    collapsed = {source: separator.join(values) for source, values in grouped.items()}
    multiple = sum(1 for values in grouped.values() if len(values) > 1)
    logger.info(
        "mapping_collapsed",
        keys=len(collapsed),
        multi_valued_keys=multiple,
        empty_targets_dropped=dropped,
    )
    return collapsed
