from __future__ import annotations

import pytest

from protein_idmap.mapping.collapser import collapse_mappings


@pytest.mark.unit
def test_multiple_targets_joined_in_service_order():
    assert collapse_mappings([("A", "X"), ("A", "Y")]) == {"A": "X/Y"}
    assert collapse_mappings([("A", "Y"), ("A", "X")]) == {"A": "Y/X"}


@pytest.mark.unit
def test_single_target_unchanged_and_key_order_kept():
    collapsed = collapse_mappings([("B", "GENE2"), ("A", "GENE1"), ("B", "GENE3")], separator=";")

    assert collapsed == {"B": "GENE2;GENE3", "A": "GENE1"}
    assert list(collapsed) == ["B", "A"]


@pytest.mark.unit
def test_empty_targets_and_duplicates_dropped():
    collapsed = collapse_mappings([("A", ""), ("B", "X"), ("B", "X"), ("B", "")])

    assert collapsed == {"B": "X"}


@pytest.mark.unit
def test_empty_input():
    assert collapse_mappings([]) == {}
