from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from protein_idmap.io import annotated_path, read_table, write_table


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("peptides.txt", "peptides_annotated.txt"),
        ("peptides.tsv", "peptides_annotated.tsv"),
        ("peptides", "peptides_annotated"),
        ("run.v2.txt", "run.v2_annotated.txt"),
    ],
)
def test_annotated_path(tmp_path: Path, name: str, expected: str):
    assert annotated_path(tmp_path / name) == tmp_path / expected


@pytest.mark.unit
def test_values_kept_as_text(tmp_path: Path):
    path = tmp_path / "peptides.txt"
    path.write_text("Protein\tIntensity\tNote\nP60709\t00012\tNA\n\t5\t\n", encoding="utf-8")

    frame = read_table(path)

    assert frame["Protein"].tolist() == ["P60709", ""]
    assert frame["Intensity"].tolist() == ["00012", "5"]
    assert frame["Note"].tolist() == ["NA", ""]


@pytest.mark.unit
def test_write_is_unquoted_tab_separated(tmp_path: Path):
    frame = pd.DataFrame({"hgnc_symbol": ["ACTB", ""], "Protein": ["P60709", "2/P63261/P60709"]})
    target = tmp_path / "out" / "peptides_annotated.txt"

    written = write_table(frame, target)

    assert written == target
    assert target.read_text(encoding="utf-8") == 'hgnc_symbol\tProtein\nACTB\tP60709\n\t2/P63261/P60709\n'
    assert not target.with_suffix(".txt.tmp").exists()
