from pathlib import Path

import pandas as pd
import pytest

from sus_choropleth.common.errors import StageError
from sus_choropleth.pipeline.source_table import read_source_table


def test_read_source_table_keeps_ragged_rows_and_missing_markers(tmp_path: Path):
    path = tmp_path / "export.csv"
    path.write_text(
        "Morbidade Hospitalar do SUS\n"
        "Município;2023;2024;Total\n"
        "260170 Petrolina;-;120;120\n"
        "260180 Salgueiro;.;3;3\n"
        "\n"
        "Fonte: Ministério da Saúde\n",
        encoding="latin-1",
    )

    table = read_source_table(path)

    assert table.shape == (5, 4)
    assert table.iloc[0, 0] == "Morbidade Hospitalar do SUS"
    assert pd.isna(table.iloc[0, 1])
    assert table.iloc[1, 2] == "2024"
    assert pd.isna(table.iloc[2, 1])
    assert pd.isna(table.iloc[3, 1])
    assert table.iloc[4, 0] == "Fonte: Ministério da Saúde"


def test_read_source_table_missing_file(tmp_path: Path):
    with pytest.raises(StageError):
        read_source_table(tmp_path / "nope.csv")


def test_read_source_table_empty_file(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_text("\n\n", encoding="latin-1")
    with pytest.raises(StageError):
        read_source_table(path)
