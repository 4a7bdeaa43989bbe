"""Read the raw SIH/SUS export without assuming any header row."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from sus_choropleth.common.errors import StageError


def read_source_table(
    path: Path,
    *,
    delimiter: str = ";",
    missing_values: tuple[str, ...] = ("-", "."),
    encoding: str = "latin-1",
) -> pd.DataFrame:
    """Return every line of the export as an untyped row.

    Cells stay ``object`` dtype so year headers and municipality labels keep
    their original text; the missing markers become ``NaN``. TabNet exports
    have ragged lines (one-cell title and footnote rows), so the python engine
    is used with explicit column names sized to the widest line.
    """
    if not path.exists():
        raise StageError(f"Missing source table: {path}")

    with path.open("r", encoding=encoding, newline="") as f:
        width = max((line.count(delimiter) + 1 for line in f if line.strip()), default=0)
    if width == 0:
        raise StageError(f"Source table is empty: {path}")

    return pd.read_csv(
        path,
        sep=delimiter,
        header=None,
        names=list(range(width)),
        na_values=list(missing_values),
        keep_default_na=False,
        dtype=object,
        encoding=encoding,
        engine="python",
        skip_blank_lines=True,
        quotechar='"',
    )
