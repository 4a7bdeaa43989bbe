"""Header detection for exports whose real header sits below metadata rows.

TabNet prepends a title, the filter description and the period before the
actual column header. The header is the first row carrying a ``20xx`` year
in any column other than the first.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Sequence

import pandas as pd

from sus_choropleth.common.errors import HeaderNotFound
from sus_choropleth.common.models import HeaderInfo

_YEAR_RE = re.compile(r"^20\d{2}$")


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def cell_text(value: Any) -> str:
    if is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        # Numeric parsing turns "2024" into 2024.0.
        return str(int(value))
    return str(value)


def is_year_cell(value: Any) -> bool:
    return not is_missing(value) and bool(_YEAR_RE.match(cell_text(value)))


def table_rows(rows: pd.DataFrame | Iterable[Sequence[Any]]) -> list[list[Any]]:
    if isinstance(rows, pd.DataFrame):
        return [list(row) for row in rows.itertuples(index=False, name=None)]
    return [list(row) for row in rows]


def resolve_column_names(header_row: Sequence[Any], width: int | None = None) -> list[str]:
    width = len(header_row) if width is None else width
    names: list[str] = []
    for position in range(width):
        value = header_row[position] if position < len(header_row) else None
        text = cell_text(value).strip()
        names.append(text if text else f"col{position + 1}")
    return names


def locate_header(rows: pd.DataFrame | Iterable[Sequence[Any]]) -> HeaderInfo:
    """Return the 0-based index and column names of the header row.

    Raises ``HeaderNotFound`` when no row has a year cell.
    """
    materialised = table_rows(rows)
    width = max((len(row) for row in materialised), default=0)
    for index, row in enumerate(materialised):
        if any(is_year_cell(value) for value in row[1:]):
            return HeaderInfo(row_index=index, column_names=resolve_column_names(row, width))
    raise HeaderNotFound("No header row with 20xx year cells found in the source table")
