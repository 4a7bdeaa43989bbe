"""Filter municipal rows of one state and attach the yearly metric."""

from __future__ import annotations

import re
from typing import Any, Iterable, Sequence

import pandas as pd

from sus_choropleth.common.admin_codes import clean_display_name, extract_admin_code, resolve_region
from sus_choropleth.common.constants import MISSING_METRIC_DEFAULT
from sus_choropleth.common.errors import MissingYearColumn
from sus_choropleth.common.logging import get_logger
from sus_choropleth.common.models import EnrichedRecord, HeaderInfo
from sus_choropleth.common.normalise import normalize_key
from sus_choropleth.pipeline.header import cell_text, is_missing, table_rows

_DATA_ROW_RE = re.compile(r"^\s*\d")

logger = get_logger("records")


def is_data_row(first_cell: Any) -> bool:
    """Municipal rows start with the IBGE code; totals and footnotes start with text."""
    return bool(_DATA_ROW_RE.match(cell_text(first_cell)))


def year_column_position(header_info: HeaderInfo, target_year: int | str) -> int:
    wanted = str(target_year)
    positions = [idx for idx, name in enumerate(header_info.column_names) if name == wanted]
    if not positions:
        raise MissingYearColumn(wanted, list(header_info.column_names))
    # Duplicate header names are not deduplicated; the last one wins.
    return positions[-1]


def coerce_metric(value: Any) -> float | None:
    if is_missing(value):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return None
    parsed = pd.to_numeric(text, errors="coerce")
    if is_missing(parsed):
        return None
    return float(parsed)


def build_records(
    raw_table: pd.DataFrame | Iterable[Sequence[Any]],
    header_info: HeaderInfo,
    target_region: str,
    target_year: int | str,
) -> list[EnrichedRecord]:
    rows = table_rows(raw_table)[header_info.row_index + 1 :]
    year_position = year_column_position(header_info, target_year)

    records: list[EnrichedRecord] = []
    data_rows = 0
    unparsable = 0
    for row in rows:
        first_cell = row[0] if row else None
        if not is_data_row(first_cell):
            continue
        data_rows += 1

        label = cell_text(first_cell)
        region_code = resolve_region(label)
        if region_code is None or region_code != target_region:
            continue

        display_name = clean_display_name(label)
        raw_metric = row[year_position] if year_position < len(row) else None
        metric = coerce_metric(raw_metric)
        if metric is None:
            if cell_text(raw_metric).strip():
                unparsable += 1
            metric = MISSING_METRIC_DEFAULT

        records.append(
            EnrichedRecord(
                admin_code=extract_admin_code(label),
                region_code=region_code,
                display_name=display_name,
                normalization_key=normalize_key(display_name),
                metric_value=float(metric),
            )
        )

    if unparsable:
        logger.warning(
            f"{unparsable} non-numeric metric cells treated as {MISSING_METRIC_DEFAULT}",
            extra={"region": target_region, "event": "METRIC_UNPARSABLE", "status": "warn"},
        )
    logger.debug(
        "municipal rows filtered",
        extra={"region": target_region, "rows_in": data_rows, "rows_out": len(records)},
    )
    return records


def records_frame(records: list[EnrichedRecord]) -> pd.DataFrame:
    columns = ["admin_code", "region_code", "display_name", "normalization_key", "metric_value"]
    return pd.DataFrame([record.to_dict() for record in records], columns=columns)
