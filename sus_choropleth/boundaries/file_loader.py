"""Municipal boundaries from a local vector file (GeoJSON, GeoPackage, Shapefile)."""

from __future__ import annotations

from pathlib import Path

import geopandas as gpd
import pandas as pd

from sus_choropleth.common.constants import REGION_CODE_BY_PREFIX
from sus_choropleth.common.errors import ConfigError, StageError
from sus_choropleth.boundaries.crs import ensure_polygonal, ensure_wgs84


def _region_values(region_code: str) -> set[str]:
    values = {region_code}
    values.update(str(prefix) for prefix, code in REGION_CODE_BY_PREFIX.items() if code == region_code)
    return values


def _region_cell(value) -> str | None:
    if pd.isna(value):
        return None
    # Numeric state codes may be read back as floats.
    if isinstance(value, float):
        return str(int(value))
    return str(value)


def load_boundary_file(
    path: Path,
    *,
    name_field: str,
    region_code: str | None = None,
    region_field: str | None = None,
) -> gpd.GeoDataFrame:
    """Read ``path`` and return a ``name``/``geometry`` frame in WGS84.

    When ``region_field`` is set, rows are kept if that column equals the UF
    abbreviation or its numeric IBGE state code (geobr exports carry both
    ``abbrev_state`` and ``code_state``).
    """
    if not path.exists():
        raise StageError(f"Missing boundary file: {path}")

    frame = gpd.read_file(path)
    if name_field not in frame.columns:
        raise ConfigError(f"Boundary file {path} has no column {name_field!r}")

    if region_field:
        if region_field not in frame.columns:
            raise ConfigError(f"Boundary file {path} has no column {region_field!r}")
        if region_code is not None:
            wanted = _region_values(region_code)
            column = frame[region_field].map(_region_cell)
            frame = frame[column.isin(wanted)]

    if frame.empty:
        raise StageError(f"No boundaries for region {region_code} in {path}")

    out = frame[[name_field, "geometry"]].rename(columns={name_field: "name"})
    return ensure_polygonal(ensure_wgs84(out))
