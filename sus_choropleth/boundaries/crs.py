"""Coordinate reference and geometry-type handling for boundary frames."""

from __future__ import annotations

import geopandas as gpd
from pyproj import CRS

from sus_choropleth.common.errors import StageError

WGS84 = CRS.from_epsg(4326)
POLYGONAL_TYPES = ("Polygon", "MultiPolygon")


def ensure_wgs84(frame: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Return ``frame`` in longitude/latitude; frames without a CRS are assumed WGS84."""
    if frame.crs is None:
        return frame.set_crs(WGS84)
    if CRS.from_user_input(frame.crs).equals(WGS84):
        return frame
    return frame.to_crs(WGS84)


def ensure_polygonal(frame: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    # Missing geometries have no geom_type and are rejected with the rest.
    bad = ~frame.geom_type.isin(POLYGONAL_TYPES)
    if bad.any():
        names = ", ".join(str(name) for name in frame.loc[bad, "name"].head(5))
        raise StageError(f"{int(bad.sum())} boundaries are not polygons: {names}")
    return frame
