"""Geometry helpers for municipal boundary polygons."""

from __future__ import annotations

from typing import Any

from shapely.geometry import MultiPolygon, Polygon

from sus_choropleth.common.errors import UnsupportedGeometry


def polygon_parts(geometry: Any) -> list[Polygon]:
    if isinstance(geometry, Polygon):
        return [geometry]
    if isinstance(geometry, MultiPolygon):
        return list(geometry.geoms)
    kind = getattr(geometry, "geom_type", type(geometry).__name__)
    raise UnsupportedGeometry(f"Expected Polygon or MultiPolygon, got {kind}")


def exterior_coordinates(geometry: Any) -> list[tuple[float, float]]:
    """Exterior-ring vertices of every part, pooled in part order."""
    coords: list[tuple[float, float]] = []
    for part in polygon_parts(geometry):
        coords.extend((float(x), float(y)) for x, y, *_ in part.exterior.coords)
    return coords


def approximate_center(geometry: Any) -> tuple[float, float]:
    """Unweighted mean of exterior-ring vertices; not the area centroid.

    Multipolygon parts are pooled before averaging, so parts with more
    vertices pull the point towards them. Label placement depends on this.
    """
    coords = exterior_coordinates(geometry)
    if not coords:
        raise UnsupportedGeometry("Geometry has no exterior coordinates")
    xs = [x for x, _ in coords]
    ys = [y for _, y in coords]
    return sum(xs) / len(xs), sum(ys) / len(ys)


def map_extent(geometries: list[Any]) -> tuple[float, float, float, float]:
    """Return ``(lon_min, lon_max, lat_min, lat_max)`` over all exterior rings."""
    xs: list[float] = []
    ys: list[float] = []
    for geometry in geometries:
        for x, y in exterior_coordinates(geometry):
            xs.append(x)
            ys.append(y)
    if not xs:
        raise UnsupportedGeometry("No boundary coordinates to compute the map extent")
    return min(xs), max(xs), min(ys), max(ys)
