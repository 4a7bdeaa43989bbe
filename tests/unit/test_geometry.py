import pytest
from shapely.geometry import LineString, MultiPolygon, Point, Polygon

from sus_choropleth.common.errors import UnsupportedGeometry
from sus_choropleth.common.geometry import approximate_center, exterior_coordinates, map_extent


def test_approximate_center_is_vertex_mean_of_exterior_ring():
    square = Polygon([(0, 0), (2, 0), (2, 2), (0, 2)])
    # shapely closes the ring, so (0, 0) is counted twice.
    x, y = approximate_center(square)
    assert x == pytest.approx(4 / 5)
    assert y == pytest.approx(4 / 5)


def test_approximate_center_ignores_holes():
    shell = [(0, 0), (4, 0), (4, 4), (0, 4)]
    hole = [(1, 1), (1, 2), (2, 2), (2, 1)]
    with_hole = Polygon(shell, [hole])
    assert approximate_center(with_hole) == approximate_center(Polygon(shell))


def test_approximate_center_pools_multipolygon_vertices():
    a = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
    b = Polygon([(10, 0), (11, 0), (11, 1), (10, 1)])
    pooled = exterior_coordinates(a) + exterior_coordinates(b)
    expected_x = sum(x for x, _ in pooled) / len(pooled)
    expected_y = sum(y for _, y in pooled) / len(pooled)

    x, y = approximate_center(MultiPolygon([a, b]))

    assert x == pytest.approx(expected_x)
    assert y == pytest.approx(expected_y)


def test_approximate_center_lies_within_exterior_hull():
    poly = Polygon([(0, 0), (5, 0), (5, 1), (1, 1), (1, 5), (0, 5)])
    x, y = approximate_center(poly)
    assert poly.convex_hull.covers(Point(x, y))


def test_non_polygonal_geometry_is_rejected():
    with pytest.raises(UnsupportedGeometry):
        approximate_center(LineString([(0, 0), (1, 1)]))
    with pytest.raises(UnsupportedGeometry):
        approximate_center(Point(0, 0))


def test_map_extent_covers_all_geometries():
    a = Polygon([(-40, -9), (-39, -9), (-39, -8), (-40, -8)])
    b = Polygon([(-35, -8.5), (-34.8, -8.5), (-34.8, -7.5), (-35, -7.5)])
    assert map_extent([a, b]) == (-40.0, -34.8, -9.0, -7.5)
