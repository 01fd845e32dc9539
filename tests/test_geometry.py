"""Tests for exact point-in-polygon resolution."""
import pytest
from jurismap.core.boundaries import build_boundary
from jurismap.core.geometry import (
    BOUNDARY, INSIDE, OUTSIDE,
    distance_to_boundary_degrees, locate_in_ring, matches, meters_to_degrees,
    point_on_segment, polygon_contains,
)
from jurismap.core.models import Point

from helpers import raw_record, square


@pytest.fixture
def p1():
    return build_boundary(raw_record("P1", [square(-1, -1, 1, 1)]))


@pytest.fixture
def donut():
    return build_boundary(raw_record("D", [square(0, 0, 10, 10), square(4, 4, 6, 6)[::-1]]))


def test_p1_scenario(p1):
    """Centre matches, far point does not, edge point matches."""
    assert matches(Point(latitude=0, longitude=0), [p1]) == [p1]
    assert matches(Point(latitude=2, longitude=2), [p1]) == []
    assert matches(Point(latitude=0, longitude=1), [p1]) == [p1]


def test_edge_and_vertex_points_are_inside(p1):
    for lon, lat in [(1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (-1, -1), (0.5, -1)]:
        assert polygon_contains(p1, Point(latitude=lat, longitude=lon)), (lon, lat)


def test_edge_point_is_reproducible(p1):
    point = Point(latitude=0.25, longitude=1.0)
    results = {polygon_contains(p1, point) for _ in range(200)}
    assert results == {True}


def test_locate_in_ring():
    ring = tuple(tuple(v) for v in square(-1, -1, 1, 1))
    assert locate_in_ring(0, 0, ring) == INSIDE
    assert locate_in_ring(1, 0, ring) == BOUNDARY
    assert locate_in_ring(3, 0, ring) == OUTSIDE
    # Ray passes exactly through a vertex
    assert locate_in_ring(-3, 1, ring) == OUTSIDE
    assert locate_in_ring(-3, -1, ring) == OUTSIDE


def test_concave_polygon():
    """U-shaped polygon: the notch is outside."""
    u_shape = [[0, 0], [6, 0], [6, 6], [4, 6], [4, 2], [2, 2], [2, 6], [0, 6], [0, 0]]
    polygon = build_boundary(raw_record("U", [u_shape]))

    assert polygon_contains(polygon, Point(latitude=4, longitude=1))
    assert polygon_contains(polygon, Point(latitude=4, longitude=5))
    assert not polygon_contains(polygon, Point(latitude=4, longitude=3))
    assert polygon_contains(polygon, Point(latitude=2, longitude=3))  # notch floor edge


def test_hole_excludes_interior(donut):
    assert polygon_contains(donut, Point(latitude=2, longitude=2))
    assert not polygon_contains(donut, Point(latitude=5, longitude=5))


def test_hole_edge_belongs_to_polygon(donut):
    assert polygon_contains(donut, Point(latitude=5, longitude=4))
    assert polygon_contains(donut, Point(latitude=6, longitude=6))


def test_multi_part_polygon():
    record = raw_record("M", None)
    record["geometry"] = {
        "type": "MultiPolygon",
        "coordinates": [[square(0, 0, 1, 1)], [square(5, 5, 6, 6)]],
    }
    islands = build_boundary(record)

    assert len(islands.parts) == 2
    assert polygon_contains(islands, Point(latitude=0.5, longitude=0.5))
    assert polygon_contains(islands, Point(latitude=5.5, longitude=5.5))
    assert not polygon_contains(islands, Point(latitude=3, longitude=3))


def test_bbox_only_record_matches_on_box():
    unmapped = build_boundary(raw_record("U", None, bbox=[10, 10, 12, 12]))

    assert polygon_contains(unmapped, Point(latitude=11, longitude=11))
    assert polygon_contains(unmapped, Point(latitude=12, longitude=10))
    assert not polygon_contains(unmapped, Point(latitude=13, longitude=11))


def test_matches_empty_candidates():
    assert matches(Point(latitude=0, longitude=0), []) == []


def test_matches_keeps_only_containing(p1, donut):
    point = Point(latitude=0.5, longitude=0.5)
    assert matches(point, [p1, donut]) == [p1, donut]

    point = Point(latitude=-0.5, longitude=-0.5)
    assert matches(point, [p1, donut]) == [p1]


def test_point_on_segment_diagonal():
    assert point_on_segment(0.5, 0.5, (0, 0), (1, 1))
    assert point_on_segment(0.1, 0.1, (0, 0), (1, 1))
    assert not point_on_segment(0.5, 0.6, (0, 0), (1, 1))
    assert not point_on_segment(2, 2, (0, 0), (1, 1))


def test_meters_to_degrees():
    assert meters_to_degrees(0, 30) == 0.0
    assert meters_to_degrees(-5, 30) == 0.0

    at_equator = meters_to_degrees(111_320, 0)
    assert at_equator == pytest.approx(1.0)
    # Longitude degrees shrink away from the equator, so the radius grows
    assert meters_to_degrees(111_320, 60) == pytest.approx(2.0, rel=1e-6)


def test_distance_to_boundary_includes_holes(donut):
    # 0.1 from the hole's lower edge, 3.9 from the outer ring
    point = Point(latitude=3.9, longitude=5)
    assert distance_to_boundary_degrees(donut, point) == pytest.approx(0.1)


def test_distance_to_boundary_outer_ring(p1):
    assert distance_to_boundary_degrees(p1, Point(latitude=0, longitude=0.75)) == pytest.approx(0.25)
