"""Exact point-in-polygon tests over stored boundary rings.

All tests run in double precision on the (lon, lat) plane. Boundary points
count as inside (closed-region semantics): a point on an outer ring, or on
the edge of a hole, belongs to the polygon.
"""
import math
from typing import Iterable, List, Sequence

from shapely.geometry import Point as ShapelyPoint, Polygon as ShapelyPolygon

from jurismap.core.models import BBox, BoundaryPolygon, Point, Ring, RingSet

OUTSIDE = 0
INSIDE = 1
BOUNDARY = 2

# Perpendicular distance (degrees) under which a point is on an edge
EDGE_TOLERANCE = 1e-12


def bbox_contains(bbox: BBox, x: float, y: float) -> bool:
    """Closed bounding-box containment."""
    min_x, min_y, max_x, max_y = bbox
    return min_x <= x <= max_x and min_y <= y <= max_y


def point_on_segment(x: float, y: float, a: Sequence[float], b: Sequence[float]) -> bool:
    """True if (x, y) lies on the closed segment a-b."""
    ax, ay = a[0], a[1]
    bx, by = b[0], b[1]
    if not (min(ax, bx) - EDGE_TOLERANCE <= x <= max(ax, bx) + EDGE_TOLERANCE):
        return False
    if not (min(ay, by) - EDGE_TOLERANCE <= y <= max(ay, by) + EDGE_TOLERANCE):
        return False

    length = math.hypot(bx - ax, by - ay)
    if length == 0.0:
        return x == ax and y == ay
    cross = (bx - ax) * (y - ay) - (by - ay) * (x - ax)
    return abs(cross) / length <= EDGE_TOLERANCE


def locate_in_ring(x: float, y: float, ring: Ring) -> int:
    """
    Locate a point relative to a closed ring with the even-odd rule.

    Returns:
        BOUNDARY if the point is on an edge or vertex, otherwise INSIDE or OUTSIDE
    """
    inside = False
    for i in range(len(ring) - 1):
        a = ring[i]
        b = ring[i + 1]
        if point_on_segment(x, y, a, b):
            return BOUNDARY

        ay, by = a[1], b[1]
        # Half-open rule on y so a vertex shared by two edges is counted once
        if (ay > y) != (by > y):
            x_cross = a[0] + (y - ay) * (b[0] - a[0]) / (by - ay)
            if x < x_cross:
                inside = not inside
    return INSIDE if inside else OUTSIDE


def ring_set_contains(x: float, y: float, ring_set: RingSet) -> bool:
    """Inside or on the outer ring, and not strictly inside any hole."""
    if not ring_set:
        return False
    if locate_in_ring(x, y, ring_set[0]) == OUTSIDE:
        return False
    for hole in ring_set[1:]:
        if locate_in_ring(x, y, hole) == INSIDE:
            return False
    return True


def polygon_contains(polygon: BoundaryPolygon, point: Point) -> bool:
    """
    Exact containment test for one boundary record.

    Records without a shape match on their bounding box; shaped records match
    when any of their parts contains the point.
    """
    x, y = point.longitude, point.latitude
    if not bbox_contains(polygon.bbox, x, y):
        return False
    if not polygon.has_shape:
        return True
    return any(ring_set_contains(x, y, part) for part in polygon.parts)


def matches(point: Point, candidates: Iterable[BoundaryPolygon]) -> List[BoundaryPolygon]:
    """Filter candidates down to the polygons that really contain the point."""
    return [polygon for polygon in candidates if polygon_contains(polygon, point)]


def distance_to_boundary_degrees(polygon: BoundaryPolygon, point: Point) -> float:
    """Planar distance from the point to the nearest edge of the polygon, holes included."""
    target = ShapelyPoint(point.longitude, point.latitude)
    if not polygon.has_shape:
        min_x, min_y, max_x, max_y = polygon.bbox
        outline = ShapelyPolygon([(min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y)])
        return outline.exterior.distance(target)
    return min(
        ShapelyPolygon(part[0], part[1:]).boundary.distance(target)
        for part in polygon.parts
    )


def meters_to_degrees(meters: float, latitude: float) -> float:
    """
    Convert meters to approximate degrees at a given latitude.

    Returns the larger of the latitude and longitude conversions so the
    resulting radius is conservative.
    """
    if meters <= 0:
        return 0.0

    lat_deg = meters / 111_320
    cos_lat = math.cos(math.radians(latitude))
    if cos_lat < 1e-9:
        return 360.0
    lng_deg = meters / (111_320 * cos_lat)
    return max(lat_deg, lng_deg)
