"""Bounding-box pre-filter over boundary records."""
from typing import Iterable, List, Tuple

from shapely import STRtree
from shapely.geometry import Point as ShapelyPoint, box

from jurismap.core.config import INDEX_NODE_CAPACITY
from jurismap.core.models import BoundaryPolygon, Point


class SpatialIndex:
    """
    R-tree over the bounding boxes of a fixed set of boundary records.

    ``candidates`` returns every record whose closed bounding box contains the
    query point. The result is a superset of the true matches; exact
    containment is checked downstream. An index is never mutated after
    construction: a changed record set gets a new index.
    """

    def __init__(self, polygons: Iterable[BoundaryPolygon], node_capacity: int = INDEX_NODE_CAPACITY):
        """
        Build the index.

        Args:
            polygons: Validated boundary records
            node_capacity: Maximum entries per R-tree node
        """
        self._polygons: Tuple[BoundaryPolygon, ...] = tuple(polygons)
        self._tree = None
        if self._polygons:
            boxes = [box(*polygon.bbox) for polygon in self._polygons]
            self._tree = STRtree(boxes, node_capacity=node_capacity)

    def __len__(self) -> int:
        return len(self._polygons)

    @property
    def polygons(self) -> Tuple[BoundaryPolygon, ...]:
        return self._polygons

    def candidates(self, point: Point) -> List[BoundaryPolygon]:
        """
        Get records whose bounding box contains the point.

        Args:
            point: Query point

        Returns:
            Candidate records in load order
        """
        if self._tree is None:
            return []

        hits = self._tree.query(
            ShapelyPoint(point.longitude, point.latitude),
            predicate="intersects",
        )
        return [self._polygons[i] for i in sorted(int(i) for i in hits)]
