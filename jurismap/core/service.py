"""Jurisdiction resolution entry point."""
import math
from typing import Any, List, Optional

from jurismap.core.boundary_store import BoundaryStore
from jurismap.core.errors import InvalidPoint
from jurismap.core.geometry import distance_to_boundary_degrees, matches, meters_to_degrees
from jurismap.core.models import Point, ResolvedJurisdiction
from jurismap.core.normalizer import normalize
from jurismap.core.ranker import JurisdictionRanker
from jurismap.utils.logging import log_structured
from jurismap.utils.timing import Timer


def _coordinate(value: Any, name: str, latitude: Any, longitude: Any) -> float:
    if isinstance(value, bool):
        raise InvalidPoint(f"{name} must be a number, got {value!r}", latitude, longitude)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidPoint(f"{name} must be a number, got {value!r}", latitude, longitude)
    if not math.isfinite(number):
        raise InvalidPoint(f"{name} must be finite, got {value!r}", latitude, longitude)
    return number


def validate_point(latitude: Any, longitude: Any, accuracy_meters: Any = None) -> Point:
    """
    Build a query point, rejecting out-of-range input.

    Args:
        latitude: WGS84 latitude, [-90, 90]
        longitude: WGS84 longitude, [-180, 180]
        accuracy_meters: Optional GPS accuracy radius, >= 0

    Returns:
        Point

    Raises:
        InvalidPoint: If any value is missing, non-numeric or out of range
    """
    lat = _coordinate(latitude, "latitude", latitude, longitude)
    lon = _coordinate(longitude, "longitude", latitude, longitude)
    if not -90.0 <= lat <= 90.0:
        raise InvalidPoint(f"latitude out of range [-90, 90]: {lat}", latitude, longitude)
    if not -180.0 <= lon <= 180.0:
        raise InvalidPoint(f"longitude out of range [-180, 180]: {lon}", latitude, longitude)

    accuracy = None
    if accuracy_meters is not None:
        accuracy = _coordinate(accuracy_meters, "accuracy_meters", latitude, longitude)
        if accuracy < 0:
            raise InvalidPoint(f"accuracy_meters must be >= 0: {accuracy}", latitude, longitude)

    return Point(latitude=lat, longitude=lon, accuracy_meters=accuracy)


class JurisdictionService:
    """
    Resolves coordinates to the jurisdictions covering them.

    index candidates -> exact containment -> precedence ranking -> normalized output.
    """

    def __init__(self, store: BoundaryStore, ranker: Optional[JurisdictionRanker] = None):
        """
        Initialize service.

        Args:
            store: Loaded boundary store (owned by the caller)
            ranker: Precedence ranker, configured default when omitted
        """
        self.store = store
        self.ranker = ranker or JurisdictionRanker()

    def resolve(self, point: Point) -> List[ResolvedJurisdiction]:
        """
        Resolve every jurisdiction containing the point.

        Args:
            point: Query point

        Returns:
            Ranked jurisdictions, primary first; empty when nothing matches

        Raises:
            InvalidPoint: If the point is out of range
        """
        point = validate_point(point.latitude, point.longitude, point.accuracy_meters)
        snapshot = self.store.snapshot

        with Timer("resolve_jurisdiction", level="debug"):
            candidates = snapshot.index.candidates(point)
            matched = matches(point, candidates)
            ranked = self.ranker.rank(point, matched)

        log_structured(
            "info",
            "Resolved point",
            latitude=point.latitude,
            longitude=point.longitude,
            generation=snapshot.generation,
            candidates=len(candidates),
            matches=[polygon.id for polygon in ranked],
        )

        if ranked and point.accuracy_meters:
            self._check_accuracy(point, ranked[0])

        return [normalize(polygon) for polygon in ranked]

    def get_jurisdiction_by_coordinates(
        self,
        latitude: float,
        longitude: float,
        accuracy_meters: Optional[float] = None
    ) -> Optional[ResolvedJurisdiction]:
        """
        Get the primary jurisdiction for a coordinate pair.

        Returns:
            Highest-precedence jurisdiction, or None when no jurisdiction covers the point

        Raises:
            InvalidPoint: If the coordinates are out of range
        """
        point = validate_point(latitude, longitude, accuracy_meters)
        resolved = self.resolve(point)
        return resolved[0] if resolved else None

    def _check_accuracy(self, point: Point, primary) -> None:
        radius = meters_to_degrees(point.accuracy_meters, point.latitude)
        distance = distance_to_boundary_degrees(primary, point)
        if distance < radius:
            log_structured(
                "warning",
                "Location accuracy circle crosses the primary jurisdiction boundary",
                jurisdiction_id=primary.id,
                accuracy_meters=point.accuracy_meters,
                distance_degrees=distance,
                near_boundary=True,
            )
