"""Ordering of overlapping jurisdiction matches."""
from typing import Dict, Iterable, List, Optional, Sequence

from jurismap.core.config import JURISDICTION_PRECEDENCE
from jurismap.core.models import BoundaryPolygon, JurisdictionType, Point


class JurisdictionRanker:
    """
    Orders matched jurisdictions by layer precedence, then by area.

    A point is routinely inside several layers at once (city, county, state,
    fire district). The most specific layer comes first; within a layer the
    smaller polygon wins. Ids break remaining ties so results are stable.
    """

    def __init__(self, precedence: Optional[Sequence[str]] = None):
        """
        Initialize ranker.

        Args:
            precedence: Jurisdiction types, most specific first; JURISDICTION_PRECEDENCE when omitted

        Raises:
            ValueError: If an entry is not a known jurisdiction type
        """
        order = precedence if precedence is not None else JURISDICTION_PRECEDENCE
        self._precedence: Dict[JurisdictionType, int] = {}
        for position, value in enumerate(order):
            jurisdiction_type = JurisdictionType.lookup(value)
            if jurisdiction_type is None:
                raise ValueError(
                    f"Unknown jurisdiction type in precedence: {value!r} "
                    f"(expected one of {[t.value for t in JurisdictionType]})"
                )
            self._precedence.setdefault(jurisdiction_type, position)
        self._unranked = len(self._precedence)

    def precedence(self, jurisdiction_type: JurisdictionType) -> int:
        return self._precedence.get(jurisdiction_type, self._unranked)

    def rank(self, point: Point, matches: Iterable[BoundaryPolygon]) -> List[BoundaryPolygon]:
        """
        Order matches by precedence.

        Args:
            point: Query point the matches were computed for
            matches: Polygons confirmed to contain the point

        Returns:
            Full ordered list, primary jurisdiction first
        """
        return sorted(
            matches,
            key=lambda polygon: (
                self.precedence(polygon.jurisdiction_type),
                polygon.area_km2,
                polygon.id,
            ),
        )


def rank(point: Point, matches: Iterable[BoundaryPolygon]) -> List[BoundaryPolygon]:
    """Rank with the configured precedence."""
    return JurisdictionRanker().rank(point, matches)
