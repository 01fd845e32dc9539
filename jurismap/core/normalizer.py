"""Conversion of stored boundary records into caller-facing results."""
from typing import Dict, List, Sequence

from jurismap.core.models import BoundaryPolygon, ResolvedJurisdiction


def normalize(polygon: BoundaryPolygon) -> ResolvedJurisdiction:
    """
    Build the output record for a matched jurisdiction.

    The boundary is the outer ring of the primary (largest) part as
    ``[longitude, latitude]`` pairs. Every renderer applies the same fixed
    swap (``to_lat_lng``) to reach its own order. Records without a shape
    give an empty boundary: the caller draws the marker and skips the overlay.

    Args:
        polygon: Stored boundary record

    Returns:
        ResolvedJurisdiction with phone and website defaulted to ""
    """
    rings = polygon.rings
    boundary = [[float(lon), float(lat)] for lon, lat in rings[0]] if rings else []

    return ResolvedJurisdiction(
        id=polygon.id,
        name=polygon.agency.name,
        type=polygon.jurisdiction_type.value,
        boundary=boundary,
        non_emergency_number=polygon.agency.phone or "",
        website=polygon.agency.website or "",
    )


def to_lat_lng(boundary: Sequence[Sequence[float]]) -> List[Dict[str, float]]:
    """Swap ``[lon, lat]`` pairs into ``{latitude, longitude}`` dicts."""
    return [{"latitude": pair[1], "longitude": pair[0]} for pair in boundary]
