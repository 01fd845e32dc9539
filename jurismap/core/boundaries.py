"""Validation and normalization of raw boundary records.

Raw records come from a boundary provider as plain dicts::

    {
        "id": "austin-pd",
        "jurisdiction_type": "municipal",
        "agency": {"name": "Austin Police", "phone": "311", "website": None},
        "geometry": {"type": "Polygon", "coordinates": [...]},   # GeoJSON or None
        "bbox": None,                                            # or [minx, miny, maxx, maxy]
        "properties": {...},
    }

``build_boundary`` turns one of these into an immutable ``BoundaryPolygon`` in
storage order (lon, lat), or raises ``MalformedPolygon``.
"""
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pyproj import Geod
from shapely import make_valid
from shapely.affinity import translate
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon, box
from shapely.geometry.polygon import orient
from shapely.validation import explain_validity

from jurismap.core.errors import MalformedPolygon
from jurismap.core.models import Agency, BBox, BoundaryPolygon, JurisdictionType, Ring, RingSet

COORDINATE_ORDERS = ("lonlat", "latlon")

_GEOD = Geod(ellps="WGS84")
_WORLD = box(-180.0, -90.0, 180.0, 90.0)
_EAST_OF_ANTIMERIDIAN = box(180.0, -90.0, 540.0, 90.0)


def build_boundary(raw: Dict[str, Any], coordinate_order: str = "lonlat") -> BoundaryPolygon:
    """
    Validate a raw record and build its storage form.

    Args:
        raw: Raw boundary record
        coordinate_order: Vertex axis order used by the source ("lonlat" or "latlon")

    Returns:
        BoundaryPolygon with closed, oriented rings and parts sorted by area

    Raises:
        MalformedPolygon: If the record violates the ring invariants
    """
    if coordinate_order not in COORDINATE_ORDERS:
        raise ValueError(f"Unknown coordinate order: {coordinate_order}")

    record_id = raw.get("id")
    if record_id is None or str(record_id).strip() == "":
        raise MalformedPolygon("Record has no id")
    record_id = str(record_id).strip()

    agency = _parse_agency(raw.get("agency"), record_id)
    jurisdiction_type = JurisdictionType.parse(raw.get("jurisdiction_type"))
    properties = dict(raw.get("properties") or {})

    geometry = raw.get("geometry")
    if not geometry:
        bbox = _parse_bbox(raw.get("bbox"), record_id, coordinate_order)
        if bbox is None:
            raise MalformedPolygon("Record has neither geometry nor bounding box", record_id)
        return BoundaryPolygon(
            id=record_id,
            jurisdiction_type=jurisdiction_type,
            parts=(),
            agency=agency,
            bbox=bbox,
            area_km2=_geodesic_area_km2(box(*bbox)),
            properties=properties,
        )

    polygons = []
    for coordinates in _polygon_coordinates(geometry, record_id):
        rings = [_clean_ring(ring, record_id, coordinate_order) for ring in coordinates]
        polygons.extend(_repair(rings, record_id))

    if not polygons:
        raise MalformedPolygon("Geometry has no polygonal area", record_id)

    polygons.sort(key=_geodesic_area_km2, reverse=True)
    parts = tuple(_to_ring_set(polygon) for polygon in polygons)
    bounds = [polygon.bounds for polygon in polygons]
    bbox = (
        min(b[0] for b in bounds),
        min(b[1] for b in bounds),
        max(b[2] for b in bounds),
        max(b[3] for b in bounds),
    )

    return BoundaryPolygon(
        id=record_id,
        jurisdiction_type=jurisdiction_type,
        parts=parts,
        agency=agency,
        bbox=bbox,
        area_km2=sum(_geodesic_area_km2(polygon) for polygon in polygons),
        properties=properties,
    )


def _parse_agency(value: Any, record_id: str) -> Agency:
    if isinstance(value, Agency):
        agency = value
    elif isinstance(value, dict):
        agency = Agency(
            name=_clean_text(value.get("name")) or "",
            phone=_clean_text(value.get("phone")),
            website=_clean_text(value.get("website")),
        )
    else:
        agency = Agency(name=_clean_text(value) or "")

    if not agency.name:
        raise MalformedPolygon("Agency name is missing", record_id)
    return agency


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value).strip()
    return text or None


def _parse_bbox(value: Any, record_id: str, coordinate_order: str) -> Optional[BBox]:
    if value is None:
        return None
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    try:
        numbers = [float(v) for v in value]
    except (TypeError, ValueError):
        raise MalformedPolygon(f"Bounding box is not numeric: {value!r}", record_id)
    if len(numbers) != 4 or not all(math.isfinite(n) for n in numbers):
        raise MalformedPolygon(f"Bounding box needs four finite numbers: {value!r}", record_id)

    if coordinate_order == "latlon":
        min_y, min_x, max_y, max_x = numbers
    else:
        min_x, min_y, max_x, max_y = numbers
    if not (min_x < max_x and min_y < max_y):
        raise MalformedPolygon("Bounding box is empty or inverted", record_id)
    if not (-180.0 <= min_x and max_x <= 180.0 and -90.0 <= min_y and max_y <= 90.0):
        raise MalformedPolygon("Bounding box is outside the valid coordinate range", record_id)
    return (min_x, min_y, max_x, max_y)


def _polygon_coordinates(geometry: Dict[str, Any], record_id: str) -> List[Sequence]:
    geom_type = geometry.get("type")
    coordinates = geometry.get("coordinates")
    if geom_type == "Polygon":
        polygons = [coordinates]
    elif geom_type == "MultiPolygon":
        polygons = list(coordinates or [])
    elif geom_type == "GeometryCollection":
        polygons = []
        for member in geometry.get("geometries") or []:
            if member.get("type") in ("Polygon", "MultiPolygon"):
                polygons.extend(_polygon_coordinates(member, record_id))
    else:
        raise MalformedPolygon(f"Unsupported geometry type: {geom_type}", record_id)

    if not polygons or any(not rings for rings in polygons):
        raise MalformedPolygon("Polygon has no rings", record_id)
    return polygons


def _clean_ring(ring: Sequence, record_id: str, coordinate_order: str) -> List[Tuple[float, float]]:
    """Convert to (lon, lat) floats, check ranges and close the ring."""
    vertices = []
    for vertex in ring:
        try:
            a, b = float(vertex[0]), float(vertex[1])
        except (TypeError, ValueError, IndexError):
            raise MalformedPolygon(f"Vertex is not a coordinate pair: {vertex!r}", record_id)
        lon, lat = (b, a) if coordinate_order == "latlon" else (a, b)
        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise MalformedPolygon("Vertex is not finite", record_id)
        if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
            raise MalformedPolygon(f"Vertex out of range: ({lon}, {lat})", record_id)
        vertices.append((lon, lat))

    if len(set(vertices)) < 3:
        raise MalformedPolygon("Ring has fewer than 3 distinct vertices", record_id)
    if vertices[0] != vertices[-1]:
        vertices.append(vertices[0])
    return vertices


def _crosses_antimeridian(rings: List[List[Tuple[float, float]]]) -> bool:
    for ring in rings:
        for (x1, _), (x2, _) in zip(ring, ring[1:]):
            if abs(x2 - x1) > 180.0:
                return True
    return False


def _repair(rings: List[List[Tuple[float, float]]], record_id: str) -> List[Polygon]:
    """Split antimeridian crossings and fix self-intersections."""
    if _crosses_antimeridian(rings):
        shifted = [[(x + 360.0 if x < 0 else x, y) for x, y in ring] for ring in rings]
        polygon = _make_polygon(shifted, record_id)
        west = polygon.intersection(_WORLD)
        east = translate(polygon.intersection(_EAST_OF_ANTIMERIDIAN), xoff=-360.0)
        return _polygonal_parts(west) + _polygonal_parts(east)

    return _polygonal_parts(_make_polygon(rings, record_id))


def _make_polygon(rings: List[List[Tuple[float, float]]], record_id: str) -> Polygon:
    polygon = Polygon(rings[0], rings[1:])
    if polygon.is_valid:
        return polygon

    reason = explain_validity(polygon)
    if reason.startswith("Hole lies outside shell"):
        raise MalformedPolygon(f"Hole ring is not enclosed by the outer ring: {reason}", record_id)
    return make_valid(polygon)


def _polygonal_parts(geometry) -> List[Polygon]:
    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry] if geometry.area > 0 else []
    if isinstance(geometry, (MultiPolygon, GeometryCollection)):
        parts = []
        for member in geometry.geoms:
            parts.extend(_polygonal_parts(member))
        return parts
    return []


def _to_ring_set(polygon: Polygon) -> RingSet:
    polygon = orient(polygon, sign=1.0)
    outer: Ring = tuple((float(x), float(y)) for x, y, *_ in polygon.exterior.coords)
    holes = tuple(
        tuple((float(x), float(y)) for x, y, *_ in interior.coords)
        for interior in polygon.interiors
    )
    return (outer,) + holes


def _geodesic_area_km2(polygon: Polygon) -> float:
    area, _ = _GEOD.geometry_area_perimeter(polygon)
    return abs(area) / 1_000_000.0
