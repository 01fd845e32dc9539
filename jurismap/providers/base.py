"""Base class for boundary data providers."""
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

# Property names seen across city/county GIS exports
ID_FIELDS = ["id", "feature_id", "OBJECTID", "GEOID", "FID"]
TYPE_FIELDS = ["jurisdiction_type", "type", "layer", "JURISDICTION_TYPE"]
NAME_FIELDS = ["agency_name", "agency", "name", "NAME", "Name"]
PHONE_FIELDS = ["phone", "non_emergency_number", "nonEmergencyNumber", "PHONE"]
WEBSITE_FIELDS = ["website", "url", "WEBSITE", "URL"]


class BoundaryProvider(ABC):
    """
    Read-only source of raw boundary records.

    Providers are only called when a store (re)loads; they never sit on the
    query path.
    """

    coordinate_order: str = "lonlat"

    @abstractmethod
    def fetch_records(self) -> List[Dict[str, Any]]:
        """
        Fetch every boundary record.

        Returns:
            List of raw records (see jurismap.core.boundaries)
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get provider name."""
        pass


def _first(properties: Dict[str, Any], fields: List[str]) -> Optional[Any]:
    for field in fields:
        value = properties.get(field)
        if value is None:
            continue
        if isinstance(value, float) and math.isnan(value):
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def record_from_feature(
    properties: Dict[str, Any],
    geometry: Optional[Dict[str, Any]],
    bbox: Optional[Any] = None,
    fallback_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Map a GeoJSON-style feature onto a raw boundary record.

    Args:
        properties: Feature properties
        geometry: GeoJSON geometry mapping or None
        bbox: Feature-level bounding box, if the source carries one
        fallback_id: Id to use when no id property is present

    Returns:
        Raw boundary record
    """
    properties = dict(properties or {})
    agency = properties.get("agency")
    if isinstance(agency, dict):
        agency_record = {
            "name": agency.get("name"),
            "phone": agency.get("phone"),
            "website": agency.get("website"),
        }
    else:
        agency_record = {
            "name": _first(properties, NAME_FIELDS),
            "phone": _first(properties, PHONE_FIELDS),
            "website": _first(properties, WEBSITE_FIELDS),
        }

    record_id = _first(properties, ID_FIELDS)
    if record_id is None:
        record_id = fallback_id

    return {
        "id": None if record_id is None else str(record_id),
        "jurisdiction_type": _first(properties, TYPE_FIELDS),
        "agency": agency_record,
        "geometry": geometry,
        "bbox": bbox if bbox is not None else properties.get("bbox"),
        "properties": properties,
    }
