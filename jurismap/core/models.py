"""Data models for jurisdiction boundaries and resolution results."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

# (lon, lat) in storage order
Vertex = Tuple[float, float]
Ring = Tuple[Vertex, ...]
# First ring is the outer boundary, the rest are holes
RingSet = Tuple[Ring, ...]
BBox = Tuple[float, float, float, float]


class JurisdictionType(str, Enum):
    """Jurisdiction layers, listed in default precedence order."""
    MUNICIPAL = "municipal"
    COUNTY = "county"
    STATE = "state"
    FIRE_DISTRICT = "fire-district"
    OTHER = "other"

    @classmethod
    def lookup(cls, value: Any) -> Optional["JurisdictionType"]:
        """Match a value or alias to a jurisdiction type; None when unrecognised."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        key = _TYPE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None

    @classmethod
    def parse(cls, value: Any) -> "JurisdictionType":
        """Coerce a dataset value to a jurisdiction type, falling back to OTHER."""
        jurisdiction_type = cls.lookup(value)
        return cls.OTHER if jurisdiction_type is None else jurisdiction_type


_TYPE_ALIASES = {
    "city": "municipal",
    "town": "municipal",
    "village": "municipal",
    "municipality": "municipal",
    "borough": "municipal",
    "parish": "county",
    "province": "state",
    "fire": "fire-district",
    "fire-protection-district": "fire-district",
}


@dataclass(frozen=True)
class Point:
    """A single location sample."""
    latitude: float
    longitude: float
    accuracy_meters: Optional[float] = None

    @property
    def xy(self) -> Vertex:
        """Coordinates in storage order (lon, lat)."""
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class Agency:
    """Agency responsible for a jurisdiction."""
    name: str
    phone: Optional[str] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class BoundaryPolygon:
    """
    One jurisdiction's shape.

    A jurisdiction split across disjoint areas carries several ring-sets in
    ``parts``. A record with no parts but a ``bbox`` is an agency whose shape
    is unavailable; it matches on its bounding box.
    """
    id: str
    jurisdiction_type: JurisdictionType
    parts: Tuple[RingSet, ...]
    agency: Agency
    bbox: BBox
    area_km2: float = 0.0
    properties: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def rings(self) -> RingSet:
        """Ring-set of the primary part, empty when the shape is unavailable."""
        return self.parts[0] if self.parts else ()

    @property
    def has_shape(self) -> bool:
        return bool(self.parts)


@dataclass(frozen=True)
class ResolvedJurisdiction:
    """Output record handed to the rendering layer."""
    id: str
    name: str
    type: str
    boundary: List[List[float]]
    non_emergency_number: str = ""
    website: str = ""

    @property
    def has_overlay(self) -> bool:
        """False means: draw the location marker only."""
        return len(self.boundary) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "boundary": [list(pair) for pair in self.boundary],
            "nonEmergencyNumber": self.non_emergency_number,
            "website": self.website,
        }


@dataclass
class LoadReport:
    """Outcome of loading boundary records into a store."""
    source: str
    loaded: int = 0
    rejected: List[Dict[str, Any]] = None
    elapsed_seconds: float = 0.0

    def __post_init__(self):
        if self.rejected is None:
            self.rejected = []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "loaded": self.loaded,
            "rejected": self.rejected,
            "elapsed_seconds": self.elapsed_seconds,
        }
