"""GeoJSON boundary providers (file on disk or an in-memory FeatureCollection)."""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import geopandas as gpd
import pandas as pd
from shapely.geometry import mapping

from jurismap.core.config import BOUNDARY_COORDINATE_ORDER
from jurismap.providers.base import BoundaryProvider, record_from_feature

GEOJSON_SUFFIXES = (".geojson", ".json")


def records_from_geodataframe(gdf: gpd.GeoDataFrame) -> List[Dict[str, Any]]:
    """
    Convert a GeoDataFrame of boundaries into raw records.

    Rows with a null geometry are kept; they become bounding-box-only records
    when a ``bbox`` property is present and are rejected at load otherwise.
    """
    if gdf.empty:
        return []

    if gdf.crs is not None and gdf.crs != "EPSG:4326":
        gdf = gdf.to_crs("EPSG:4326")

    geometry_column = gdf.geometry.name
    records = []
    for idx, row in gdf.iterrows():
        geometry = row[geometry_column]
        properties = {
            k: (None if _is_missing(v) else v)
            for k, v in row.items()
            if k != geometry_column
        }
        geojson = None
        if not (geometry is None or _is_missing(geometry) or geometry.is_empty):
            geojson = mapping(geometry)
        records.append(record_from_feature(properties, geojson, fallback_id=str(idx)))
    return records


def _is_missing(value: Any) -> bool:
    if isinstance(value, (list, tuple, dict)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class GeoJSONFileProvider(BoundaryProvider):
    """Boundary provider backed by a GeoJSON (or any OGR-readable) file."""

    def __init__(self, path: Path, coordinate_order: Optional[str] = None):
        """
        Initialize file provider.

        Args:
            path: Path to the boundary file
            coordinate_order: Axis order of the file ("lonlat" or "latlon")
        """
        self.path = Path(path)
        self.coordinate_order = coordinate_order or BOUNDARY_COORDINATE_ORDER

    def fetch_records(self) -> List[Dict[str, Any]]:
        """
        Read every feature of the file.

        GeoJSON files are parsed directly so feature-level ``bbox`` members
        and null geometries reach the store as written; OGR drops the former.
        Other formats (shapefile, GeoPackage) go through geopandas.
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Boundary file not found: {self.path}")

        if self.path.suffix.lower() in GEOJSON_SUFFIXES:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return GeoJSONDictProvider(data, name=self.get_name(),
                                       coordinate_order=self.coordinate_order).fetch_records()

        gdf = gpd.read_file(self.path)
        return records_from_geodataframe(gdf)

    def get_name(self) -> str:
        """Get provider name."""
        return f"GeoJSON file {self.path.name}"


class GeoJSONDictProvider(BoundaryProvider):
    """
    Boundary provider over an already-parsed FeatureCollection.

    Coordinates are passed through untouched, so irregular rings reach the
    store's validation exactly as the source wrote them.
    """

    def __init__(self, data: Dict[str, Any], name: str = "GeoJSON payload",
                 coordinate_order: Optional[str] = None):
        self.data = data
        self.name = name
        self.coordinate_order = coordinate_order or BOUNDARY_COORDINATE_ORDER

    def fetch_records(self) -> List[Dict[str, Any]]:
        """Map every feature of the collection onto a raw record."""
        if self.data.get("type") == "Feature":
            features = [self.data]
        else:
            features = self.data.get("features") or []

        records = []
        for position, feature in enumerate(features):
            fallback_id = feature.get("id")
            records.append(record_from_feature(
                feature.get("properties") or {},
                feature.get("geometry"),
                bbox=feature.get("bbox"),
                fallback_id=str(fallback_id) if fallback_id is not None else str(position),
            ))
        return records

    def get_name(self) -> str:
        """Get provider name."""
        return self.name
