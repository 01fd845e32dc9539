"""Provider selection from configuration."""
from pathlib import Path
from typing import Optional

from jurismap.core.config import BOUNDARY_GEOJSON_PATH, BOUNDARY_GEOJSON_URL, DUCKDB_PATH
from jurismap.providers.base import BoundaryProvider
from jurismap.providers.geojson import GeoJSONFileProvider
from jurismap.providers.http import HTTPGeoJSONProvider


def provider_from_config(
    geojson_path: Optional[Path] = BOUNDARY_GEOJSON_PATH,
    geojson_url: Optional[str] = BOUNDARY_GEOJSON_URL,
    db_path: Optional[Path] = DUCKDB_PATH
) -> BoundaryProvider:
    """
    Pick the boundary provider: a GeoJSON file, then a GeoJSON URL, then DuckDB.
    """
    if geojson_path:
        return GeoJSONFileProvider(Path(geojson_path))
    if geojson_url:
        return HTTPGeoJSONProvider(geojson_url)

    from jurismap.core.duckdb_store import DuckDBStore
    return DuckDBStore(db_path)
