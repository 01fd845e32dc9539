"""DuckDB storage layer for jurisdiction boundary records."""
import duckdb
from pathlib import Path
from typing import List, Dict, Optional, Any
import geopandas as gpd
from shapely import wkb
from shapely.errors import ShapelyError
from shapely.geometry import mapping, shape
import json
from datetime import datetime
from jurismap.core.config import DUCKDB_PATH
from jurismap.providers.base import BoundaryProvider
from jurismap.providers.geojson import records_from_geodataframe
from jurismap.utils.logging import log_warning
from jurismap.utils.timing import time_function


class DuckDBStore(BoundaryProvider):
    """DuckDB storage manager for boundary records."""

    coordinate_order = "lonlat"

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize DuckDB connection.

        Args:
            db_path: Path to DuckDB database file
        """
        self.db_path = db_path or DUCKDB_PATH
        self.conn = duckdb.connect(str(self.db_path))
        self._init_schema()

    def _init_schema(self):
        """Initialize database schema."""
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS jurisdictions (
                feature_id VARCHAR PRIMARY KEY,
                jurisdiction_type VARCHAR,
                agency_name VARCHAR,
                agency_phone VARCHAR,
                agency_website VARCHAR,
                geometry_wkb VARCHAR,
                bbox TEXT,
                properties TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        self.conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_jurisdictions_type ON jurisdictions(jurisdiction_type)"
        )

    def ingest_geojson(self, gdf: gpd.GeoDataFrame, replace: bool = True) -> int:
        """Ingest a GeoDataFrame of boundary features; see ``ingest_records``."""
        return self.ingest_records(records_from_geodataframe(gdf), replace=replace)

    @time_function
    def ingest_records(self, records: List[Dict[str, Any]], replace: bool = True) -> int:
        """
        Ingest raw boundary records into DuckDB.

        Rows are stored as-is; validation happens when a BoundaryStore loads
        from this table, so rejected records stay visible for operators.

        Args:
            records: Raw records from a boundary provider
            replace: Clear existing rows first

        Returns:
            Number of rows written
        """
        if replace:
            self.conn.execute("DELETE FROM jurisdictions")

        rows = []
        seen = set()
        for record in records:
            feature_id = record["id"]
            # Keep the first occurrence; the table key is the feature id
            if feature_id in seen:
                continue
            seen.add(feature_id)

            geometry_wkb = None
            if record["geometry"]:
                try:
                    geometry_wkb = wkb.dumps(shape(record["geometry"]), hex=True)
                except (ShapelyError, ValueError, TypeError) as e:
                    log_warning("Unencodable boundary geometry skipped", record_id=feature_id, reason=str(e))
                    continue

            agency = record["agency"]
            rows.append((
                feature_id,
                None if record["jurisdiction_type"] is None else str(record["jurisdiction_type"]),
                None if agency["name"] is None else str(agency["name"]),
                None if agency["phone"] is None else str(agency["phone"]),
                None if agency["website"] is None else str(agency["website"]),
                geometry_wkb,
                None if record["bbox"] is None else json.dumps(record["bbox"], default=str),
                json.dumps({k: v for k, v in record["properties"].items()}, default=str),
                datetime.now()
            ))

        if rows:
            self.conn.executemany(
                """
                INSERT OR REPLACE INTO jurisdictions
                (feature_id, jurisdiction_type, agency_name, agency_phone, agency_website,
                 geometry_wkb, bbox, properties, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows
            )

        return len(rows)

    def fetch_records(self) -> List[Dict[str, Any]]:
        """Read every stored boundary record."""
        result = self.conn.execute("""
            SELECT feature_id, jurisdiction_type, agency_name, agency_phone, agency_website,
                   geometry_wkb, bbox, properties
            FROM jurisdictions
            ORDER BY feature_id
        """).fetchall()

        return [self._row_to_record(row) for row in result]

    def get_feature(self, feature_id: str) -> Optional[Dict[str, Any]]:
        """Get one stored record."""
        result = self.conn.execute("""
            SELECT feature_id, jurisdiction_type, agency_name, agency_phone, agency_website,
                   geometry_wkb, bbox, properties
            FROM jurisdictions
            WHERE feature_id = ?
        """, [feature_id]).fetchone()

        if result:
            return self._row_to_record(result)
        return None

    def count(self) -> int:
        """Number of stored records."""
        return self.conn.execute("SELECT COUNT(*) FROM jurisdictions").fetchone()[0]

    @staticmethod
    def _row_to_record(row) -> Dict[str, Any]:
        feature_id, jurisdiction_type, name, phone, website, geometry_wkb, bbox, properties = row
        return {
            "id": feature_id,
            "jurisdiction_type": jurisdiction_type,
            "agency": {"name": name, "phone": phone, "website": website},
            "geometry": mapping(wkb.loads(geometry_wkb, hex=True)) if geometry_wkb else None,
            "bbox": json.loads(bbox) if bbox else None,
            "properties": json.loads(properties) if properties else {},
        }

    def get_name(self) -> str:
        """Get provider name."""
        return f"DuckDB {Path(self.db_path).name}"

    def close(self):
        """Close database connection."""
        self.conn.close()
