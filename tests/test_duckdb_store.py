"""Tests for the DuckDB boundary table."""
import json
import geopandas as gpd
from shapely.geometry import MultiPolygon, Polygon, box

from jurismap.core.boundary_store import BoundaryStore
from jurismap.core.models import Point
from jurismap.core.service import JurisdictionService
from jurismap.providers.geojson import GeoJSONFileProvider

from helpers import collection, feature, square


def boundary_frame():
    return gpd.GeoDataFrame(
        {
            "id": ["Q", "C", "U", "C"],
            "jurisdiction_type": ["county", "city", "county", "municipal"],
            "agency_name": ["County Sheriff", "City Police", "Unmapped Sheriff", "Duplicate City"],
            "phone": ["512-555-0199", "311", None, None],
            "bbox": [None, None, [-60, -60, -55, -55], None],
        },
        geometry=[
            box(-10, -10, 10, 10),
            MultiPolygon([box(-2, -2, 2, 2), box(3, 3, 4, 4)]),
            None,
            box(0, 0, 1, 1),
        ],
        crs="EPSG:4326",
    )


def test_ingest_and_count(temp_db):
    written = temp_db.ingest_geojson(boundary_frame())

    assert written == 3
    assert temp_db.count() == 3


def test_fetch_records_round_trip(temp_db):
    temp_db.ingest_geojson(boundary_frame())
    records = temp_db.fetch_records()

    assert [r["id"] for r in records] == ["C", "Q", "U"]

    city = records[0]
    assert city["agency"] == {"name": "City Police", "phone": "311", "website": None}
    assert city["geometry"]["type"] == "MultiPolygon"

    unmapped = records[2]
    assert unmapped["geometry"] is None
    assert unmapped["bbox"] == [-60, -60, -55, -55]


def test_get_feature(temp_db):
    temp_db.ingest_geojson(boundary_frame())

    county = temp_db.get_feature("Q")
    assert county["jurisdiction_type"] == "county"
    assert county["agency"]["phone"] == "512-555-0199"
    assert temp_db.get_feature("nope") is None


def test_replace_clears_previous_rows(temp_db):
    temp_db.ingest_geojson(boundary_frame())
    temp_db.ingest_geojson(
        gpd.GeoDataFrame(
            {"id": ["S"], "jurisdiction_type": ["state"], "agency_name": ["State Patrol"]},
            geometry=[Polygon([(-50, -50), (50, -50), (50, 50), (-50, 50)])],
            crs="EPSG:4326",
        )
    )

    assert temp_db.count() == 1
    assert temp_db.get_feature("S")["agency"]["name"] == "State Patrol"


def test_store_loads_from_duckdb(temp_db):
    temp_db.ingest_geojson(boundary_frame())
    store = BoundaryStore()
    report = store.load(temp_db)

    assert report.loaded == 3
    assert report.rejected == []
    assert report.source.startswith("DuckDB ")

    service = JurisdictionService(store)
    assert [j.id for j in service.resolve(Point(latitude=1, longitude=1))] == ["C", "Q"]
    primary = service.get_jurisdiction_by_coordinates(1, 1)
    assert primary.id == "C"
    assert primary.type == "municipal"

    assert service.get_jurisdiction_by_coordinates(3.5, 3.5).id == "C"
    unmapped = service.get_jurisdiction_by_coordinates(-57, -57)
    assert unmapped.id == "U"
    assert unmapped.boundary == []


def test_ingest_records_keeps_feature_bbox(temp_db, tmp_path):
    path = tmp_path / "boundaries.geojson"
    path.write_text(json.dumps(collection(
        feature("C", "municipal", "City Police", [square(-2, -2, 2, 2)]),
        feature("U", "county", "Unmapped Sheriff", bbox=[-60, -60, -55, -55]),
        feature("T", "municipal", "Two Point PD", [[[0, 0], [1, 1]]]),
    )))

    written = temp_db.ingest_records(GeoJSONFileProvider(path).fetch_records())

    # The two-vertex ring has no WKB encoding and is skipped
    assert written == 2
    assert temp_db.get_feature("U")["bbox"] == [-60, -60, -55, -55]
    assert temp_db.get_feature("T") is None

    store = BoundaryStore()
    assert store.load(temp_db).loaded == 2
