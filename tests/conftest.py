"""Pytest configuration and fixtures."""
import pytest
import tempfile
import shutil
from pathlib import Path
from jurismap.core.boundary_store import BoundaryStore
from jurismap.core.duckdb_store import DuckDBStore
from jurismap.core.service import JurisdictionService
from jurismap.providers.geojson import GeoJSONDictProvider

from helpers import collection, feature, square


@pytest.fixture
def p1_collection():
    """Square P1 with corners (-1,-1), (-1,1), (1,1), (1,-1)."""
    return collection(
        feature("P1", "municipal", "P1 Police Department", [square(-1, -1, 1, 1)])
    )


@pytest.fixture
def sample_collection():
    """Layered jurisdictions: state > county > city, plus a fire district and odd shapes."""
    return collection(
        feature("S", "state", "State Patrol", [square(-50, -50, 50, 50)],
                phone="800-555-0100", website="https://patrol.example.gov"),
        feature("Q", "county", "County Sheriff", [square(-10, -10, 10, 10)],
                phone="512-555-0199"),
        feature("C", "municipal", "City Police", [square(-2, -2, 2, 2)],
                phone="311", website="https://police.city.example.gov"),
        feature("F", "fire-district", "Fire District 4", [square(0, 0, 5, 5)]),
        feature("D", "other", "Donut Transit Police",
                [square(20, 20, 30, 30), square(24, 24, 26, 26)[::-1]]),
        feature("M", "municipal", "Island Town Police",
                multipolygon=[[square(40, 40, 41, 41)], [square(43, 43, 44, 44)]]),
        feature("U", "county", "Unmapped Sheriff", bbox=[-60, -60, -55, -55]),
    )


@pytest.fixture
def sample_store(sample_collection):
    store = BoundaryStore()
    store.load(GeoJSONDictProvider(sample_collection, name="sample"))
    return store


@pytest.fixture
def p1_store(p1_collection):
    store = BoundaryStore()
    store.load(GeoJSONDictProvider(p1_collection, name="p1"))
    return store


@pytest.fixture
def service(sample_store):
    return JurisdictionService(sample_store)


@pytest.fixture
def temp_db():
    """Create temporary DuckDB database."""
    temp_dir = tempfile.mkdtemp()
    db_path = Path(temp_dir) / "test.duckdb"
    db_store = DuckDBStore(db_path)
    yield db_store
    db_store.close()
    shutil.rmtree(temp_dir)
