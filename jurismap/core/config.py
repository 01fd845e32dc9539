"""Configuration management for the jurisdiction resolver."""
import os
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data"))
DUCKDB_PATH = Path(os.getenv("DATABASE_PATH", DATA_DIR / "duckdb" / "jurisdictions.duckdb"))

# Ensure directories exist
DUCKDB_PATH.parent.mkdir(parents=True, exist_ok=True)

# Boundary data source
_geojson_path = os.getenv("BOUNDARY_GEOJSON_PATH")
BOUNDARY_GEOJSON_PATH: Optional[Path] = Path(_geojson_path) if _geojson_path else None
BOUNDARY_GEOJSON_URL: Optional[str] = os.getenv("BOUNDARY_GEOJSON_URL")
BOUNDARY_COORDINATE_ORDER: str = os.getenv("BOUNDARY_COORDINATE_ORDER", "lonlat").lower()
BOUNDARY_REFRESH_SECONDS: int = int(os.getenv("BOUNDARY_REFRESH_SECONDS", "0"))  # 0 = never
HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "30"))

# Resolution settings
INDEX_NODE_CAPACITY: int = int(os.getenv("INDEX_NODE_CAPACITY", "10"))
JURISDICTION_PRECEDENCE: List[str] = [
    value.strip()
    for value in os.getenv(
        "JURISDICTION_PRECEDENCE", "municipal,county,state,fire-district,other"
    ).split(",")
    if value.strip()
]

# Rendering
MAP_RENDERER: str = os.getenv("MAP_RENDERER", "web").lower()
MAP_ZOOM: int = int(os.getenv("MAP_ZOOM", "13"))
OVERLAY_COLOR: str = os.getenv("OVERLAY_COLOR", "#1e40af")
OVERLAY_FILL_OPACITY: float = float(os.getenv("OVERLAY_FILL_OPACITY", "0.3"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
