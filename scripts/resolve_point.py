#!/usr/bin/env python3
"""CLI script to resolve the jurisdictions covering a coordinate pair."""
import argparse
import json
import sys
from pathlib import Path
from jurismap.core.bootstrap import build_runtime
from jurismap.core.config import DUCKDB_PATH, LOG_LEVEL
from jurismap.core.duckdb_store import DuckDBStore
from jurismap.core.errors import InvalidPoint
from jurismap.core.service import validate_point
from jurismap.providers.geojson import GeoJSONFileProvider
from jurismap.utils.logging import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Resolve jurisdictions for a point")
    parser.add_argument("latitude", type=float, help="WGS84 latitude")
    parser.add_argument("longitude", type=float, help="WGS84 longitude")
    parser.add_argument("--accuracy", type=float, default=None,
                       help="GPS accuracy radius in meters")
    parser.add_argument("--geojson", type=Path, default=None,
                       help="Boundary GeoJSON file (default: DuckDB)")
    parser.add_argument("--db-path", type=Path, default=DUCKDB_PATH,
                       help="DuckDB database path")
    parser.add_argument("--all", action="store_true",
                       help="Print every matching jurisdiction, not just the primary")

    args = parser.parse_args()
    setup_logging(LOG_LEVEL)

    try:
        point = validate_point(args.latitude, args.longitude, args.accuracy)
    except InvalidPoint as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.geojson:
        provider = GeoJSONFileProvider(args.geojson)
    else:
        provider = DuckDBStore(args.db_path)

    runtime = build_runtime(provider, refresh_seconds=0)
    try:
        jurisdictions = runtime.service.resolve(point)
    finally:
        runtime.close()

    if args.all:
        print(json.dumps([j.to_dict() for j in jurisdictions], indent=2))
    elif jurisdictions:
        print(json.dumps(jurisdictions[0].to_dict(), indent=2))
    else:
        print("null")


if __name__ == "__main__":
    main()
