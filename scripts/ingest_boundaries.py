#!/usr/bin/env python3
"""CLI script to ingest boundary GeoJSON files into DuckDB."""
import argparse
import sys
from pathlib import Path
from jurismap.core.boundary_store import BoundaryStore
from jurismap.core.config import DUCKDB_PATH
from jurismap.core.duckdb_store import DuckDBStore
from jurismap.providers.geojson import GeoJSONFileProvider


def main():
    parser = argparse.ArgumentParser(description="Ingest jurisdiction boundaries into DuckDB")
    parser.add_argument("file", type=Path, help="GeoJSON file path")
    parser.add_argument("--db-path", type=Path, default=DUCKDB_PATH,
                       help="DuckDB database path")
    parser.add_argument("--append", action="store_true",
                       help="Keep existing rows instead of replacing the table")

    args = parser.parse_args()

    if not args.file.exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        sys.exit(1)

    print(f"Loading {args.file}...")
    records = GeoJSONFileProvider(args.file).fetch_records()
    print(f"Loaded {len(records)} features")

    db_store = DuckDBStore(args.db_path)
    written = db_store.ingest_records(records, replace=not args.append)
    print(f"✅ Stored {written} boundary records")

    # Dry-run a load so operators see rejected records now, not at serve time
    report = BoundaryStore().load(db_store)
    print(f"Validated: {report.loaded} loadable, {len(report.rejected)} rejected")
    for rejected in report.rejected:
        print(f"  - {rejected['id']}: {rejected['reason']}")

    db_store.close()


if __name__ == "__main__":
    main()
