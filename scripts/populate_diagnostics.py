#!/usr/bin/env python3
"""
Populate the diagnostics SQLite database from a JSON file.

The JSON file holds three lists of analyses, keyed by table name
(xray_analyses, blood_work_analyses, lab_analyses). Each analysis needs
dog_id and created_at; everything else is stored as the analysis payload.

Usage:
    python scripts/populate_diagnostics.py [path/to/diagnostics.json]
"""
import json
import os
import sqlite3
import sys
import uuid
from pathlib import Path

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR))
sys.path.insert(0, str(BASE_DIR / "src"))

from server.context_api.database import DIAGNOSTICS_TABLES, create_schema  # noqa: E402

DEFAULT_SOURCE = BASE_DIR / "sample_data" / "diagnostics.json"
DB_FILE = "diagnostics.db"


def populate_table(conn: sqlite3.Connection, table_name: str, analyses: list) -> int:
    """
    Insert analyses into one diagnostics table.

    Args:
        conn: Open connection to the diagnostics database
        table_name: One of DIAGNOSTICS_TABLES
        analyses: List of analysis dicts with dog_id and created_at

    Returns:
        Number of rows inserted
    """
    rows = []
    for analysis in analyses:
        payload = dict(analysis)
        record_id = payload.pop("id", None) or str(uuid.uuid4())
        dog_id = payload.pop("dog_id")
        created_at = payload.pop("created_at")
        rows.append((record_id, dog_id, created_at, json.dumps(payload)))

    conn.executemany(
        f"INSERT OR REPLACE INTO {table_name} (id, dog_id, created_at, analysis) VALUES (?, ?, ?, ?)",
        rows,
    )
    conn.commit()
    return len(rows)


def main():
    """Populate the diagnostics database."""
    source = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SOURCE
    db_path = Path(os.getenv("DATA_PATH", BASE_DIR)) / DB_FILE

    print("=" * 60)
    print("Pawsy Diagnostics Database Population Script")
    print("=" * 60)
    print(f"\nSource: {source}\n")

    if not source.exists():
        print(f"  ERROR: JSON file not found: {source}")
        return

    with open(source, "r", encoding="utf-8") as f:
        data = json.load(f)

    # Remove existing database file
    if db_path.exists():
        os.remove(db_path)
        print(f"  Removed existing: {db_path.name}")

    conn = sqlite3.connect(db_path)
    create_schema(conn)

    total_rows = 0
    for table_name in DIAGNOSTICS_TABLES:
        count = populate_table(conn, table_name, data.get(table_name, []))
        total_rows += count
        print(f"  {table_name}: {count} rows")

    conn.close()

    print("=" * 60)
    print(f"Complete! Total rows: {total_rows}")
    print("=" * 60)
    size_kb = db_path.stat().st_size / 1024
    print(f"\nDatabase file: {db_path} ({size_kb:.1f} KB)")


if __name__ == "__main__":
    main()
