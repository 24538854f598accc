"""Read-only SQLite store for a dog's diagnostic analyses."""
import json
import os
import sqlite3
from contextlib import contextmanager
from typing import Generator, Optional
import logging

from pydantic import ValidationError

from pet_context.models import DiagnosticRecord

from .config import get_settings

log = logging.getLogger(__name__)

XRAY_TABLE = "xray_analyses"
BLOOD_WORK_TABLE = "blood_work_analyses"
LAB_TABLE = "lab_analyses"
DIAGNOSTICS_TABLES = (XRAY_TABLE, BLOOD_WORK_TABLE, LAB_TABLE)


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the diagnostics tables; each row stores one analysis as JSON."""
    cur = conn.cursor()
    for table in DIAGNOSTICS_TABLES:
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {table} (
                id TEXT PRIMARY KEY,
                dog_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                analysis TEXT NOT NULL
            );
            """
        )
        cur.execute(
            f"CREATE INDEX IF NOT EXISTS idx_{table}_dog ON {table}(dog_id, created_at);"
        )
    conn.commit()


class DiagnosticsDatabase:
    """
    Read-only access to stored X-ray, blood work and lab analyses.

    Implements the DiagnosticsSource lookups used by the context builder.
    Opens a fresh read-only connection per lookup.
    """

    def __init__(self, db_path: Optional[str] = None, settings=None):
        self.settings = settings or get_settings()
        self.db_path = db_path or self.settings.diagnostics_db_path

    def available(self) -> bool:
        return os.path.exists(self.db_path)

    @contextmanager
    def get_conn(self) -> Generator[sqlite3.Connection, None, None]:
        """Get read-only connection to the diagnostics database."""
        yield from self._connect(self.db_path)

    def _connect(self, db_path: str) -> Generator[sqlite3.Connection, None, None]:
        """
        Create a read-only connection with proper isolation.
        Uses URI mode with mode=ro to ensure read-only access.
        """
        uri = f"file:{db_path}?mode=ro"
        conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        conn.row_factory = sqlite3.Row  # Enable dict-like row access
        try:
            yield conn
        finally:
            conn.close()

    def _list_for_dog(self, table: str, dog_id: str) -> list[DiagnosticRecord]:
        with self.get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT id, dog_id, created_at, analysis FROM {table}
                WHERE dog_id = ?
                ORDER BY created_at DESC
                """,
                (dog_id,),
            )
            rows = cursor.fetchall()

        records = []
        for row in rows:
            try:
                analysis = json.loads(row["analysis"])
            except json.JSONDecodeError:
                log.warning(f"Skipping {table} row {row['id']}: analysis is not valid JSON")
                continue
            if not isinstance(analysis, dict):
                continue
            try:
                records.append(
                    DiagnosticRecord.model_validate(
                        {**analysis, "id": row["id"], "dog_id": row["dog_id"], "created_at": row["created_at"]}
                    )
                )
            except ValidationError as e:
                log.warning(f"Skipping {table} row {row['id']}: {e}")
        return records

    def get_xray_analyses(self, dog_id: str) -> list[DiagnosticRecord]:
        return self._list_for_dog(XRAY_TABLE, dog_id)

    def get_blood_work_analyses(self, dog_id: str) -> list[DiagnosticRecord]:
        return self._list_for_dog(BLOOD_WORK_TABLE, dog_id)

    def get_lab_analyses(self, dog_id: str) -> list[DiagnosticRecord]:
        return self._list_for_dog(LAB_TABLE, dog_id)


# Singleton instance
diagnostics_db = DiagnosticsDatabase()
