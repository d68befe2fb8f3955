# storage/sqlite_store.py
"""
SQLite-backed key-value store.

One row per key; values are the same JSON text the other backends hold.
"""
from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .base import KeyValueStore
from .schema import ALL_TABLES, SCHEMA_VERSION


def open_conn(path: str = "data/freshbite.sqlite") -> sqlite3.Connection:
    """Open a database connection with row factory."""
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Get current schema version, or 0 if not initialized."""
    cur = conn.cursor()
    try:
        cur.execute("SELECT MAX(version) FROM schema_version")
        row = cur.fetchone()
        return row[0] if row and row[0] else 0
    except sqlite3.OperationalError:
        # schema_version table doesn't exist
        return 0


def ensure_schema(conn: sqlite3.Connection) -> int:
    """Create tables if missing and record the schema version."""
    cur = conn.cursor()
    for ddl in ALL_TABLES:
        cur.execute(ddl)
    if get_schema_version(conn) < SCHEMA_VERSION:
        cur.execute(
            "INSERT OR REPLACE INTO schema_version (version, applied_at) VALUES (?, ?)",
            (SCHEMA_VERSION, datetime.now(timezone.utc).isoformat()),
        )
    conn.commit()
    return SCHEMA_VERSION


class SQLiteStore(KeyValueStore):
    """
    Key-value store in a SQLite file.
    The connection is opened lazily; use as a context manager to close it.
    """

    def __init__(self, db_path: str = "data/freshbite.sqlite"):
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = open_conn(self.db_path)
            ensure_schema(self._conn)
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def get(self, key: str) -> Optional[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cur.fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        cur = self.conn.cursor()
        cur.execute(
            """
            INSERT INTO kv (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value),
        )
        self.conn.commit()

    def delete(self, key: str) -> bool:
        cur = self.conn.cursor()
        cur.execute("DELETE FROM kv WHERE key = ?", (key,))
        self.conn.commit()
        return cur.rowcount > 0

    def keys(self) -> List[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT key FROM kv ORDER BY key")
        return [r["key"] for r in cur.fetchall()]
