# storage/schema.py
"""
SQLite schema for the key-value store.

Schema version history:
  v1: kv table (key, value, updated_at)
"""
from __future__ import annotations

SCHEMA_VERSION = 1

CREATE_SCHEMA_VERSION = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL
);
"""

CREATE_KV = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""

ALL_TABLES = [
    CREATE_SCHEMA_VERSION,
    CREATE_KV,
]
