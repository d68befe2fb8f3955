# storage/__init__.py
"""
Storage layer for FreshBite.

Key-value stores (memory, JSON file, SQLite) holding JSON blobs, plus the
food-inventory collections kept on top of them.
"""

from .base import KeyValueStore
from .kv_store import MemoryStore, JsonFileStore
from .sqlite_store import SQLiteStore, open_conn, ensure_schema, get_schema_version
from .schema import SCHEMA_VERSION
from .collections import FoodRepository, STORAGE_KEYS, read_json, write_json

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "SQLiteStore",
    "open_conn",
    "ensure_schema",
    "get_schema_version",
    "SCHEMA_VERSION",
    "FoodRepository",
    "STORAGE_KEYS",
    "read_json",
    "write_json",
    "make_store",
]


def make_store(kind: str = "memory", path: str | None = None) -> KeyValueStore:
    """Build a store by backend name: memory, json or sqlite."""
    if kind == "memory":
        return MemoryStore()
    if kind == "json":
        return JsonFileStore(path or "data/freshbite.json")
    if kind == "sqlite":
        return SQLiteStore(path or "data/freshbite.sqlite")
    raise ValueError(f"Unknown store backend: {kind}")
