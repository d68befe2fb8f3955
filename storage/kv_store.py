# storage/kv_store.py
"""
In-memory and JSON-file key-value stores.

The JSON file holds one object mapping keys to text values, the same shape a
browser's localStorage has.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from .base import KeyValueStore

log = logging.getLogger("storage")


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """Key-value store backed by a single JSON file, rewritten on every set."""

    def __init__(self, path: str | Path = "data/freshbite.json"):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        """
        Load the whole file. An undecodable file or a non-object top level
        reads as empty (logged); the next write replaces it.
        """
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as exc:
            log.warning("Malformed JSON store %s, treating as empty: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            log.warning(
                "Expected a JSON object in %s, got %s; treating as empty",
                self.path,
                type(data).__name__,
            )
            return {}
        out: Dict[str, str] = {}
        for k, v in data.items():
            if isinstance(v, str):
                out[str(k)] = v
            else:
                log.warning("Dropping non-text value for %s in %s", k, self.path)
        return out

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Replace atomically; readers never see a partial file.
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except Exception:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        log.debug("Wrote key %s to %s", key, self.path)

    def delete(self, key: str) -> bool:
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True

    def keys(self) -> List[str]:
        return list(self._read())
