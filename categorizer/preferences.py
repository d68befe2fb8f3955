# categorizer/preferences.py
"""
Learned category overrides, keyed by normalized product name.

The whole mapping is one JSON object under a single store key. Reads fail
open: an unreadable store or malformed blob behaves like an empty mapping.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from storage.base import KeyValueStore
from storage.collections import read_json, write_json
from categorizer.rules import normalize_name

log = logging.getLogger("categorizer.preferences")

CUSTOM_MAPPINGS_KEY = "freshbite_custom_categories"


class PreferenceStore:
    def __init__(self, store: KeyValueStore, key: str = CUSTOM_MAPPINGS_KEY):
        self.store = store
        self.key = key

    def mappings(self) -> Dict[str, str]:
        data = read_json(self.store, self.key, dict, {})
        out: Dict[str, str] = {}
        for name, category in data.items():
            if isinstance(category, str):
                out[name] = category
            else:
                log.warning("Ignoring non-string category for %r", name)
        return out

    def lookup(self, product_name: str) -> Optional[str]:
        """Exact normalized-name lookup; no fuzzy matching."""
        return self.mappings().get(normalize_name(product_name))

    def record_override(self, product_name: str, category: str) -> None:
        name = normalize_name(product_name)
        mappings = self.mappings()
        mappings[name] = category
        write_json(self.store, self.key, mappings)
        log.info("Learned %r -> %s", name, category)

    def forget(self, product_name: str) -> bool:
        name = normalize_name(product_name)
        mappings = self.mappings()
        if name not in mappings:
            return False
        del mappings[name]
        write_json(self.store, self.key, mappings)
        return True

    def clear(self) -> None:
        write_json(self.store, self.key, {})
