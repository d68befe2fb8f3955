# categorizer/tables.py
"""
Static keyword and storage tables for the categorizer.

Tables are read once from config/categories.yaml and exposed as read-only
mappings of tuples. Category order in the YAML file is the scan order of the
keyword classifier, so it is preserved.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

log = logging.getLogger("categorizer.tables")

DEFAULT_TABLES_PATH = Path(__file__).resolve().parents[1] / "config" / "categories.yaml"

OTHERS = "Others"
STORAGE_LOCATIONS = ("Fridge", "Freezer", "Pantry", "Cupboard")


@dataclass(frozen=True)
class CategoryTables:
    keywords: Mapping[str, Tuple[str, ...]]
    storage_defaults: Mapping[str, str]
    placeholders: Mapping[str, str]
    priority: Tuple[str, ...]
    cupboard_exceptions: Tuple[str, ...]
    freezer_keywords: Tuple[str, ...]
    fallback_category: str = OTHERS
    fallback_storage: str = "Pantry"

    @property
    def categories(self) -> Tuple[str, ...]:
        """Every assignable category, fallback last."""
        return tuple(self.keywords) + (self.fallback_category,)

    def default_storage(self, category: str) -> str:
        return self.storage_defaults.get(category, self.fallback_storage)

    def placeholder(self, category: str) -> str:
        return self.placeholders.get(
            category, self.placeholders.get(self.fallback_category, "")
        )


def _words(values: Any, where: str) -> Tuple[str, ...]:
    if values is None:
        return ()
    if not isinstance(values, list):
        raise ValueError(f"{where}: expected a list, got {type(values).__name__}")
    return tuple(str(v).lower().strip() for v in values if str(v).strip())


def parse_tables(cfg: Dict[str, Any]) -> CategoryTables:
    """Build CategoryTables from a parsed YAML document."""
    if not isinstance(cfg, dict) or not isinstance(cfg.get("categories"), dict):
        raise ValueError("category tables need a 'categories' mapping")

    fallback = cfg.get("fallback") or {}
    fallback_category = str(fallback.get("category", OTHERS))
    fallback_storage = str(fallback.get("storage", "Pantry"))

    keywords: Dict[str, Tuple[str, ...]] = {}
    storage: Dict[str, str] = {fallback_category: fallback_storage}
    placeholders: Dict[str, str] = {}
    if "placeholder" in fallback:
        placeholders[fallback_category] = str(fallback["placeholder"])

    for name, entry in cfg["categories"].items():
        entry = entry or {}
        keywords[name] = _words(entry.get("keywords"), f"categories.{name}.keywords")
        if entry.get("storage"):
            storage[name] = str(entry["storage"])
        else:
            log.warning("No default storage for %r; falling back to %s", name, fallback_storage)
        if entry.get("placeholder"):
            placeholders[name] = str(entry["placeholder"])

    for name, loc in storage.items():
        if loc not in STORAGE_LOCATIONS:
            log.warning("Unknown storage location %r for category %r", loc, name)

    priority = tuple(str(p) for p in cfg.get("priority") or [])
    if not priority:
        priority = tuple(keywords) + (fallback_category,)

    overrides = cfg.get("storage_overrides") or {}

    return CategoryTables(
        keywords=MappingProxyType(keywords),
        storage_defaults=MappingProxyType(storage),
        placeholders=MappingProxyType(placeholders),
        priority=priority,
        cupboard_exceptions=_words(overrides.get("cupboard"), "storage_overrides.cupboard"),
        freezer_keywords=_words(overrides.get("freezer"), "storage_overrides.freezer"),
        fallback_category=fallback_category,
        fallback_storage=fallback_storage,
    )


@lru_cache(maxsize=None)
def load_tables(path: Optional[str] = None) -> CategoryTables:
    """Load tables from YAML (default: config/categories.yaml). Cached per path."""
    p = Path(path) if path else DEFAULT_TABLES_PATH
    with open(p, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    tables = parse_tables(cfg)
    log.debug("Loaded %d categories from %s", len(tables.keywords), p)
    return tables
