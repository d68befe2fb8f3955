# categorizer/service.py
"""
Categorizer service: learned overrides, keyword rules and storage advice.
"""
from __future__ import annotations

import logging
from typing import Optional

from fb_core.models import ClassificationResult, StorageSuggestion, Suggestion
from categorizer.preferences import PreferenceStore
from categorizer.rules import detect_category, suggest_storage
from categorizer.tables import CategoryTables, load_tables
from storage.base import KeyValueStore
from storage.kv_store import MemoryStore

log = logging.getLogger("categorizer")


class UnknownCategoryError(ValueError):
    """Raised when a learned category is not one of the known labels."""


class CategorizerService:
    """Service for categorizing product names and suggesting storage."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        tables: Optional[CategoryTables] = None,
    ):
        self.tables = tables or load_tables()
        self.preferences = PreferenceStore(store if store is not None else MemoryStore())

    def classify(self, product_name: str) -> ClassificationResult:
        result = detect_category(
            product_name, self.tables, learned=self.preferences.mappings()
        )
        log.debug(
            "classify %r -> %s (%s, %s)",
            product_name,
            result.category,
            result.confidence,
            result.matched_keyword,
        )
        return result

    def suggest_storage(self, category: str, product_name: str) -> StorageSuggestion:
        return suggest_storage(category, product_name, self.tables)

    def suggest(self, product_name: str) -> Suggestion:
        """Category and storage for one product name."""
        cat = self.classify(product_name)
        where = self.suggest_storage(cat.category, product_name)
        return Suggestion(
            category=cat.category,
            confidence=cat.confidence,
            storage=where.storage,
            reason=where.reason,
            matched_keyword=cat.matched_keyword,
        )

    def learn(self, product_name: str, category: str) -> None:
        """Remember a user's category choice for this product name."""
        if category not in self.tables.categories:
            raise UnknownCategoryError(
                f"Unknown category {category!r}; expected one of: "
                + ", ".join(self.tables.categories)
            )
        self.preferences.record_override(product_name, category)

    def forget(self, product_name: str) -> bool:
        return self.preferences.forget(product_name)

    def quantity_placeholder(self, category: str) -> str:
        return self.tables.placeholder(category)
