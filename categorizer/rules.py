# categorizer/rules.py
"""
Keyword rules for product categorization and storage suggestions.

Features:
- Learned mappings checked first (exact normalized name)
- Per-word keyword matching in both directions (word in keyword, keyword in word)
- First-word preference when several categories match
- Fixed category priority as the final tie-break
- Storage overrides (freezer keywords, room-temperature produce, bulk meat)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from fb_core.models import ClassificationResult, StorageSuggestion
from categorizer.tables import CategoryTables, load_tables

MIN_NAME_LENGTH = 2
LEARNED = "learned"

FREEZER_REASON = "frozen item"
CUPBOARD_REASON = "best stored at room temperature"


@dataclass
class KeywordMatch:
    """One (category, word) hit."""

    category: str
    word: str
    position: int


def normalize_name(name: Optional[str]) -> str:
    return (name or "").lower().strip()


def _word_matches(word: str, keyword: str) -> bool:
    # Either direction: "apples" holds "apple", "tom" sits inside "tomato".
    return word in keyword or keyword in word


def find_matches(words: List[str], tables: CategoryTables) -> List[KeywordMatch]:
    """
    Scan every category (table order) against every word.
    At most one match is recorded per (category, word).
    """
    matches: List[KeywordMatch] = []
    for category, keywords in tables.keywords.items():
        for i, word in enumerate(words):
            for keyword in keywords:
                if _word_matches(word, keyword):
                    matches.append(KeywordMatch(category, word, i))
                    break
    return matches


def resolve_matches(
    matches: List[KeywordMatch], tables: CategoryTables
) -> ClassificationResult:
    """Pick a category from the recorded matches."""
    if not matches:
        return ClassificationResult(tables.fallback_category, "low")

    if len(matches) == 1:
        m = matches[0]
        return ClassificationResult(m.category, "high", m.word)

    # A match on the first word beats everything else
    for m in matches:
        if m.position == 0:
            return ClassificationResult(m.category, "high", m.word)

    for category in tables.priority:
        for m in matches:
            if m.category == category:
                return ClassificationResult(m.category, "high", m.word)

    m = min(matches, key=lambda x: x.position)
    return ClassificationResult(m.category, "low", m.word)


def detect_category(
    product_name: Optional[str],
    tables: Optional[CategoryTables] = None,
    learned: Optional[Mapping[str, str]] = None,
) -> ClassificationResult:
    """
    Map a free-text product name to a category.

    Order:
    1. Names shorter than two characters (after trim) -> fallback, low
    2. Learned mapping on the normalized name -> high, matched "learned"
    3. Keyword matches resolved by resolve_matches()
    """
    tables = tables or load_tables()
    normalized = normalize_name(product_name)
    if len(normalized) < MIN_NAME_LENGTH:
        return ClassificationResult(tables.fallback_category, "low")

    if learned:
        mapped = learned.get(normalized)
        if mapped:
            return ClassificationResult(mapped, "high", LEARNED)

    words = normalized.split()
    return resolve_matches(find_matches(words, tables), tables)


def _default_reason(category: str, storage: str) -> str:
    if storage == "Fridge":
        if category == "Milk & Dairy":
            return "perishable dairy"
        if category == "Vegetables & Fruits":
            return "fresh produce"
        if category == "Beverages":
            return "best served cold"
        return "perishable"
    return {
        "Freezer": "long-term storage",
        "Pantry": "dry storage item",
        "Cupboard": "shelf-stable snack",
    }.get(storage, "recommended")


def suggest_storage(
    category: str,
    product_name: Optional[str],
    tables: Optional[CategoryTables] = None,
) -> StorageSuggestion:
    """
    Recommend a storage location for a categorized product.
    Keyword overrides in the name win over the category default.
    """
    tables = tables or load_tables()
    name = (product_name or "").lower()

    if any(k in name for k in tables.freezer_keywords):
        return StorageSuggestion("Freezer", FREEZER_REASON)

    if any(k in name for k in tables.cupboard_exceptions):
        return StorageSuggestion("Cupboard", CUPBOARD_REASON)

    if category == "Meat & Protein":
        if "kg" in name or "kilogram" in name:
            return StorageSuggestion("Freezer", "large quantity, better frozen")
        return StorageSuggestion("Fridge", "perishable protein")

    storage = tables.default_storage(category)
    return StorageSuggestion(storage, _default_reason(category, storage))
