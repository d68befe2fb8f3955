"""
Tests for storage location suggestions.
"""
import pytest

from categorizer.rules import suggest_storage
from categorizer.tables import CategoryTables


class TestOverrides:
    def test_bulk_meat_goes_to_freezer(self, tables):
        s = suggest_storage("Meat & Protein", "chicken 2kg", tables)
        assert s.storage == "Freezer"
        assert s.reason == "large quantity, better frozen"

    def test_kilogram_spelled_out(self, tables):
        s = suggest_storage("Meat & Protein", "mutton 1 kilogram", tables)
        assert s.storage == "Freezer"

    def test_banana_stays_out_of_fridge(self, tables):
        s = suggest_storage("Vegetables & Fruits", "banana", tables)
        assert s.storage == "Cupboard"
        assert s.reason == "best stored at room temperature"

    def test_freezer_keyword_beats_category(self, tables):
        s = suggest_storage("Snacks", "frozen ice cream", tables)
        assert s.storage == "Freezer"
        assert s.reason == "frozen item"

    def test_freezer_checked_before_cupboard(self, tables):
        s = suggest_storage("Vegetables & Fruits", "frozen potato wedges", tables)
        assert s.storage == "Freezer"

    def test_cupboard_checked_before_meat_rule(self, tables):
        s = suggest_storage("Meat & Protein", "chicken with garlic 2kg", tables)
        assert s.storage == "Cupboard"

    def test_name_case_ignored(self, tables):
        assert suggest_storage("Vegetables & Fruits", "BANANA", tables).storage == "Cupboard"

    def test_ice_matches_inside_words(self, tables):
        # Substring match: "ice" is found in "rice"
        s = suggest_storage("Grains & Cereals", "basmati rice", tables)
        assert s.storage == "Freezer"
        assert s.reason == "frozen item"


class TestCategoryDefaults:
    @pytest.mark.parametrize(
        "category,name,storage,reason",
        [
            ("Meat & Protein", "salmon fillet", "Fridge", "perishable protein"),
            ("Milk & Dairy", "paneer", "Fridge", "perishable dairy"),
            ("Vegetables & Fruits", "spinach", "Fridge", "fresh produce"),
            ("Beverages", "cola", "Fridge", "best served cold"),
            ("Grains & Cereals", "oats", "Pantry", "dry storage item"),
            ("Condiments & Sauces", "ketchup", "Pantry", "dry storage item"),
            ("Snacks", "chips", "Cupboard", "shelf-stable snack"),
            ("Others", "batteries", "Pantry", "dry storage item"),
        ],
    )
    def test_defaults(self, tables, category, name, storage, reason):
        s = suggest_storage(category, name, tables)
        assert (s.storage, s.reason) == (storage, reason)

    def test_unknown_category_is_pantry(self, tables):
        s = suggest_storage("Gadgets", "usb cable", tables)
        assert s.storage == "Pantry"
        assert s.reason == "dry storage item"

    def test_other_fridge_category_reason(self):
        tables = CategoryTables(
            keywords={"Leftovers": ("dal",)},
            storage_defaults={"Leftovers": "Fridge", "Shed": "Shed"},
            placeholders={},
            priority=(),
            cupboard_exceptions=(),
            freezer_keywords=(),
        )
        assert suggest_storage("Leftovers", "dal", tables).reason == "perishable"
        assert suggest_storage("Shed", "dal", tables).reason == "recommended"
