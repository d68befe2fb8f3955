import pytest

from categorizer.service import CategorizerService, UnknownCategoryError


def test_learned_round_trip(svc):
    svc.learn("Aloo", "Vegetables & Fruits")
    res = svc.classify("aloo")
    assert res.category == "Vegetables & Fruits"
    assert res.confidence == "high"
    assert res.matched_keyword == "learned"


def test_learned_overrides_keywords(svc):
    assert svc.classify("corn flakes").category == "Grains & Cereals"
    svc.learn("corn flakes", "Snacks")
    assert svc.classify("  Corn Flakes").category == "Snacks"


def test_learn_rejects_unknown_category(svc):
    with pytest.raises(UnknownCategoryError, match="Tubers"):
        svc.learn("aloo", "Tubers")
    assert svc.preferences.mappings() == {}


def test_learn_accepts_others(svc):
    svc.learn("dish soap", "Others")
    assert svc.classify("dish soap").category == "Others"


def test_forget_restores_keyword_detection(svc):
    svc.learn("milk", "Snacks")
    assert svc.forget("milk")
    assert svc.classify("milk").category == "Milk & Dairy"


def test_suggest_combines_category_and_storage(svc):
    s = svc.suggest("chicken 2kg")
    assert s.category == "Meat & Protein"
    assert s.storage == "Freezer"
    assert s.reason == "large quantity, better frozen"


def test_suggest_uses_learned_category(svc):
    svc.learn("kulfi", "Milk & Dairy")
    s = svc.suggest("kulfi")
    assert s.category == "Milk & Dairy"
    assert s.matched_keyword == "learned"
    assert s.storage == "Fridge"
    assert s.reason == "perishable dairy"


def test_suggest_unknown_product(svc):
    s = svc.suggest("xyzabc123")
    assert (s.category, s.confidence) == ("Others", "low")
    assert (s.storage, s.reason) == ("Pantry", "dry storage item")


def test_learned_survives_new_service(sqlite_store, tables):
    CategorizerService(sqlite_store, tables).learn("aloo", "Snacks")
    assert CategorizerService(sqlite_store, tables).classify("ALOO").category == "Snacks"


def test_quantity_placeholder(svc):
    assert svc.quantity_placeholder("Beverages") == "e.g., 1 liter, 6 cans"
    assert svc.quantity_placeholder("Gadgets") == "e.g., 500g, 2 units"


def test_default_store_is_memory(tables):
    svc = CategorizerService(tables=tables)
    svc.learn("aloo", "Snacks")
    assert svc.classify("aloo").category == "Snacks"
