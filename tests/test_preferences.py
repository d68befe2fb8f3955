import json

import pytest

from categorizer.preferences import CUSTOM_MAPPINGS_KEY, PreferenceStore
from categorizer.service import CategorizerService
from storage import JsonFileStore


def test_record_and_lookup(mem_store):
    prefs = PreferenceStore(mem_store)
    prefs.record_override("Paneer Tikka", "Meat & Protein")
    assert prefs.lookup("paneer tikka") == "Meat & Protein"
    assert prefs.lookup("  PANEER TIKKA ") == "Meat & Protein"
    assert prefs.lookup("paneer") is None


def test_record_is_idempotent(mem_store):
    prefs = PreferenceStore(mem_store)
    prefs.record_override("ghee", "Condiments & Sauces")
    first = mem_store.get(CUSTOM_MAPPINGS_KEY)
    prefs.record_override("ghee", "Condiments & Sauces")
    assert mem_store.get(CUSTOM_MAPPINGS_KEY) == first
    assert prefs.lookup("ghee") == "Condiments & Sauces"


def test_record_overwrites(mem_store):
    prefs = PreferenceStore(mem_store)
    prefs.record_override("corn", "Vegetables & Fruits")
    prefs.record_override("Corn", "Grains & Cereals")
    assert prefs.mappings() == {"corn": "Grains & Cereals"}


def test_persisted_shape(mem_store):
    PreferenceStore(mem_store).record_override(" Aloo ", "Vegetables & Fruits")
    assert json.loads(mem_store.get(CUSTOM_MAPPINGS_KEY)) == {
        "aloo": "Vegetables & Fruits"
    }


def test_forget_and_clear(mem_store):
    prefs = PreferenceStore(mem_store)
    prefs.record_override("aloo", "Vegetables & Fruits")
    prefs.record_override("dal", "Grains & Cereals")
    assert prefs.forget("ALOO") is True
    assert prefs.forget("aloo") is False
    assert prefs.mappings() == {"dal": "Grains & Cereals"}
    prefs.clear()
    assert prefs.mappings() == {}


class TestFailOpen:
    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"', "null"])
    def test_malformed_blob_reads_empty(self, mem_store, raw):
        mem_store.set(CUSTOM_MAPPINGS_KEY, raw)
        prefs = PreferenceStore(mem_store)
        assert prefs.mappings() == {}
        assert prefs.lookup("milk") is None

    def test_non_string_values_skipped(self, mem_store):
        mem_store.set(CUSTOM_MAPPINGS_KEY, json.dumps({"milk": 3, "aloo": "Snacks"}))
        assert PreferenceStore(mem_store).mappings() == {"aloo": "Snacks"}

    def test_unreadable_store(self, broken_store, tables):
        svc = CategorizerService(broken_store, tables)
        res = svc.classify("milk")
        assert res.category == "Milk & Dairy"

    def test_malformed_blob_is_replaced_on_write(self, mem_store):
        mem_store.set(CUSTOM_MAPPINGS_KEY, "{not json")
        prefs = PreferenceStore(mem_store)
        prefs.record_override("aloo", "Snacks")
        assert prefs.mappings() == {"aloo": "Snacks"}

    def test_malformed_blob_logged(self, mem_store, caplog):
        mem_store.set(CUSTOM_MAPPINGS_KEY, "{not json")
        with caplog.at_level("WARNING"):
            PreferenceStore(mem_store).mappings()
        assert "Malformed JSON" in caplog.text

    def test_corrupt_json_file_store_accepts_override(self, tmp_path):
        path = tmp_path / "fb.json"
        path.write_text("{not json", encoding="utf-8")
        prefs = PreferenceStore(JsonFileStore(path))
        assert prefs.mappings() == {}
        prefs.record_override("aloo", "Snacks")
        assert PreferenceStore(JsonFileStore(path)).lookup("aloo") == "Snacks"
