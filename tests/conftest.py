import pytest

from categorizer.service import CategorizerService
from categorizer.tables import load_tables
from storage import FoodRepository, JsonFileStore, MemoryStore, SQLiteStore
from storage.base import KeyValueStore


class _BrokenStore(KeyValueStore):
    """Store whose reads always fail, as an unreadable backend would."""

    def __init__(self):
        self.writes = {}

    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        self.writes[key] = value

    def delete(self, key):
        return False

    def keys(self):
        return []


@pytest.fixture(scope="session")
def tables():
    return load_tables()


@pytest.fixture
def mem_store():
    return MemoryStore()


@pytest.fixture
def broken_store():
    return _BrokenStore()


@pytest.fixture
def json_store(tmp_path):
    return JsonFileStore(tmp_path / "fb.json")


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLiteStore(str(tmp_path / "fb.sqlite"))
    yield store
    store.close()


@pytest.fixture(params=["memory", "json", "sqlite"])
def any_store(request, tmp_path):
    if request.param == "memory":
        yield MemoryStore()
    elif request.param == "json":
        yield JsonFileStore(tmp_path / "fb.json")
    else:
        store = SQLiteStore(str(tmp_path / "fb.sqlite"))
        yield store
        store.close()


@pytest.fixture
def svc(mem_store, tables):
    return CategorizerService(mem_store, tables)


@pytest.fixture
def repo(mem_store):
    return FoodRepository(mem_store)
