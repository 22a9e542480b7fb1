"""Tests for pydeduce.store: in-memory and JSON-file stores."""

import json

import pytest

from pydeduce.store import JsonFileStore, KeyValueStore, MemoryStore


class TestMemoryStore:
    def test_get_set(self):
        store = MemoryStore()
        assert store.get("law Truth") is None
        store.set("law Truth", "UNLOCKED")
        assert store.get("law Truth") == "UNLOCKED"

    def test_values_are_strings(self):
        store = MemoryStore()
        store.set("lines E", 4)
        assert store.get("lines E") == "4"

    def test_initial_data_is_copied(self):
        data = {"E": "solved"}
        store = MemoryStore(data)
        store.clear()
        assert data == {"E": "solved"}
        assert store.items() == {}


class TestJsonFileStore:
    def test_missing_file_is_empty(self, tmp_path):
        path = tmp_path / "progress.json"
        store = JsonFileStore(path)
        assert store.items() == {}
        assert not path.exists()

    def test_writes_through(self, tmp_path):
        path = tmp_path / "progress.json"
        JsonFileStore(path).set("E", "solved")
        assert json.loads(path.read_text()) == {"E": "solved"}
        assert JsonFileStore(path).get("E") == "solved"

    def test_clear_persists(self, tmp_path):
        path = tmp_path / "progress.json"
        store = JsonFileStore(path)
        store.set("E", "solved")
        store.clear()
        assert json.loads(path.read_text()) == {}

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "progress.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            JsonFileStore(path)


class TestInterface:
    def test_stores_satisfy_the_interface(self, tmp_path):
        assert isinstance(MemoryStore(), KeyValueStore)
        assert isinstance(JsonFileStore(tmp_path / "progress.json"), KeyValueStore)

    def test_any_object_with_the_methods_is_a_store(self):
        class DictStore:
            def __init__(self):
                self.data = {}

            def get(self, key):
                return self.data.get(key)

            def set(self, key, value):
                self.data[key] = value

            def clear(self):
                self.data.clear()

            def items(self):
                return dict(self.data)

        assert isinstance(DictStore(), KeyValueStore)
        assert not isinstance({}, KeyValueStore)

    def test_interface_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            KeyValueStore()
