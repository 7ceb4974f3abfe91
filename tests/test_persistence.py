"""Tests for timeline.store.persistence."""

import json
import logging

import pytest

from timeline.lib.errors import PersistenceWarning
from timeline.store.persistence import JsonFileKeyValueStore, MemoryKeyValueStore


class TestMemoryKeyValueStore:
    """In-process backend."""

    def test_get_missing(self):
        assert MemoryKeyValueStore().get("k") is None

    def test_set_and_get(self):
        kv = MemoryKeyValueStore()
        kv.set("k", "v")
        assert kv.get("k") == "v"

    def test_initial_data_copied(self):
        initial = {"k": "v"}
        kv = MemoryKeyValueStore(initial)
        kv.set("k", "changed")
        assert initial == {"k": "v"}


class TestJsonFileKeyValueStore:
    """JSON-file backend."""

    def test_missing_file_reads_empty(self, tmp_path):
        assert JsonFileKeyValueStore(tmp_path / "store.json").get("k") is None

    def test_set_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        kv = JsonFileKeyValueStore(path)
        kv.set("k", "v")
        assert json.loads(path.read_text()) == {"k": "v"}
        assert not path.with_suffix(".json.tmp").exists()

    def test_keys_are_independent(self, tmp_path):
        kv = JsonFileKeyValueStore(tmp_path / "store.json")
        kv.set("a", "1")
        kv.set("b", "2")
        assert kv.get("a") == "1"
        assert kv.get("b") == "2"

    def test_non_string_value_ignored(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"k": [1, 2]}))
        assert JsonFileKeyValueStore(path).get("k") is None

    def test_corrupt_file_raises_on_get(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        with pytest.raises(PersistenceWarning, match="Failed to read"):
            JsonFileKeyValueStore(path).get("k")

    def test_undecodable_file_raises_on_get(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_bytes(b"\xff\xfe")
        with pytest.raises(PersistenceWarning, match="Failed to read"):
            JsonFileKeyValueStore(path).get("k")

    def test_non_object_file_raises_on_get(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[]")
        with pytest.raises(PersistenceWarning, match="expected a JSON object"):
            JsonFileKeyValueStore(path).get("k")

    def test_set_rewrites_corrupt_file(self, tmp_path, caplog):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        kv = JsonFileKeyValueStore(path)
        with caplog.at_level(logging.WARNING):
            kv.set("k", "v")
        assert kv.get("k") == "v"
        assert "rewriting storage file" in caplog.text

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        kv = JsonFileKeyValueStore(blocker / "store.json")
        with pytest.raises(PersistenceWarning, match="Failed to write"):
            kv.set("k", "v")
