"""Tests for key-value storage backends."""

import json
from pathlib import Path

from fetchstate import KeyValueStorage, LocalStorage, MemoryStorage


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    def test_roundtrip_and_remove(self, storage: MemoryStorage) -> None:
        """Test basic get/set/remove."""
        assert storage.get_item("theme") is None
        storage.set_item("theme", "dark")
        assert storage.get_item("theme") == "dark"
        storage.remove_item("theme")
        storage.remove_item("theme")
        assert storage.get_item("theme") is None

    def test_clear_and_keys(self, storage: MemoryStorage) -> None:
        """Test listing and clearing keys."""
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        assert sorted(storage.keys()) == ["a", "b"]
        storage.clear()
        assert storage.keys() == []

    def test_satisfies_protocol(self, storage: MemoryStorage) -> None:
        """Test that MemoryStorage is a KeyValueStorage."""
        assert isinstance(storage, KeyValueStorage)


class TestLocalStorage:
    """Tests for the JSON-file backend."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        """Test that a fresh path reads as empty."""
        store = LocalStorage(tmp_path / "store.json")
        assert store.keys() == []

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        """Test that values survive reopening the file."""
        path = tmp_path / "nested" / "store.json"
        LocalStorage(path).set_item("theme", "dark")
        assert json.loads(path.read_text()) == {"theme": "dark"}
        assert LocalStorage(path).get_item("theme") == "dark"

    def test_remove_and_clear_persist(self, tmp_path: Path) -> None:
        """Test that removals are written back."""
        path = tmp_path / "store.json"
        store = LocalStorage(path)
        store.set_item("a", "1")
        store.set_item("b", "2")
        store.remove_item("a")
        assert LocalStorage(path).keys() == ["b"]
        store.clear()
        assert LocalStorage(path).keys() == []

    def test_unreadable_file_is_ignored(self, tmp_path: Path) -> None:
        """Test that a corrupt file reads as empty."""
        path = tmp_path / "store.json"
        path.write_text("{not json")
        assert LocalStorage(path).keys() == []

    def test_invalid_utf8_file_is_ignored(self, tmp_path: Path) -> None:
        """Test that undecodable bytes read as empty instead of raising."""
        path = tmp_path / "store.json"
        path.write_bytes(b'{"theme": "\xff\xfe"}')
        store = LocalStorage(path)
        assert store.keys() == []
        store.set_item("theme", "dark")
        assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}

    def test_non_object_file_is_ignored(self, tmp_path: Path) -> None:
        """Test that a JSON list reads as empty."""
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")
        assert LocalStorage(path).keys() == []

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        """Test that LocalStorage is a KeyValueStorage."""
        assert isinstance(LocalStorage(tmp_path / "s.json"), KeyValueStorage)
