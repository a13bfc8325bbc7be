"""
Unit tests for walk stores.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from schema_walker.walk.store import FileWalkStore, InMemoryWalkStore, WalkStore


class TestInMemoryWalkStore:
    def test_get_missing_returns_none(self) -> None:
        assert InMemoryWalkStore().get("walk") is None

    def test_set_then_get(self) -> None:
        store = InMemoryWalkStore()
        store.set("walk", "{}")

        assert store.get("walk") == "{}"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryWalkStore(), WalkStore)


class TestFileWalkStore:
    """Tests for the JSON file store."""

    def test_missing_file_reads_as_empty(self, tmp_path: Path) -> None:
        store = FileWalkStore(tmp_path / "store.json")

        assert store.get("walk") is None

    def test_values_survive_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "store.json"
        FileWalkStore(path).set("walk", '{"steps": []}')

        assert FileWalkStore(path).get("walk") == '{"steps": []}'

    def test_other_keys_are_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

        FileWalkStore(path).set("walk", "x")

        assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "walk": "x"}

    def test_non_object_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            FileWalkStore(path).get("walk")

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        assert isinstance(FileWalkStore(tmp_path / "s.json"), WalkStore)
