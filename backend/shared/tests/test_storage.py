"""Tests for snapshot storage."""

import pytest

from shared.storage import InMemorySnapshotStorage, SnapshotStorage


class TestInMemorySnapshotStorage:
    def test_load_returns_none_for_unknown_key(self):
        storage = InMemorySnapshotStorage()

        assert storage.load_snapshot("missing") is None

    def test_saves_and_loads_content(self):
        storage = InMemorySnapshotStorage()
        content = '{"game_id":"g1","current_player_index":1}'

        storage.save_snapshot("g1", content)

        assert storage.load_snapshot("g1") == content

    def test_overwrites_existing_snapshot(self):
        storage = InMemorySnapshotStorage()

        storage.save_snapshot("g1", "original")
        storage.save_snapshot("g1", "updated")

        assert storage.load_snapshot("g1") == "updated"
        assert storage.keys() == ["g1"]

    def test_keeps_keys_independent(self):
        storage = InMemorySnapshotStorage()

        storage.save_snapshot("g1", "one")
        storage.save_snapshot("g2", "two")

        assert storage.load_snapshot("g1") == "one"
        assert storage.load_snapshot("g2") == "two"

    def test_rejects_empty_key(self):
        storage = InMemorySnapshotStorage()

        with pytest.raises(ValueError, match="must not be empty"):
            storage.save_snapshot("", "content")

    def test_satisfies_protocol(self):
        storage: SnapshotStorage = InMemorySnapshotStorage()

        storage.save_snapshot("g1", "content")
        assert storage.load_snapshot("g1") == "content"
