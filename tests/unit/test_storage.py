"""
Tests for JSON file storage and its in-memory mock.
"""

import json

import pytest

from coach_admin.infrastructure.storage.client import (
    JsonFileStorage,
    MockCoachStorage,
    StorageConfig,
    StorageError,
    create_storage,
)


class TestJsonFileStorage:
    """Tests for the on-disk collection."""

    def test_missing_file_is_empty_collection(self, storage, data_file):
        assert not data_file.exists()
        assert storage.load() == []

    def test_save_creates_missing_directory(self, storage, data_file):
        storage.save([{"id": "1"}])

        assert data_file.exists()
        assert storage.load() == [{"id": "1"}]

    def test_saved_file_is_indented_json_array(self, storage, data_file):
        storage.save([{"id": "1"}, {"id": "2"}])

        text = data_file.read_text(encoding="utf-8")
        assert text.startswith("[\n  {")
        assert json.loads(text) == [{"id": "1"}, {"id": "2"}]

    def test_save_replaces_previous_content(self, storage):
        storage.save([{"id": "1"}, {"id": "2"}])
        storage.save([{"id": "2"}])

        assert storage.load() == [{"id": "2"}]

    def test_save_leaves_no_temporary_files(self, storage, data_file):
        storage.save([{"id": "1"}])
        storage.save([{"id": "2"}])

        assert [p.name for p in data_file.parent.iterdir()] == ["coaches.json"]

    def test_empty_file_is_empty_collection(self, storage, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("", encoding="utf-8")

        assert storage.load() == []

    def test_corrupt_file_raises_storage_error(self, storage, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError, match="corrupt"):
            storage.load()

    def test_non_array_file_raises_storage_error(self, storage, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text('{"id": "1"}', encoding="utf-8")

        with pytest.raises(StorageError, match="JSON array"):
            storage.load()

    def test_unwritable_location_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        storage = JsonFileStorage(StorageConfig(data_file=blocker / "coaches.json"))

        with pytest.raises(StorageError, match="Write failed"):
            storage.save([])


class TestMockCoachStorage:
    """Tests for in-memory storage."""

    def test_starts_empty(self):
        assert MockCoachStorage().load() == []

    def test_returns_copies(self):
        storage = MockCoachStorage([{"id": "1"}])

        loaded = storage.load()
        loaded[0]["id"] = "changed"

        assert storage.load() == [{"id": "1"}]


class TestCreateStorage:
    """Tests for the storage factory."""

    def test_mock_mode_returns_mock(self):
        assert isinstance(create_storage(mock_mode=True), MockCoachStorage)

    def test_file_mode_requires_config(self):
        with pytest.raises(ValueError, match="config is required"):
            create_storage()

    def test_file_mode_returns_json_storage(self, data_file):
        storage = create_storage(StorageConfig(data_file=data_file))
        assert isinstance(storage, JsonFileStorage)
        assert storage.path == data_file
