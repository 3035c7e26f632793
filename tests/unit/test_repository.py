"""
Tests for the coach repository.

These run against a real JSON file in a temporary directory, so they
cover the whole read-modify-write cycle.
"""

import threading

import pytest

from coach_admin.core.coaches.errors import (
    CoachNotFoundError,
    DuplicateEmailError,
    InvalidCoachError,
)
from coach_admin.core.coaches.models import CoachStatus, CoachUpdate
from coach_admin.infrastructure.repositories.coaches import (
    DELETE_ACKNOWLEDGEMENT,
    CoachRepository,
)
from coach_admin.infrastructure.storage.client import (
    JsonFileStorage,
    MockCoachStorage,
    StorageConfig,
    StorageError,
)


class TestCreate:
    """Tests for create_coach."""

    def test_create_assigns_unique_id_and_timestamp(self, repository, coach_fields):
        created = [
            repository.create_coach(coach_fields(email=f"coach{i}@x.com"))
            for i in range(5)
        ]

        assert len({coach.id for coach in created}) == 5
        assert all(coach.created_at is not None for coach in created)

    def test_create_persists_record(self, repository, storage, coach_fields):
        coach = repository.create_coach(coach_fields())

        records = storage.load()
        assert len(records) == 1
        assert records[0]["id"] == coach.id
        assert records[0]["createdAt"].endswith("Z")

    @pytest.mark.parametrize("overrides", [
        {"rating": 0},
        {"rating": 6},
        {"rating": "abc"},
        {"status": "pending"},
        {"email": "not-an-email"},
        {"name": None},
        {"category": ""},
    ])
    def test_invalid_input_writes_nothing(self, repository, storage, coach_fields, overrides):
        with pytest.raises(InvalidCoachError):
            repository.create_coach(coach_fields(**overrides))

        assert storage.load() == []

    def test_duplicate_email_is_rejected(self, repository, coach_fields):
        repository.create_coach(coach_fields(email="ann@x.com"))

        with pytest.raises(DuplicateEmailError, match="Email already exists"):
            repository.create_coach(coach_fields(name="Other", email="ann@x.com"))

        assert len(repository.list_coaches()) == 1

    def test_duplicate_email_check_ignores_case(self, repository, coach_fields):
        repository.create_coach(coach_fields(email="ann@x.com"))

        with pytest.raises(DuplicateEmailError):
            repository.create_coach(coach_fields(email="ANN@x.com"))


class TestUpdate:
    """Tests for update_coach."""

    def test_partial_update_leaves_other_fields(self, repository, coach_fields):
        coach = repository.create_coach(coach_fields())

        updated = repository.update_coach(coach.id, {"status": "inactive"})

        assert updated.status is CoachStatus.INACTIVE
        assert updated.name == coach.name
        assert updated.email == coach.email
        assert updated.rating == coach.rating
        assert updated.created_at == coach.created_at

    def test_update_without_email_skips_duplicate_check(self, repository, coach_fields):
        coach = repository.create_coach(coach_fields())

        updated = repository.update_coach(coach.id, {"name": "Ann Smith"})

        assert updated.name == "Ann Smith"

    def test_update_to_own_email_succeeds(self, repository, coach_fields):
        coach = repository.create_coach(coach_fields(email="ann@x.com"))

        updated = repository.update_coach(coach.id, {"email": "ann@x.com", "rating": 5})

        assert updated.rating == 5

    def test_update_to_other_coach_email_fails(self, repository, coach_fields):
        repository.create_coach(coach_fields(email="ann@x.com"))
        bob = repository.create_coach(coach_fields(name="Bob", email="bob@x.com"))

        with pytest.raises(DuplicateEmailError):
            repository.update_coach(bob.id, {"email": "ann@x.com"})

        assert repository.get_coach(bob.id).email == "bob@x.com"

    @pytest.mark.parametrize("changes", [
        {"rating": 0},
        {"rating": 7},
        {"rating": "five"},
        {"status": "pending"},
        {"email": "nope"},
        {"name": ""},
    ])
    def test_invalid_update_is_rejected(self, repository, coach_fields, changes):
        coach = repository.create_coach(coach_fields())

        with pytest.raises(InvalidCoachError):
            repository.update_coach(coach.id, changes)

        assert repository.get_coach(coach.id) == coach

    def test_unknown_id_wins_over_bad_fields(self, repository):
        with pytest.raises(CoachNotFoundError):
            repository.update_coach("missing", {"rating": 99})

    def test_immutable_fields_are_ignored(self, repository, coach_fields):
        coach = repository.create_coach(coach_fields())

        updated = repository.update_coach(
            coach.id,
            {"id": "hijack", "createdAt": "2000-01-01T00:00:00.000Z", "category": "Yoga"},
        )

        assert updated.id == coach.id
        assert updated.created_at == coach.created_at
        assert updated.category == "Yoga"

    def test_accepts_coach_update_object(self, repository, coach_fields):
        coach = repository.create_coach(coach_fields())

        updated = repository.update_coach(coach.id, CoachUpdate(rating=2))

        assert updated.rating == 2

    def test_empty_update_returns_record_unchanged(self, repository, coach_fields):
        coach = repository.create_coach(coach_fields())

        assert repository.update_coach(coach.id, {}) == coach


class TestDelete:
    """Tests for delete_coach and get_coach."""

    def test_delete_unknown_id_raises_not_found(self, repository):
        with pytest.raises(CoachNotFoundError):
            repository.delete_coach("missing")

    def test_deleted_coach_is_gone(self, repository, coach_fields):
        coach = repository.create_coach(coach_fields())

        assert repository.delete_coach(coach.id) == DELETE_ACKNOWLEDGEMENT

        with pytest.raises(CoachNotFoundError):
            repository.get_coach(coach.id)

    def test_three_creates_and_one_delete(self, repository, coach_fields):
        ann = repository.create_coach(coach_fields(name="Ann", email="ann@x.com"))
        bob = repository.create_coach(coach_fields(name="Bob", email="bob@x.com"))
        cat = repository.create_coach(coach_fields(name="Cat", email="cat@x.com"))
        repository.update_coach(cat.id, {"rating": 2})

        repository.delete_coach(bob.id)

        remaining = repository.list_coaches()
        assert [c.id for c in remaining] == [ann.id, cat.id]
        assert remaining[0] == ann
        assert remaining[1].rating == 2


class TestPersistence:
    """Tests for durability across repository instances."""

    def test_reload_yields_identical_collection(self, data_file, coach_fields):
        first = CoachRepository(JsonFileStorage(StorageConfig(data_file=data_file)))
        for i, category in enumerate(["Yoga", "Fitness", "Pilates"]):
            first.create_coach(coach_fields(email=f"c{i}@x.com", category=category, rating=i + 2.5))
        before = first.list_coaches()

        # Simulate a process restart: brand new storage and repository
        second = CoachRepository(JsonFileStorage(StorageConfig(data_file=data_file)))

        assert second.list_coaches() == before

    def test_malformed_record_raises_storage_error(self):
        storage = MockCoachStorage([{"id": "1", "name": "No email"}])
        repository = CoachRepository(storage)

        with pytest.raises(StorageError, match="Malformed"):
            repository.check_storage()

    def test_corrupt_file_lists_as_empty(self, repository, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{not json", encoding="utf-8")

        assert repository.list_coaches() == []

    def test_corrupt_file_is_never_overwritten(self, repository, data_file, coach_fields):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError):
            repository.create_coach(coach_fields())
        with pytest.raises(StorageError):
            repository.get_coach("1")

        assert data_file.read_text(encoding="utf-8") == "{not json"

    def test_concurrent_creates_in_one_process_are_not_lost(self, coach_fields):
        repository = CoachRepository(MockCoachStorage(), serialize_writes=True)

        threads = [
            threading.Thread(
                target=repository.create_coach,
                args=(coach_fields(email=f"t{i}@x.com"),),
            )
            for i in range(20)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(repository.list_coaches()) == 20
