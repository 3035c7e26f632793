"""
Shared fixtures.

Every fixture works against a temporary data file (or in-memory storage),
never against the real `data/` directory.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from coach_admin.api.dependencies import get_coach_repository
from coach_admin.infrastructure.repositories.coaches import CoachRepository
from coach_admin.infrastructure.storage.client import JsonFileStorage, StorageConfig
from coach_admin.main import create_app


@pytest.fixture
def data_file(tmp_path):
    """Path of a data file whose directory doesn't exist yet."""
    return tmp_path / "data" / "coaches.json"


@pytest.fixture
def storage(data_file) -> JsonFileStorage:
    return JsonFileStorage(StorageConfig(data_file=data_file))


@pytest.fixture
def repository(storage) -> CoachRepository:
    return CoachRepository(storage)


@pytest.fixture
def coach_fields():
    """Factory for valid creation fields, with per-test overrides."""
    def make(**overrides: Any) -> dict[str, Any]:
        fields = {
            "name": "Ann",
            "email": "ann@x.com",
            "category": "Fitness",
            "rating": 4,
            "status": "active",
        }
        fields.update(overrides)
        return fields
    return make


@pytest.fixture
def client(repository):
    """TestClient wired to the temporary repository."""
    app = create_app()
    app.dependency_overrides[get_coach_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
