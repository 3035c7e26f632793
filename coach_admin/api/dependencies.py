"""
FastAPI dependency injection.

Dependencies provide the repository and configuration to route handlers.
Routes never build their own storage, so tests can swap the repository
with `app.dependency_overrides`.
"""

import logging
import threading
from typing import Annotated

from fastapi import Depends

from ..config.settings import Settings, get_settings
from ..infrastructure.repositories.coaches import CoachRepository
from ..infrastructure.storage.client import StorageConfig, create_storage

logger = logging.getLogger(__name__)

# One repository per storage location, shared across requests so that
# its write lock actually covers every request in this process.
_repositories: dict[str, CoachRepository] = {}
_repositories_lock = threading.Lock()


def get_coach_repository(
    settings: Annotated[Settings, Depends(get_settings)],
) -> CoachRepository:
    """
    Provide the CoachRepository for the configured storage.

    In mock mode the in-memory collection lives as long as the process,
    so data persists across requests during a development session.
    """
    key = "memory" if settings.storage_mock_mode else str(settings.data_path.resolve())

    with _repositories_lock:
        repository = _repositories.get(key)
        if repository is None:
            storage = create_storage(
                config=StorageConfig(data_file=settings.data_path),
                mock_mode=settings.storage_mock_mode,
            )
            repository = CoachRepository(storage, serialize_writes=settings.serialize_writes)
            _repositories[key] = repository
            logger.info(
                "Created coach repository",
                extra={"storage": storage.describe(), "serialize_writes": settings.serialize_writes}
            )

    return repository


def reset_repositories() -> None:
    """Forget cached repositories. Used by tests that change settings."""
    with _repositories_lock:
        _repositories.clear()


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

# These type aliases make route signatures cleaner
CoachRepositoryDep = Annotated[CoachRepository, Depends(get_coach_repository)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
