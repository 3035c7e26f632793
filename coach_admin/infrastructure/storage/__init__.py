"""
Collection storage for coach records.

Supports a JSON file on local disk, with a mock mode for local
development and tests.
"""

from .client import (
    CoachStorage,
    JsonFileStorage,
    MockCoachStorage,
    StorageConfig,
    StorageError,
    create_storage,
)

__all__ = [
    "CoachStorage",
    "JsonFileStorage",
    "MockCoachStorage",
    "StorageConfig",
    "StorageError",
    "create_storage",
]
