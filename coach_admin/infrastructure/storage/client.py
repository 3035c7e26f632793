"""
Flat-file storage for the coach collection.

The whole collection lives in one JSON array. Every load reads the full
file and every save replaces it. Saves write to a temporary file in the
same directory and rename it over the original, so readers see either
the old or the new collection, never half of one.

Mock mode keeps the collection in memory, enabling API testing and local
development without touching the filesystem.
"""

import copy
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class StorageError(Exception):
    """Raised when the collection cannot be read or written."""
    pass


@dataclass
class StorageConfig:
    """
    Configuration for file-backed storage.

    The data file's parent directory is created on first save.
    """
    data_file: Path
    indent: int = 2
    encoding: str = "utf-8"


class CoachStorage(Protocol):
    """
    Protocol for collection storage.

    Records are plain dicts in their persisted layout; the repository
    owns the translation to domain objects.
    """

    def load(self) -> list[Record]:
        """Return every stored record in insertion order."""
        ...

    def save(self, records: list[Record]) -> None:
        """Replace the stored collection with `records`."""
        ...

    def describe(self) -> str:
        """Short human-readable location, for logs and health checks."""
        ...


class JsonFileStorage:
    """
    Stores the collection as a pretty-printed JSON array on disk.

    A missing file is an empty collection. A file that exists but cannot
    be read or decoded is a StorageError: treating it as empty would let
    the next save silently discard whatever was in it.
    """

    def __init__(self, config: StorageConfig) -> None:
        self._config = config
        self._path = Path(config.data_file)

        logger.info(
            "Initialized JSON file storage",
            extra={"data_file": str(self._path)}
        )

    @property
    def path(self) -> Path:
        return self._path

    def describe(self) -> str:
        return str(self._path)

    def load(self) -> list[Record]:
        if not self._path.exists():
            logger.debug(
                "Data file missing, treating as empty collection",
                extra={"data_file": str(self._path)}
            )
            return []

        try:
            text = self._path.read_text(encoding=self._config.encoding)
        except OSError as e:
            logger.error(
                "Failed to read data file",
                extra={"data_file": str(self._path), "error": str(e)}
            )
            raise StorageError(f"Read failed: {e}")

        if not text.strip():
            return []

        try:
            records = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(
                "Data file is not valid JSON",
                extra={"data_file": str(self._path), "error": str(e)}
            )
            raise StorageError(f"Data file is corrupt: {e}")

        if not isinstance(records, list):
            raise StorageError("Data file must contain a JSON array")

        return records

    def save(self, records: list[Record]) -> None:
        directory = self._path.parent
        payload = json.dumps(records, indent=self._config.indent, ensure_ascii=False)

        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)

            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding=self._config.encoding,
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())

            os.replace(tmp_name, self._path)
            tmp_name = None

            logger.debug(
                "Saved collection",
                extra={"data_file": str(self._path), "count": len(records)}
            )

        except OSError as e:
            logger.error(
                "Failed to write data file",
                extra={"data_file": str(self._path), "error": str(e)}
            )
            raise StorageError(f"Write failed: {e}")

        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning(
                        "Could not remove temporary file",
                        extra={"tmp_file": tmp_name}
                    )


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

class MockCoachStorage:
    """
    In-memory storage for local development and tests.

    Records are deep-copied on the way in and out so callers can't
    mutate the stored collection behind the repository's back.
    """

    def __init__(self, records: Optional[list[Record]] = None) -> None:
        self._records: list[Record] = copy.deepcopy(records or [])
        logger.info("Initialized mock coach storage (in-memory)")

    def describe(self) -> str:
        return "memory"

    def load(self) -> list[Record]:
        return copy.deepcopy(self._records)

    def save(self, records: list[Record]) -> None:
        self._records = copy.deepcopy(records)
        logger.debug(
            "Saved collection to mock storage",
            extra={"count": len(records)}
        )


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_storage(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> CoachStorage:
    """
    Create storage based on configuration.

    Args:
        config: File storage configuration (required if not mock_mode)
        mock_mode: If True, return in-memory storage

    Returns:
        CoachStorage implementation (JSON file or mock)
    """
    if mock_mode:
        return MockCoachStorage()

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return JsonFileStorage(config)
