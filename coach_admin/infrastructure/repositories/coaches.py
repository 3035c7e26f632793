"""
Repository for coach records.

This module implements the repository pattern over flat-file storage.
The repository:
1. Translates between domain models and persisted records
2. Applies validation and the email uniqueness rule
3. Runs each mutation as a read-modify-write of the whole collection

Within one process, mutations are serialized through a lock so two
requests can't interleave their read and write halves. Separate
processes pointed at the same data file are not coordinated; the last
writer wins and the other write is lost.
"""

import logging
import threading
from contextlib import contextmanager, nullcontext
from typing import Any, Iterator, Mapping, Union

from ...core.coaches.errors import CoachNotFoundError
from ...core.coaches.models import UNSET, Coach, CoachUpdate, new_coach_id, utc_now
from ...core.coaches.validation import (
    ensure_unique_email,
    parse_update,
    validate_new_coach,
)
from ..storage.client import CoachStorage, StorageError

logger = logging.getLogger(__name__)

DELETE_ACKNOWLEDGEMENT = "Coach deleted successfully"


class CoachRepository:
    """
    Repository for coach persistence.

    Each method corresponds to an operation of the admin panel:
    - list_coaches / get_coach: read the collection
    - create_coach / update_coach / delete_coach: mutate and persist

    Domain errors (CoachNotFoundError, InvalidCoachError) are raised
    before anything is written. StorageError propagates unchanged from
    everything except list_coaches.
    """

    def __init__(self, storage: CoachStorage, serialize_writes: bool = True) -> None:
        self._storage = storage
        self._lock = threading.RLock() if serialize_writes else None

    @property
    def storage(self) -> CoachStorage:
        return self._storage

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    def list_coaches(self) -> list[Coach]:
        """
        All coaches in insertion order.

        A collection that can't be read lists as empty. Get and every
        mutation still raise StorageError, so a damaged file is never
        overwritten from a listing that looked empty.
        """
        try:
            return self._load()
        except StorageError as e:
            logger.error(
                "Listing coaches from unreadable storage as empty",
                extra={"storage": self._storage.describe(), "error": str(e)}
            )
            return []

    def check_storage(self) -> int:
        """Load the collection and return its size. Raises StorageError."""
        return len(self._load())

    def get_coach(self, coach_id: str) -> Coach:
        for coach in self._load():
            if coach.id == coach_id:
                return coach
        raise CoachNotFoundError(coach_id)

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------

    def create_coach(self, fields: Mapping[str, Any]) -> Coach:
        """
        Validate and append a new coach.

        Field rules are checked before the collection is read, so an
        obviously bad request never touches storage.
        """
        values = validate_new_coach(fields)

        with self._write_scope():
            coaches = self._load()
            ensure_unique_email(coaches, values["email"])

            existing_ids = {coach.id for coach in coaches}
            coach_id = new_coach_id()
            while coach_id in existing_ids:
                coach_id = new_coach_id()

            coach = Coach(id=coach_id, created_at=utc_now(), **values)
            coaches.append(coach)
            self._save(coaches)

        logger.info(
            "Created coach",
            extra={"coach_id": coach.id, "category": coach.category}
        )

        return coach

    def update_coach(
        self,
        coach_id: str,
        changes: Union[CoachUpdate, Mapping[str, Any]],
    ) -> Coach:
        """
        Overwrite the provided fields of an existing coach.

        `changes` may be a CoachUpdate or a raw mapping; raw mappings are
        validated only after the coach is found, so an unknown id wins
        over a bad field.
        """
        with self._write_scope():
            coaches = self._load()
            index = self._index_of(coaches, coach_id)

            update = changes if isinstance(changes, CoachUpdate) else parse_update(changes)

            if update.is_empty:
                logger.debug("Update with no fields", extra={"coach_id": coach_id})
                return coaches[index]

            if update.email is not UNSET:
                ensure_unique_email(coaches, update.email, exclude_id=coach_id)

            coaches[index] = update.apply_to(coaches[index])
            self._save(coaches)

        logger.info(
            "Updated coach",
            extra={"coach_id": coach_id, "fields": sorted(update.provided())}
        )

        return coaches[index]

    def delete_coach(self, coach_id: str) -> str:
        """Remove a coach and return the acknowledgement message."""
        with self._write_scope():
            coaches = self._load()
            index = self._index_of(coaches, coach_id)
            del coaches[index]
            self._save(coaches)

        logger.info("Deleted coach", extra={"coach_id": coach_id})

        return DELETE_ACKNOWLEDGEMENT

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    @contextmanager
    def _write_scope(self) -> Iterator[None]:
        with self._lock if self._lock is not None else nullcontext():
            yield

    def _index_of(self, coaches: list[Coach], coach_id: str) -> int:
        for index, coach in enumerate(coaches):
            if coach.id == coach_id:
                return index
        raise CoachNotFoundError(coach_id)

    def _load(self) -> list[Coach]:
        records = self._storage.load()
        try:
            return [Coach.from_dict(record) for record in records]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(
                "Malformed coach record in storage",
                extra={"storage": self._storage.describe(), "error": str(e)}
            )
            raise StorageError(f"Malformed coach record: {e}")

    def _save(self, coaches: list[Coach]) -> None:
        self._storage.save([coach.to_dict() for coach in coaches])
