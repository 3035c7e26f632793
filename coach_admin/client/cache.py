"""
Client-side cache of the coach collection.

Holds the list the operator is looking at. Mutations go to the server
first and are mirrored locally only once the server confirms them, so a
failed call leaves the local copy exactly as it was.

Search and category filtering run locally against the cached list.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from ..core.coaches.errors import CoachError, CoachNotFoundError
from ..core.coaches.filters import (
    ALL_CATEGORIES,
    distinct_categories,
    filter_coaches,
)
from ..core.coaches.models import Coach
from .api import CoachApiClient

logger = logging.getLogger(__name__)

# notify(level, message) where level is "success" or "error"
Notifier = Callable[[str, str], None]


def log_notification(level: str, message: str) -> None:
    """Default notifier: route notifications to the log."""
    if level == "error":
        logger.warning(message)
    else:
        logger.info(message)


class CoachCache:
    """
    In-memory mirror of the server's coach collection.

    Every mutation notifies success or failure. Failures are re-raised
    after notifying so callers can react to the specific error kind.
    """

    def __init__(self, api: CoachApiClient, notify: Optional[Notifier] = None) -> None:
        self._api = api
        self._notify = notify or log_notification
        self._coaches: list[Coach] = []

    @property
    def coaches(self) -> list[Coach]:
        """A copy of the cached list, in server order."""
        return list(self._coaches)

    def __len__(self) -> int:
        return len(self._coaches)

    def find(self, coach_id: str) -> Optional[Coach]:
        for coach in self._coaches:
            if coach.id == coach_id:
                return coach
        return None

    # -----------------------------------------------------------------------
    # Synchronization
    # -----------------------------------------------------------------------

    def refresh(self) -> list[Coach]:
        """Replace the local copy with the server's list."""
        try:
            coaches = self._api.list_coaches()
        except CoachError as e:
            self._notify("error", f"Failed to load coaches: {e}")
            raise

        self._coaches = coaches
        logger.debug("Refreshed coach cache", extra={"count": len(coaches)})
        return self.coaches

    def create(self, fields: Mapping[str, Any]) -> Coach:
        try:
            coach = self._api.create_coach(fields)
        except CoachError as e:
            self._notify("error", f"Failed to create coach: {e}")
            raise

        self._coaches.append(coach)
        self._notify("success", f"Coach {coach.name} created")
        return coach

    def update(self, coach_id: str, fields: Mapping[str, Any]) -> Coach:
        try:
            coach = self._api.update_coach(coach_id, fields)
        except CoachError as e:
            self._notify("error", f"Failed to update coach: {e}")
            raise

        self._replace(coach)
        self._notify("success", f"Coach {coach.name} updated")
        return coach

    def delete(self, coach_id: str) -> None:
        try:
            self._api.delete_coach(coach_id)
        except CoachError as e:
            self._notify("error", f"Failed to delete coach: {e}")
            raise

        self._coaches = [coach for coach in self._coaches if coach.id != coach_id]
        self._notify("success", "Coach deleted")

    def toggle_status(self, coach_id: str) -> Coach:
        """Flip a cached coach between active and inactive."""
        current = self.find(coach_id)
        if current is None:
            error = CoachNotFoundError(coach_id)
            self._notify("error", f"Failed to update coach: {error}")
            raise error

        return self.update(coach_id, {"status": current.status.toggled.value})

    # -----------------------------------------------------------------------
    # Derived views
    # -----------------------------------------------------------------------

    def search(self, term: str) -> list[Coach]:
        """Cached coaches whose name or email contains `term`, ignoring case."""
        return filter_coaches(self._coaches, search=term)

    def filter_by_category(self, category: str) -> list[Coach]:
        """Cached coaches in `category`, or all of them for "all"."""
        return filter_coaches(self._coaches, category=category)

    def view(self, search: str = "", category: str = ALL_CATEGORIES) -> list[Coach]:
        """Coaches matching both the search term and the category."""
        return filter_coaches(self._coaches, search=search, category=category)

    def categories(self) -> list[str]:
        return distinct_categories(self._coaches)

    def _replace(self, updated: Coach) -> None:
        for index, coach in enumerate(self._coaches):
            if coach.id == updated.id:
                self._coaches[index] = updated
                return
        self._coaches.append(updated)
