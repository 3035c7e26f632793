"""
Validation rules for coach fields.

Each validator takes a raw value (as decoded from JSON or passed by a
caller) and returns the normalized value, or raises InvalidCoachError
with a message naming the rule that failed.
"""

import math
import re
from typing import Any, Iterable, Mapping, Optional, Union

from .errors import DuplicateEmailError, InvalidCoachError
from .models import Coach, CoachStatus, CoachUpdate

REQUIRED_FIELDS = ("name", "email", "category", "rating", "status")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_RATING = 1
MAX_RATING = 5


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidCoachError(f"{field.capitalize()} must be a non-empty string", field=field)
    return value.strip()


def validate_name(value: Any) -> str:
    return _require_text(value, "name")


def validate_category(value: Any) -> str:
    return _require_text(value, "category")


def validate_email(value: Any) -> str:
    email = _require_text(value, "email")
    if not EMAIL_PATTERN.match(email):
        raise InvalidCoachError("Email must be a valid email address", field="email")
    return email


def validate_rating(value: Any) -> Union[int, float]:
    """
    Accept ints, floats and numeric strings in [1, 5].

    Booleans are rejected even though Python treats them as ints.
    Integral ratings come back as int so 4 persists as 4, not 4.0.
    """
    if isinstance(value, bool):
        raise InvalidCoachError("Rating must be a number", field="rating")

    try:
        rating = float(value)
    except (TypeError, ValueError):
        raise InvalidCoachError("Rating must be a number", field="rating")

    if math.isnan(rating) or math.isinf(rating):
        raise InvalidCoachError("Rating must be a number", field="rating")

    if rating < MIN_RATING or rating > MAX_RATING:
        raise InvalidCoachError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}",
            field="rating",
        )

    return int(rating) if rating.is_integer() else rating


def validate_status(value: Any) -> CoachStatus:
    if isinstance(value, CoachStatus):
        return value
    try:
        return CoachStatus(value)
    except ValueError:
        raise InvalidCoachError("Status must be active or inactive", field="status")


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_new_coach(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate the fields of a coach about to be created.

    Presence is checked first so the operator sees every missing field
    at once; the per-field rules run afterwards in column order.
    """
    missing = [name for name in REQUIRED_FIELDS if _is_missing(fields.get(name))]
    if missing:
        raise InvalidCoachError(
            f"All fields are required (missing: {', '.join(missing)})"
        )

    return {
        "name": validate_name(fields["name"]),
        "email": validate_email(fields["email"]),
        "category": validate_category(fields["category"]),
        "rating": validate_rating(fields["rating"]),
        "status": validate_status(fields["status"]),
    }


def ensure_unique_email(
    coaches: Iterable[Coach],
    email: str,
    exclude_id: Optional[str] = None,
) -> None:
    """
    Raise DuplicateEmailError if another coach already uses `email`.

    Comparison is case-insensitive. `exclude_id` lets a coach keep its
    own address during an update.
    """
    wanted = email.casefold()
    for coach in coaches:
        if coach.id != exclude_id and coach.email.casefold() == wanted:
            raise DuplicateEmailError(email)


_UPDATE_VALIDATORS = {
    "name": validate_name,
    "email": validate_email,
    "category": validate_category,
    "rating": validate_rating,
    "status": validate_status,
}


def parse_update(fields: Mapping[str, Any]) -> CoachUpdate:
    """
    Build a CoachUpdate from a partial mapping.

    Absent keys and null values leave the field unchanged. Keys other
    than the five editable fields (including id and createdAt) are
    ignored.
    """
    values = {
        name: validator(fields[name])
        for name, validator in _UPDATE_VALIDATORS.items()
        if fields.get(name) is not None
    }
    return CoachUpdate(**values)
