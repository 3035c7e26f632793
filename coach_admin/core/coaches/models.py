"""
Domain models for coach records.

These models carry no knowledge of HTTP or of the JSON file they end up
in. `to_dict`/`from_dict` define the persisted layout, which is also the
wire format: camelCase `createdAt`, status as its string value.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union
from uuid import uuid4


class CoachStatus(Enum):
    """Whether a coach is currently taking clients."""
    ACTIVE = "active"
    INACTIVE = "inactive"

    @property
    def toggled(self) -> "CoachStatus":
        return CoachStatus.INACTIVE if self is CoachStatus.ACTIVE else CoachStatus.ACTIVE


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds, the precision we persist."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2024-05-01T09:30:00.000Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def new_coach_id() -> str:
    return str(uuid4())


@dataclass
class Coach:
    """
    A coach record.

    `id` and `created_at` are assigned by the store when the record is
    created and never change afterwards.
    """
    name: str
    email: str
    category: str
    rating: Union[int, float]
    status: CoachStatus
    id: str = field(default_factory=new_coach_id)
    created_at: datetime = field(default_factory=utc_now)

    @property
    def is_active(self) -> bool:
        return self.status is CoachStatus.ACTIVE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "category": self.category,
            "rating": self.rating,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coach":
        """
        Build a coach from its persisted form.

        Raises KeyError or ValueError on a malformed record; callers
        decide whether that is a storage or an input problem.
        """
        return cls(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            category=data["category"],
            rating=data["rating"],
            status=CoachStatus(data["status"]),
            created_at=parse_timestamp(data["createdAt"]),
        )


class _Unset:
    """Marker for a field an update leaves alone."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class CoachUpdate:
    """
    A partial update to a coach.

    Every field is either UNSET (keep the current value) or a value that
    has already passed validation. Use `validation.parse_update` to build
    one from untrusted input.
    """
    name: Union[str, _Unset] = UNSET
    email: Union[str, _Unset] = UNSET
    category: Union[str, _Unset] = UNSET
    rating: Union[int, float, _Unset] = UNSET
    status: Union[CoachStatus, _Unset] = UNSET

    def provided(self) -> dict[str, Any]:
        """Fields that carry a value, keyed by name."""
        values = {
            "name": self.name,
            "email": self.email,
            "category": self.category,
            "rating": self.rating,
            "status": self.status,
        }
        return {key: value for key, value in values.items() if value is not UNSET}

    @property
    def is_empty(self) -> bool:
        return not self.provided()

    def apply_to(self, coach: Coach) -> Coach:
        """Return a copy of `coach` with the provided fields overwritten."""
        return replace(coach, **self.provided())
