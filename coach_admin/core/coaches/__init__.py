"""
Coach records: models, validation rules and filters.
"""

from .errors import (
    CoachError,
    CoachNotFoundError,
    DuplicateEmailError,
    InvalidCoachError,
)
from .filters import ALL_CATEGORIES, filter_coaches, matches_category, matches_search
from .models import UNSET, Coach, CoachStatus, CoachUpdate
from .validation import parse_update, validate_new_coach

__all__ = [
    "ALL_CATEGORIES",
    "Coach",
    "CoachError",
    "CoachNotFoundError",
    "CoachStatus",
    "CoachUpdate",
    "DuplicateEmailError",
    "InvalidCoachError",
    "UNSET",
    "filter_coaches",
    "matches_category",
    "matches_search",
    "parse_update",
    "validate_new_coach",
]
