"""
Domain errors for coach records.

Routes translate these into HTTP status codes; the client maps status
codes back into the same classes, so callers on both sides of the wire
handle one taxonomy.
"""

from typing import Optional


class CoachError(Exception):
    """Base class for coach record errors."""
    pass


class CoachNotFoundError(CoachError):
    """Raised when no coach exists with the requested id."""

    def __init__(self, coach_id: str, message: Optional[str] = None) -> None:
        self.coach_id = coach_id
        super().__init__(message or f"Coach {coach_id} not found")


class InvalidCoachError(CoachError):
    """
    Raised when submitted fields break a validation rule.

    `field` names the offending field when a single one is to blame,
    which lets the client highlight it.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)


class DuplicateEmailError(InvalidCoachError):
    """Raised when an email is already used by another coach."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already exists", field="email")
