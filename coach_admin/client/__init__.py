"""
Client side of the admin panel: HTTP client and the local coach cache.
"""

from .api import CoachApiClient, CoachApiError
from .cache import CoachCache

__all__ = ["CoachApiClient", "CoachApiError", "CoachCache"]
