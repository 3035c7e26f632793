"""
Repository pattern implementations.

Repositories translate between domain models and stored records.
"""

from .coaches import CoachRepository

__all__ = ["CoachRepository"]
