"""
Search and category predicates over coach records.

These run client-side against the cached collection. The server does no
searching, sorting or paging.
"""

from typing import Iterable

from .models import Coach

ALL_CATEGORIES = "all"


def matches_search(coach: Coach, term: str) -> bool:
    """Case-insensitive substring match on name or email. Blank terms match all."""
    needle = term.strip().casefold()
    if not needle:
        return True
    return needle in coach.name.casefold() or needle in coach.email.casefold()


def matches_category(coach: Coach, category: str) -> bool:
    if not category or category == ALL_CATEGORIES:
        return True
    return coach.category == category


def filter_coaches(
    coaches: Iterable[Coach],
    search: str = "",
    category: str = ALL_CATEGORIES,
) -> list[Coach]:
    """Coaches matching both the search term and the category, in input order."""
    return [
        coach for coach in coaches
        if matches_search(coach, search) and matches_category(coach, category)
    ]


def distinct_categories(coaches: Iterable[Coach]) -> list[str]:
    return sorted({coach.category for coach in coaches})
