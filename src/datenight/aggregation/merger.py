"""
Cross-provider deduplication.

Two records are the same place when they sit within ~50 m of each other and
their names agree (equal, or one contains the start of the other). The record
with more reviews wins; on a tie the higher rating wins; on a full tie the
first one seen is kept.

Matching is a pairwise scan. Result sets are at most a few hundred venues.
"""

from __future__ import annotations

from typing import Iterable

from datenight.core.geo import distance_miles
from datenight.domain.models import Venue

DUPLICATE_DISTANCE_MILES = 0.03
NAME_PREFIX_CHARS = 10


def _norm(name: str) -> str:
    return name.lower().strip()


def names_match(a: str, b: str) -> bool:
    a, b = _norm(a), _norm(b)
    if a == b:
        return True
    return a[: min(NAME_PREFIX_CHARS, len(a))] in b or b[: min(NAME_PREFIX_CHARS, len(b))] in a


def is_duplicate(a: Venue, b: Venue) -> bool:
    if distance_miles(a.lat, a.lng, b.lat, b.lng) >= DUPLICATE_DISTANCE_MILES:
        return False
    return names_match(a.name, b.name)


def _prefer(candidate: Venue, current: Venue) -> bool:
    if candidate.review_count != current.review_count:
        return candidate.review_count > current.review_count
    return candidate.rating > current.rating


def merge(lists: Iterable[Iterable[Venue]], *, sort_by_rating: bool = False) -> list[Venue]:
    """Flatten provider lists and collapse duplicates into the best-supported record."""
    merged: list[Venue] = []
    for venues in lists:
        for venue in venues:
            for i, existing in enumerate(merged):
                if is_duplicate(venue, existing):
                    if _prefer(venue, existing):
                        merged[i] = venue
                    break
            else:
                merged.append(venue)

    if sort_by_rating:
        merged.sort(key=lambda v: v.rating, reverse=True)
    return merged


def merge_restaurants(lists: Iterable[Iterable[Venue]]) -> list[Venue]:
    return merge(lists, sort_by_rating=True)


def merge_activities(lists: Iterable[Iterable[Venue]]) -> list[Venue]:
    return merge(lists)
