"""
Quality floors.

Check order matters:
1. Venues without premium data are exempt (absent data is not bad data).
2. The rating floor applies only to rated venues and never to events.
3. The review-count floor.
4. Restaurants that report zero photos need a stronger review count.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Literal

from datenight.config.settings import QualitySettings
from datenight.domain.models import Venue

logger = logging.getLogger(__name__)

SearchKind = Literal["restaurant", "activity"]

LOW_RATING = "lowRating"
LOW_REVIEW_COUNT = "lowReviewCount"
NO_PHOTOS_LOW_REVIEWS = "noPhotosLowReviews"


def drop_reason(venue: Venue, kind: SearchKind, floors: QualitySettings) -> str | None:
    """Return why `venue` fails the floors, or None when it passes."""
    if not venue.has_premium_data:
        return None

    min_rating = floors.min_rating_restaurant if kind == "restaurant" else floors.min_rating_activity
    if venue.rating > 0 and venue.category != "event" and venue.rating < min_rating:
        return LOW_RATING

    if venue.review_count < floors.min_review_count:
        return LOW_REVIEW_COUNT

    # photo_count None means the provider does not report photos.
    if kind == "restaurant" and venue.photo_count == 0 and venue.review_count < floors.min_review_count_if_no_photos:
        return NO_PHOTOS_LOW_REVIEWS

    return None


def apply_quality_floors(
    venues: Iterable[Venue], kind: SearchKind, floors: QualitySettings | None = None
) -> tuple[list[Venue], dict[str, int]]:
    """Filter venues and count drops by reason."""
    floors = floors or QualitySettings()
    kept: list[Venue] = []
    drops: Counter[str] = Counter()
    for venue in venues:
        reason = drop_reason(venue, kind, floors)
        if reason is None:
            kept.append(venue)
        else:
            drops[reason] += 1
    if drops:
        logger.debug("Quality floors dropped %s", dict(drops))
    return kept, dict(drops)


def filter_quality(venues: Iterable[Venue], kind: SearchKind, floors: QualitySettings | None = None) -> list[Venue]:
    kept, _ = apply_quality_floors(venues, kind, floors)
    return kept
