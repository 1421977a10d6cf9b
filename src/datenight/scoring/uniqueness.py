from __future__ import annotations

# Uniqueness ("hidden gem") scoring.
#
# The score starts at 1.0 and is multiplied by four independent factors:
# review count (a non-monotonic sweet spot), chain tier, rating quality and
# category uniqueness. The caller's novelty mode then amplifies or inverts the
# bias, and the result is clamped to [0.1, 3.0].
#
# Venues whose provider supplies no rating/review data get a neutral 1.0 (or the
# chain penalty), never the "poor rating" bucket.

import logging

from datenight.domain.models import NoveltyMode, ScoredVenue, Venue
from datenight.scoring.chains import chain_penalty, classify_chain

logger = logging.getLogger(__name__)

MIN_SCORE = 0.1
MAX_SCORE = 3.0

UNIQUE_VENUE_TYPES = frozenset(
    {
        "speakeasy",
        "wine_bar",
        "jazz_club",
        "art_gallery",
        "rooftop_bar",
        "food_truck",
        "pop_up",
        "wine_tasting",
        "brewery",
        "winery",
        "distillery",
    }
)

UNIQUE_TYPE_BOOST = 1.3
POPULAR_REVIEW_THRESHOLD = 1000
POPULAR_REVIEW_BOOST = 1.5
POPULAR_CHAIN_BOOST = 3.0
HIDDEN_GEMS_EXPONENT = 1.5


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def review_count_factor(review_count: int) -> float:
    """Sweet-spot curve: trusted-but-not-mainstream venues score highest."""
    if review_count < 20:
        return 0.5
    if review_count < 50:
        return 0.8
    if review_count <= 300:
        return 1.8
    if review_count <= 800:
        return 1.3
    if review_count <= 2000:
        return 1.0
    return 0.6


def rating_factor(rating: float) -> float:
    if rating >= 4.7:
        return 1.4
    if rating >= 4.5:
        return 1.2
    if rating >= 4.0:
        return 1.0
    if rating >= 3.5:
        return 0.7
    return 0.3


def has_unique_type(venue: Venue) -> bool:
    return any(t.lower() in UNIQUE_VENUE_TYPES for t in venue.types)


def uniqueness_score(venue: Venue, novelty_mode: NoveltyMode = "balanced") -> float:
    """Compute the uniqueness score of `venue` in [0.1, 3.0]."""
    tier = classify_chain(venue.name, venue.chains)

    if not venue.has_premium_data:
        if tier is not None:
            logger.debug("No premium data for chain %r; applying %s penalty", venue.name, tier.value)
            return clamp_score(chain_penalty(tier))
        return 1.0

    score = 1.0
    score *= review_count_factor(venue.review_count)
    if tier is not None:
        score *= chain_penalty(tier)
    score *= rating_factor(venue.rating)
    if has_unique_type(venue):
        score *= UNIQUE_TYPE_BOOST

    if novelty_mode == "hidden_gems":
        score = score**HIDDEN_GEMS_EXPONENT
    elif novelty_mode == "popular":
        if venue.review_count > POPULAR_REVIEW_THRESHOLD:
            score *= POPULAR_REVIEW_BOOST
        if tier is not None:
            score *= POPULAR_CHAIN_BOOST

    return clamp_score(score)


def is_hidden_gem(venue: Venue) -> bool:
    """50-500 reviews, not a chain, rated 4.5+."""
    if not venue.has_premium_data:
        return False
    return (
        50 <= venue.review_count <= 500
        and classify_chain(venue.name, venue.chains) is None
        and venue.rating >= 4.5
    )


def is_new_discovery(venue: Venue) -> bool:
    if not venue.has_premium_data:
        return False
    return venue.review_count < 100 and venue.rating >= 4.0


def is_local_favorite(venue: Venue) -> bool:
    if not venue.has_premium_data:
        return False
    return (
        classify_chain(venue.name, venue.chains) is None
        and venue.rating >= 4.5
        and 100 < venue.review_count < 2000
    )


def score_venue(
    venue: Venue,
    novelty_mode: NoveltyMode = "balanced",
    *,
    date_worthiness: float | None = None,
) -> ScoredVenue:
    """Attach uniqueness score and badges to a venue."""
    return ScoredVenue(
        **venue.model_dump(),
        uniqueness_score=uniqueness_score(venue, novelty_mode),
        is_hidden_gem=is_hidden_gem(venue),
        is_new_discovery=is_new_discovery(venue),
        is_local_favorite=is_local_favorite(venue),
        date_worthiness=date_worthiness,
    )
