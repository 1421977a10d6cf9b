"""
Date-worthiness scoring for activities.

`date_score` rewards venues whose names suggest a good date (rooftop, speakeasy,
live music, ...) and penalizes generic places (dog parks, sports bars, malls).
It is used as the second sort key for activities.

When an activity search comes back weak (few results, mostly generic parks, low
average rating) `fallback_keywords` suggests broader keywords. The search
service only reports these in the response meta; it never retries on its own.
"""

from __future__ import annotations

from typing import Iterable

from datenight.domain.models import Venue

HIGH_VALUE_INDICATORS: tuple[str, ...] = (
    "rooftop", "speakeasy", "hidden", "secret", "romantic", "intimate",
    "craft cocktail", "tasting", "live music", "jazz", "sunset", "view",
    "boutique", "artisan", "upscale", "elegant", "sophisticated",
)
MEDIUM_VALUE_INDICATORS: tuple[str, ...] = (
    "lounge", "bar", "cocktail", "wine", "beer garden", "outdoor",
    "patio", "terrace", "garden", "cinema", "theater", "gallery",
)
LOW_VALUE_INDICATORS: tuple[str, ...] = ("sports bar", "chain", "franchise", "basic", "casual")

NON_DATE_VENUES: tuple[str, ...] = (
    "city park", "community park", "dog park", "playground", "parking lot",
    "gas station", "convenience store", "fast food", "chain restaurant",
    "mall", "strip mall", "office building",
)

HIGH_VALUE_POINTS, HIGH_VALUE_CAP = 10, 30
MEDIUM_VALUE_POINTS, MEDIUM_VALUE_CAP = 5, 15
LOW_VALUE_PENALTY = 10
NON_DATE_PENALTY = 50

OUTDOOR_EXPAND_KEYWORDS: tuple[str, ...] = (
    "rooftop", "patio", "terrace", "garden venue", "outdoor dining",
    "outdoor entertainment", "scenic view", "waterfront venue",
)

ACTIVITY_FALLBACKS: dict[str, tuple[str, ...]] = {
    "speakeasy": ("cocktail lounge", "whiskey bar", "jazz lounge", "rooftop bar", "lounge bar"),
    "jazz lounge": ("live music", "cocktail lounge", "piano bar", "lounge bar"),
    "comedy club": ("improv theater", "live entertainment", "karaoke bar", "comedy theater"),
    "drive-in": ("outdoor cinema", "movie theater", "rooftop cinema"),
    "beach bonfire": ("beach", "waterfront", "outdoor venue", "fire pit"),
    "tiki bar": ("cocktail bar", "rooftop bar", "tropical", "rum bar"),
    "wine tasting": ("wine bar", "winery", "vineyard", "tasting room"),
    "cooking class": ("culinary experience", "chef table", "tasting menu"),
    "pottery class": ("art class", "paint and sip", "creative studio"),
    "escape room": ("arcade", "axe throwing", "laser tag", "immersive experience"),
    "outdoor activity": ("rooftop bar", "botanical garden", "scenic overlook", "waterfront"),
}

_PARK_EXCEPTIONS: tuple[str, ...] = (
    "food truck", "beer garden", "sculpture garden", "botanical",
    "amphitheater", "outdoor cinema", "rooftop", "themed park",
    "adventure park", "amusement",
)
_GENERIC_PARK_INDICATORS: tuple[str, ...] = (
    "city park", "community park", "memorial park", "regional park",
    "county park", "state park", "public park", "neighborhood park",
    "dog park", "playground", "sports field", "soccer field", "baseball field",
)

MIN_STRONG_RESULTS = 3
MIN_AVERAGE_RATING = 4.0


def _rating_points(rating: float) -> int:
    if rating >= 4.5:
        return 20
    if rating >= 4.2:
        return 15
    if rating >= 4.0:
        return 10
    if rating >= 3.5:
        return 5
    return 0


def _review_points(review_count: int) -> int:
    if review_count >= 500:
        return 10
    if review_count >= 200:
        return 7
    if review_count >= 100:
        return 5
    if review_count >= 50:
        return 3
    return 0


def date_score(name: str, rating: float = 0.0, review_count: int = 0) -> float:
    """Score how date-worthy a venue is from its name, rating and review count (>= 0)."""
    name_lower = name.lower()
    score = _rating_points(rating) + _review_points(review_count)

    high = sum(1 for ind in HIGH_VALUE_INDICATORS if ind in name_lower)
    score += min(high * HIGH_VALUE_POINTS, HIGH_VALUE_CAP)

    medium = sum(1 for ind in MEDIUM_VALUE_INDICATORS if ind in name_lower)
    score += min(medium * MEDIUM_VALUE_POINTS, MEDIUM_VALUE_CAP)

    low = sum(1 for ind in LOW_VALUE_INDICATORS if ind in name_lower)
    score -= low * LOW_VALUE_PENALTY

    if any(nv in name_lower for nv in NON_DATE_VENUES):
        score -= NON_DATE_PENALTY

    return float(max(score, 0))


def venue_date_score(venue: Venue) -> float:
    return date_score(venue.name, venue.rating, venue.review_count)


def is_generic_park(name: str, types: Iterable[str] = ()) -> bool:
    """True for neighborhood/city parks that are not a date on their own."""
    name_lower = name.lower()
    if any(exc in name_lower for exc in _PARK_EXCEPTIONS):
        return False
    if any(ind in name_lower for ind in _GENERIC_PARK_INDICATORS):
        return True
    # "[Name] Park" with nothing else
    if "park" in list(types) and name_lower.endswith("park") and "theme" not in name_lower:
        return len(name_lower.split(" ")) <= 2
    return False


def _is_outdoor_keyword(keyword: str) -> bool:
    return any(word in keyword for word in ("outdoor", "park", "outside"))


def results_are_weak(results: list[Venue], keyword: str) -> bool:
    if len(results) < MIN_STRONG_RESULTS:
        return True

    keyword = keyword.lower()
    if any(word in keyword for word in ("outdoor", "fun", "activity")):
        parks = sum(1 for v in results if is_generic_park(v.name, v.types))
        if parks > len(results) / 2:
            return True

    ratings = [v.rating for v in results if v.rating > 0]
    if ratings and sum(ratings) / len(ratings) < MIN_AVERAGE_RATING:
        return True
    return False


def fallback_keywords(keyword: str, results_weak: bool) -> list[str]:
    """Suggest broader keywords for a weak activity search (empty when results are fine)."""
    if not results_weak:
        return []
    keyword = keyword.strip().lower()
    if not keyword:
        return []

    if _is_outdoor_keyword(keyword):
        return list(OUTDOOR_EXPAND_KEYWORDS)
    if keyword in ACTIVITY_FALLBACKS:
        return list(ACTIVITY_FALLBACKS[keyword])
    for key, fallbacks in ACTIVITY_FALLBACKS.items():
        if key in keyword or keyword in key:
            return list(fallbacks)
    return []
