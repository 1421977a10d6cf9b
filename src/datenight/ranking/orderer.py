"""
Result ordering.

Scored venues are sorted by a tie-break chain, then post-processed:
- surprise mode: truncate to the top N, keep the quality order (wins over a seed)
- seeded: reproducible Fisher-Yates shuffle for "find again" variety
- otherwise: the sorted order as-is

Rating comparisons use a band: two ratings closer than the band count as equal
and fall through to the next key. This keeps a 4.6 vs 4.5 difference from
outweighing price or uniqueness.
"""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Iterable, Literal, Sequence, TypeVar

from datenight.config.settings import RankingSettings
from datenight.domain.models import ScoredVenue, Venue

SearchKind = Literal["restaurant", "activity"]
T = TypeVar("T")
V = TypeVar("V", bound=Venue)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _banded_desc(a: float, b: float, band: float) -> int:
    """Descending comparison that treats values within `band` as equal."""
    if abs(a - b) > band:
        return _sign(b - a)
    return 0


def compare_restaurants(a: ScoredVenue, b: ScoredVenue, ranking: RankingSettings) -> int:
    by_rating = _banded_desc(a.rating, b.rating, ranking.restaurant_rating_band)
    if by_rating:
        return by_rating
    by_price = _sign((b.price_level or 0) - (a.price_level or 0))
    if by_price:
        return by_price
    return _sign(b.uniqueness_score - a.uniqueness_score)


def compare_activities(a: ScoredVenue, b: ScoredVenue, ranking: RankingSettings) -> int:
    by_rating = _banded_desc(a.rating, b.rating, ranking.activity_rating_band)
    if by_rating:
        return by_rating
    by_date = _banded_desc(a.date_worthiness or 0.0, b.date_worthiness or 0.0, ranking.date_worthiness_tolerance)
    if by_date:
        return by_date
    by_uniqueness = _sign(b.uniqueness_score - a.uniqueness_score)
    if by_uniqueness:
        return by_uniqueness
    a_distance = a.distance if a.distance is not None else math.inf
    b_distance = b.distance if b.distance is not None else math.inf
    return _sign(a_distance - b_distance)


def sort_restaurants(venues: Iterable[ScoredVenue], ranking: RankingSettings | None = None) -> list[ScoredVenue]:
    ranking = ranking or RankingSettings()
    return sorted(venues, key=cmp_to_key(lambda a, b: compare_restaurants(a, b, ranking)))


def sort_activities(venues: Iterable[ScoredVenue], ranking: RankingSettings | None = None) -> list[ScoredVenue]:
    ranking = ranking or RankingSettings()
    return sorted(venues, key=cmp_to_key(lambda a, b: compare_activities(a, b, ranking)))


def seeded_random(seed: int, index: int) -> float:
    """Deterministic value in [0, 1) for (seed, index)."""
    x = math.sin(seed + index) * 10000
    return x - math.floor(x)


def seeded_shuffle(items: Sequence[T], seed: int) -> list[T]:
    """Fisher-Yates shuffle driven by `seeded_random`; same seed, same order."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(seeded_random(seed, i) * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def exclude_previously_shown(venues: Iterable[V], exclude_ids: Iterable[str]) -> tuple[list[V], int]:
    """Drop venues the caller has already shown; return survivors and the drop count."""
    excluded = set(exclude_ids)
    if not excluded:
        return list(venues), 0
    kept: list[V] = []
    dropped = 0
    for venue in venues:
        if venue.id in excluded:
            dropped += 1
        else:
            kept.append(venue)
    return kept, dropped


def order(
    venues: Iterable[ScoredVenue],
    kind: SearchKind,
    *,
    seed: int | None = None,
    surprise_me: bool = False,
    ranking: RankingSettings | None = None,
) -> list[ScoredVenue]:
    """Sort, then truncate (surprise) or shuffle (seed)."""
    ranking = ranking or RankingSettings()
    ranked = sort_restaurants(venues, ranking) if kind == "restaurant" else sort_activities(venues, ranking)

    if surprise_me:
        return ranked[: ranking.surprise_top_n]
    if seed is not None:
        return seeded_shuffle(ranked, seed)
    return ranked
