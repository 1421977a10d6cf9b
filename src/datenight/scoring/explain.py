"""
Small explainability formatting helpers.

Used by the CLI to print compact summaries of ranked venues and plans.
"""

from __future__ import annotations

from datenight.domain.models import ScoredVenue

_PRICE_MARKS = {1: "$", 2: "$$", 3: "$$$", 4: "$$$$"}


def badges(venue: ScoredVenue) -> list[str]:
    out = []
    if venue.is_hidden_gem:
        out.append("hidden-gem")
    if venue.is_local_favorite:
        out.append("local-favorite")
    if venue.is_new_discovery:
        out.append("new")
    return out


def one_line_summary(venue: ScoredVenue) -> str:
    """Render a compact single-line summary for a ranked venue."""
    parts = [f"rating={venue.rating:.1f} ({venue.review_count})"]
    if venue.price_level:
        parts.append(_PRICE_MARKS[venue.price_level])
    parts.append(f"uniqueness={venue.uniqueness_score:.2f}")
    if venue.date_worthiness is not None:
        parts.append(f"date={venue.date_worthiness:.0f}")
    if venue.distance is not None:
        parts.append(f"{venue.distance:.1f}mi")
    parts.append(venue.source)
    tags = badges(venue)
    if tags:
        parts.append(",".join(tags))
    return " | ".join(parts)
