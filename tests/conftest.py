from __future__ import annotations

from typing import Any

import pytest

from datenight.config.settings import Settings
from datenight.domain.models import ScoredVenue, Venue

CENTER = (33.6846, -117.8265)


def _venue(**overrides: Any) -> Venue:
    data: dict[str, Any] = {
        "id": "v1",
        "name": "Test Venue",
        "rating": 4.5,
        "review_count": 120,
        "lat": CENTER[0],
        "lng": CENTER[1],
        "source": "test",
    }
    data.update(overrides)
    return Venue(**data)


def _scored(**overrides: Any) -> ScoredVenue:
    data: dict[str, Any] = {
        "id": "s1",
        "name": "Scored Venue",
        "rating": 4.5,
        "review_count": 120,
        "lat": CENTER[0],
        "lng": CENTER[1],
        "source": "test",
    }
    data.update(overrides)
    return ScoredVenue(**data)


@pytest.fixture
def make_venue():
    return _venue


@pytest.fixture
def make_scored():
    return _scored


@pytest.fixture
def settings_with_keys() -> Settings:
    """Settings with every provider key present and default flags (no env, no files)."""
    return Settings.model_validate(
        {
            "providers": {
                "google": {"api_key": "g-key"},
                "foursquare": {"api_key": "fsq-key"},
                "ticketmaster": {"api_key": "tm-key"},
                "yelp": {"api_key": "yelp-key"},
                "eventbrite": {"api_key": "eb-key"},
            },
            "feature_flags": {"enable_ticketmaster": True},
        }
    )
