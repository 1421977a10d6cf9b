"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- provider output (`Venue`)
- scoring output (`ScoredVenue`)
- API/CLI inputs (`SearchRequest`) and outputs (`SearchResponse`)

JSON uses camelCase (`reviewCount`, `providerStats`, ...) while Python code uses
snake_case; both spellings are accepted on input.
"""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from datenight.core.geo import miles_to_meters

NoveltyMode = Literal["popular", "balanced", "hidden_gems"]
VenueCategory = Literal["restaurant", "activity", "event"]
PriceTier = Literal["budget", "moderate", "upscale", "fine_dining"]

_LABEL_SEPARATORS = re.compile(r"[^a-z0-9]+")


def normalize_type_label(label: str) -> str:
    """Map a provider category label onto the shared vocabulary ("Wine Bar" -> "wine_bar")."""
    return _LABEL_SEPARATORS.sub("_", label.strip().lower()).strip("_")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Venue(_CamelModel):
    """A normalized place/business/event record from one provider."""

    id: str
    name: str
    address: str = ""
    rating: float = Field(0.0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    category: VenueCategory = "restaurant"
    source: str = "unknown"
    price_level: int | None = Field(default=None, ge=1, le=4)
    city: str | None = None
    distance: float | None = Field(default=None, ge=0)

    chains: list[str] = Field(default_factory=list)
    has_premium_data: bool = True
    types: list[str] = Field(default_factory=list)
    photo_count: int | None = Field(default=None, ge=0)

    @field_validator("types")
    @classmethod
    def _normalize_types(cls, types: list[str]) -> list[str]:
        labels = (normalize_type_label(t) for t in types if t and t.strip())
        return list(dict.fromkeys(label for label in labels if label))


class ScoredVenue(Venue):
    """A venue plus its uniqueness score and badges (created per request, never stored)."""

    uniqueness_score: float = Field(1.0, ge=0.1, le=3.0)
    is_hidden_gem: bool = False
    is_new_discovery: bool = False
    is_local_favorite: bool = False
    date_worthiness: float | None = None

    # Internal signals used by filters and scoring; stripped from API output.
    chains: list[str] = Field(default_factory=list, exclude=True)
    has_premium_data: bool = Field(True, exclude=True)
    types: list[str] = Field(default_factory=list, exclude=True)
    photo_count: int | None = Field(default=None, ge=0, exclude=True)


class SearchRequest(_CamelModel):
    """Inbound search parameters shared by restaurant and activity searches."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    radius_miles: float = Field(..., gt=0, le=100)

    keyword: str | None = None
    cuisine: str | None = None
    price_level: PriceTier | None = None
    venue_type: Literal["coffee", "brunch"] | None = None
    search_time: str | None = Field(default=None, pattern=r"^\d{1,2}:\d{2}$")
    target_city: str | None = None

    novelty_mode: NoveltyMode = "balanced"
    seed: int | None = None
    force_fresh: bool = False
    surprise_me: bool = False
    exclude_place_ids: list[str] = Field(default_factory=list)

    limit: int | None = Field(default=None, ge=1, le=100)
    settings_overrides: dict[str, Any] | None = None

    @field_validator("keyword", "cuisine", "target_city")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def radius_meters(self) -> float:
        return miles_to_meters(self.radius_miles)


class SearchResponse(_CamelModel):
    """Ranked venues plus per-provider result counts."""

    items: list[ScoredVenue]
    next_page_token: None = None
    provider_stats: dict[str, int] = Field(default_factory=dict)
    force_fresh: bool = False
    meta: dict[str, Any] = Field(default_factory=dict)
