"""
Foursquare Places (`/v3/places/search`) adapters for restaurants and activities.

Foursquare rates on a 10-point scale (halved here) and may omit rating/stats
entirely on lower API tiers; such venues are marked `has_premium_data=False` so
quality floors and scoring treat them as "no data" instead of "bad".
"""

from __future__ import annotations

import logging
from typing import Any

from datenight.config.settings import Settings
from datenight.core.errors import ProviderRequestFailed
from datenight.core.http import get_json
from datenight.domain.models import SearchRequest, Venue, VenueCategory
from datenight.providers.base import BaseProvider
from datenight.providers.exclusions import ActivityExclusionRules, RestaurantExclusionRules

logger = logging.getLogger(__name__)

# 10000 Arts & Entertainment, 13003 Bar, 13065 Restaurant/Nightlife, 18000 Sports & Recreation
RESTAURANT_CATEGORIES = ("13065",)
DEFAULT_ACTIVITY_CATEGORIES = ("13003", "10000", "18000")

KEYWORD_TO_CATEGORIES: dict[str, tuple[str, ...]] = {
    "whiskey bar": ("13003", "13065"),
    "cocktail bar": ("13003", "13065"),
    "wine bar": ("13003", "13065"),
    "speakeasy": ("13003", "13065"),
    "lounge bar": ("13003", "13065"),
    "lounge": ("13003", "13065"),
    "sports bar": ("13003",),
    "dive bar": ("13003",),
    "rooftop bar": ("13003", "13065"),
    "tiki bar": ("13003",),
    "brewery": ("13003",),
    "jazz lounge": ("13003", "13065"),
    "hookah lounge": ("13003", "13065"),
    "cocktail lounge": ("13003", "13065"),
    "comedy club": ("10000",),
    "karaoke": ("13065", "10000"),
    "karaoke bar": ("13065", "10000"),
    "nightclub": ("13065",),
    "live music": ("10000", "13065"),
    "bowling": ("18000",),
    "mini golf": ("18000",),
    "golf": ("18000",),
    "pool hall": ("18000",),
    "axe throwing": ("18000",),
    "escape room": ("10000",),
    "arcade": ("10000",),
    "movie theater": ("10000",),
    "wine tasting": ("13003",),
    "painting class": ("10000",),
    "paint and sip": ("10000",),
    "art gallery": ("10000",),
    "museum": ("10000",),
    "theater": ("10000",),
}

PRICE_FILTERS: dict[str, str] = {
    "budget": "1",
    "moderate": "2",
    "upscale": "3,4",
    "fine_dining": "3,4",
}

# Keywords too broad to send as a text query.
GENERIC_KEYWORDS = frozenset({"bar", "activity"})

EVENT_NAMES = frozenset({"movie theater", "theater", "concert", "performing arts", "stadium", "casino"})
EVENT_CATEGORY_WORDS = ("movie", "theater", "concert", "stadium")


def categories_for_keyword(keyword: str) -> tuple[str, ...]:
    return KEYWORD_TO_CATEGORIES.get(keyword.strip().lower(), DEFAULT_ACTIVITY_CATEGORIES)


def activity_category(name: str, category_names: list[str]) -> VenueCategory:
    if name.lower() in EVENT_NAMES:
        return "event"
    joined = " ".join(category_names).lower()
    if any(word in joined for word in EVENT_CATEGORY_WORDS):
        return "event"
    return "activity"


def _city_matches(city: str | None, target_city: str | None) -> bool | None:
    if not target_city or not city:
        return None
    city, target = city.lower(), target_city.lower()
    return target in city or city in target


class _FoursquareProvider(BaseProvider):
    name = "foursquare"
    flag = "enable_foursquare"
    credential = "foursquare"

    def _params(self, request: SearchRequest) -> dict[str, Any]:
        return {
            "ll": f"{request.lat},{request.lng}",
            "radius": int(round(request.radius_meters)),
            "limit": self._settings.providers.foursquare.limit,
            "sort": "RELEVANCE",
        }

    async def _fetch(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        data = await get_json(
            self._settings.providers.foursquare.search_url,
            params=params,
            headers={"Authorization": self.api_key or "", "Accept": "application/json"},
            timeout_seconds=self.timeout_seconds,
        )
        if not isinstance(data, dict):
            raise ProviderRequestFailed(self.name, "unexpected response payload")
        return list(data.get("results") or [])

    def _to_venue(self, place: dict[str, Any], request: SearchRequest, category: VenueCategory) -> Venue:
        geocode = ((place.get("geocodes") or {}).get("main")) or {}
        lat = float(geocode.get("latitude") or 0)
        lng = float(geocode.get("longitude") or 0)
        location = place.get("location") or {}
        raw_rating = place.get("rating")
        stats = place.get("stats")
        photos = place.get("photos")
        price = place.get("price")
        return Venue(
            id=place["fsq_id"],
            name=place.get("name") or "",
            address=location.get("formatted_address") or location.get("address") or "",
            rating=float(raw_rating) / 2 if raw_rating else 0.0,
            review_count=int((stats or {}).get("total_ratings") or 0),
            lat=lat,
            lng=lng,
            category=category,
            source="foursquare",
            price_level=price if isinstance(price, int) and 1 <= price <= 4 else None,
            city=location.get("locality"),
            distance=self.distance_from(request, lat, lng),
            chains=[c.get("name") or c.get("id") or "" for c in place.get("chains") or []],
            has_premium_data=raw_rating is not None or stats is not None,
            types=[c.get("name") or "" for c in place.get("categories") or []],
            photo_count=len(photos) if photos is not None else None,
        )

    def _is_retail(self, place: dict[str, Any], rules: RestaurantExclusionRules | ActivityExclusionRules) -> bool:
        category_ids = [str(c.get("id") or "") for c in place.get("categories") or []]
        return rules.is_retail(category_ids, place.get("name") or "")

    @staticmethod
    def _is_ghost(venue: Venue) -> bool:
        """Listing that claims premium data but has never been rated."""
        return venue.has_premium_data and venue.review_count == 0


class FoursquareRestaurantProvider(_FoursquareProvider):
    kind = "restaurant"

    def __init__(self, settings: Settings, rules: RestaurantExclusionRules | None = None):
        super().__init__(settings)
        self._rules = rules or RestaurantExclusionRules()

    def build_params(self, request: SearchRequest) -> dict[str, Any]:
        params = self._params(request)
        params["categories"] = ",".join(RESTAURANT_CATEGORIES)
        if request.cuisine and request.cuisine.lower() != "restaurant":
            params["query"] = request.cuisine
        price = PRICE_FILTERS.get(request.price_level or "")
        if price:
            params["price"] = price
        return params

    async def _search(self, request: SearchRequest) -> list[Venue]:
        places = await self._fetch(self.build_params(request))
        venues: list[Venue] = []
        for place in places:
            if self._is_retail(place, self._rules):
                logger.debug("Foursquare: dropping retail %r", place.get("name"))
                continue
            venue = self._to_venue(place, request, "restaurant")
            if self._is_ghost(venue):
                logger.debug("Foursquare: dropping ghost listing %r", venue.name)
                continue
            venues.append(venue)
        return venues


class FoursquareActivityProvider(_FoursquareProvider):
    kind = "activity"

    def __init__(self, settings: Settings, rules: ActivityExclusionRules | None = None):
        super().__init__(settings)
        self._rules = rules or ActivityExclusionRules()

    def build_params(self, request: SearchRequest) -> dict[str, Any]:
        keyword = request.keyword or ""
        params = self._params(request)
        params["categories"] = ",".join(categories_for_keyword(keyword))
        if keyword and keyword.lower() not in GENERIC_KEYWORDS:
            params["query"] = keyword
        return params

    async def _search(self, request: SearchRequest) -> list[Venue]:
        places = await self._fetch(self.build_params(request))
        venues: list[Venue] = []
        for place in places:
            name = place.get("name") or ""
            category_names = [c.get("name") or "" for c in place.get("categories") or []]

            if self._is_retail(place, self._rules):
                logger.debug("Foursquare: dropping retail %r", name)
                continue
            if self._rules.is_traditional_golf(name, category_names):
                logger.debug("Foursquare: dropping traditional golf %r", name)
                continue

            venue = self._to_venue(place, request, activity_category(name, category_names))
            if self._is_ghost(venue):
                logger.debug("Foursquare: dropping ghost listing %r", name)
                continue
            if not self.within_search_area(request, venue.distance or 0.0, _city_matches(venue.city, request.target_city)):
                continue
            venues.append(venue)
        return venues
