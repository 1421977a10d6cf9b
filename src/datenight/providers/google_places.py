"""
Google Places (v1 `places:searchText`) restaurant adapter.

Builds a text query from the cuisine / price tier / venue type, POSTs it with a
field mask, then runs the restaurant exclusion rules, the coffee-search rules and
the upscale quality gate over the returned places.

The helpers at the top of this module are shared with the activity adapter.
"""

from __future__ import annotations

import logging
from typing import Any

from datenight.config.settings import Settings
from datenight.core.errors import ProviderRequestFailed
from datenight.core.http import post_json
from datenight.domain.models import SearchRequest, Venue
from datenight.providers.base import BaseProvider
from datenight.providers.exclusions import (
    RestaurantExclusionRules,
    is_coffee_shop_name,
    is_pure_coffee_venue,
    passes_upscale_quality_gate,
)

logger = logging.getLogger(__name__)

PRICE_LEVEL_MAP: dict[str, int] = {
    "PRICE_LEVEL_FREE": 0,
    "PRICE_LEVEL_INEXPENSIVE": 1,
    "PRICE_LEVEL_MODERATE": 2,
    "PRICE_LEVEL_EXPENSIVE": 3,
    "PRICE_LEVEL_VERY_EXPENSIVE": 4,
}

RESTAURANT_FIELD_MASK = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.formattedAddress",
        "places.rating",
        "places.userRatingCount",
        "places.priceLevel",
        "places.location",
        "places.types",
        "places.photos",
        "places.editorialSummary",
        "places.reservable",
        "places.primaryTypeDisplayName",
        "places.addressComponents",
    ]
)

# Tier -> Places API `priceLevels` filter.
PRICE_LEVEL_FILTERS: dict[str, list[str]] = {
    "budget": ["PRICE_LEVEL_INEXPENSIVE"],
    "upscale": ["PRICE_LEVEL_VERY_EXPENSIVE", "PRICE_LEVEL_EXPENSIVE"],
    "fine_dining": ["PRICE_LEVEL_VERY_EXPENSIVE", "PRICE_LEVEL_EXPENSIVE"],
}

# Budget/moderate searches drop places priced below this (upscale uses the gate).
RELAXED_MIN_PRICE: dict[str, int] = {"budget": 1, "moderate": 2}

DINNER_START_HOUR = 14

_ITALIAN_QUERY = "italian restaurant trattoria osteria ristorante -pizza -pizzeria"
_FINE_DINING_SUFFIX = "Michelin star fine dining tasting menu chef's table gourmet culinary experience award winning"
_UPSCALE_SUFFIX = "upscale elegant refined prix fixe signature menu sophisticated gourmet"


def parse_price_level(value: str | None) -> int | None:
    if not value:
        return None
    return PRICE_LEVEL_MAP.get(value)


def extract_city(components: list[dict[str, Any]], *, include_sublocality: bool = True) -> str | None:
    """Return the locality name from Places `addressComponents` (v1 or legacy keys)."""
    wanted = {"locality", "sublocality"} if include_sublocality else {"locality"}
    for comp in components or []:
        if wanted.intersection(comp.get("types") or []):
            return comp.get("longText") or comp.get("long_name")
    return None


def location_bias(request: SearchRequest) -> dict[str, Any]:
    return {
        "circle": {
            "center": {"latitude": request.lat, "longitude": request.lng},
            "radius": request.radius_meters,
        }
    }


def google_headers(api_key: str, field_mask: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "X-Goog-Api-Key": api_key,
        "X-Goog-FieldMask": field_mask,
    }


def places_or_raise(provider: str, data: Any) -> list[dict[str, Any]]:
    """Return `places` from a searchText response; raise on an error payload."""
    if not isinstance(data, dict):
        raise ProviderRequestFailed(provider, "unexpected response payload")
    error = data.get("error")
    if error:
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise ProviderRequestFailed(provider, f"Google Places API error: {message}")
    return list(data.get("places") or [])


def _display_text(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("text")
    return None


def is_dinner_time(search_time: str | None) -> bool:
    if not search_time:
        return False
    hours = int(search_time.split(":", 1)[0])
    return hours >= DINNER_START_HOUR


def build_text_query(request: SearchRequest) -> tuple[str, str]:
    """Return `(textQuery, includedType)` for a restaurant search."""
    if request.venue_type == "coffee":
        query, included_type = "coffee shop", "cafe"
    elif request.venue_type == "brunch":
        query, included_type = "brunch breakfast restaurant", "restaurant"
    else:
        cuisine = (request.cuisine or "").lower()
        if not cuisine or cuisine == "restaurant":
            query = "restaurant"
        elif cuisine == "italian":
            query = _ITALIAN_QUERY
        else:
            query = f"{request.cuisine} restaurant"

        if request.price_level == "fine_dining":
            query = f"{query} {_FINE_DINING_SUFFIX}"
        elif request.price_level == "upscale":
            query = f"{query} {_UPSCALE_SUFFIX}"
        elif request.price_level == "budget":
            query = f"affordable {query}"
        elif request.price_level is None:
            query = f"{query} best rated"
        included_type = "restaurant"

    if request.target_city:
        query = f"{query} in {request.target_city}"
    return query, included_type


class GooglePlacesRestaurantProvider(BaseProvider):
    name = "google"
    kind = "restaurant"
    flag = "enable_google"
    credential = "google"

    def __init__(self, settings: Settings, rules: RestaurantExclusionRules | None = None):
        super().__init__(settings)
        self._rules = rules or RestaurantExclusionRules()

    def build_request_body(self, request: SearchRequest) -> dict[str, Any]:
        google = self._settings.providers.google
        text_query, included_type = build_text_query(request)
        body: dict[str, Any] = {
            "textQuery": text_query,
            "locationBias": location_bias(request),
            "maxResultCount": google.max_result_count,
            "languageCode": google.language_code,
            "includedType": included_type,
        }
        price_levels = PRICE_LEVEL_FILTERS.get(request.price_level or "")
        if price_levels:
            body["priceLevels"] = list(price_levels)
        return body

    async def _search(self, request: SearchRequest) -> list[Venue]:
        body = self.build_request_body(request)
        logger.debug("Google restaurant textQuery=%r", body["textQuery"])
        data = await post_json(
            self._settings.providers.google.search_text_url,
            json=body,
            headers=google_headers(self.api_key or "", RESTAURANT_FIELD_MASK),
            timeout_seconds=self.timeout_seconds,
        )
        places = places_or_raise(self.name, data)
        return [self._to_venue(p, request) for p in places if self._keep(p, request)]

    def _keep(self, place: dict[str, Any], request: SearchRequest) -> bool:
        name = _display_text(place.get("displayName")) or ""
        types = [t.lower() for t in place.get("types") or []]

        if request.venue_type == "coffee":
            return is_coffee_shop_name(name)

        if self._rules.should_exclude(types, name, cuisine=request.cuisine, coffee_search=False):
            logger.debug("Google: dropping %r (excluded type/name)", name)
            return False

        if is_dinner_time(request.search_time) and is_pure_coffee_venue(types, name):
            logger.debug("Google: dropping %r (pure coffee venue at dinner time)", name)
            return False

        price = parse_price_level(place.get("priceLevel"))
        if request.price_level in ("upscale", "fine_dining"):
            passes = passes_upscale_quality_gate(
                name,
                price,
                editorial_summary=_display_text(place.get("editorialSummary")),
                reservable=place.get("reservable"),
                primary_type_display_name=_display_text(place.get("primaryTypeDisplayName")),
                rating=place.get("rating"),
                review_count=place.get("userRatingCount"),
            )
            if not passes:
                logger.debug("Google: dropping %r (failed upscale gate, price=%s)", name, price)
            return passes

        relaxed_min = RELAXED_MIN_PRICE.get(request.price_level or "")
        if relaxed_min is not None and price is not None and price < relaxed_min:
            logger.debug("Google: dropping %r (price %s < %s)", name, price, relaxed_min)
            return False
        return True

    def _to_venue(self, place: dict[str, Any], request: SearchRequest) -> Venue:
        location = place.get("location") or {}
        lat = float(location.get("latitude") or 0)
        lng = float(location.get("longitude") or 0)
        price = parse_price_level(place.get("priceLevel"))
        return Venue(
            id=place["id"],
            name=_display_text(place.get("displayName")) or "",
            address=place.get("formattedAddress") or "",
            rating=float(place.get("rating") or 0),
            review_count=int(place.get("userRatingCount") or 0),
            lat=lat,
            lng=lng,
            category="restaurant",
            source="google",
            # FREE (0) is outside the 1..4 ordinal.
            price_level=price or None,
            city=extract_city(place.get("addressComponents") or []),
            distance=self.distance_from(request, lat, lng),
            types=list(place.get("types") or []),
            photo_count=len(place.get("photos") or []),
        )
