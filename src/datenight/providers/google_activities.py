"""
Google Places (v1 `places:searchText`) activity adapter.

Activity keywords ("speakeasy", "mini golf", "things to do", ...) are expanded
into a richer text query plus an `includedType`. Restaurant primary types are
excluded server-side via `excludedPrimaryTypes` and checked again locally.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from datenight.config.settings import Settings
from datenight.core.http import post_json
from datenight.domain.models import SearchRequest, Venue
from datenight.providers.base import BaseProvider
from datenight.providers.exclusions import EXCLUDED_RESTAURANT_PRIMARY_TYPES, ActivityExclusionRules
from datenight.providers.google_places import extract_city, google_headers, location_bias, places_or_raise

logger = logging.getLogger(__name__)

ACTIVITY_FIELD_MASK = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.formattedAddress",
        "places.rating",
        "places.userRatingCount",
        "places.location",
        "places.types",
        "places.primaryType",
        "places.photos",
        "places.addressComponents",
    ]
)

# Place types that usually need tickets or advance booking.
EVENT_TYPES = frozenset(
    {"movie_theater", "night_club", "performing_arts_theater", "stadium", "concert_hall", "casino"}
)


@dataclass(frozen=True)
class ActivityMapping:
    place_type: str
    keywords: tuple[str, ...]


def _m(place_type: str, *keywords: str) -> ActivityMapping:
    return ActivityMapping(place_type, keywords)


ACTIVITY_MAPPINGS: dict[str, ActivityMapping] = {
    # bars & lounges
    "whiskey bar": _m("bar", "whiskey bar", "whisky bar", "bourbon bar", "scotch bar"),
    "cocktail bar": _m("bar", "cocktail bar", "mixology", "craft cocktails", "cocktail lounge"),
    "wine bar": _m("bar", "wine bar", "wine lounge", "wine tasting room", "vino bar", "enoteca"),
    "speakeasy": _m(
        "bar", "speakeasy", "hidden bar", "secret bar", "prohibition bar",
        "cocktail lounge hidden", "password bar", "underground bar",
    ),
    "lounge bar": _m("bar", "lounge bar", "cocktail lounge", "upscale lounge", "lounge"),
    "lounge": _m("bar", "lounge", "cocktail lounge", "upscale lounge", "bar lounge"),
    "sports bar": _m("bar", "sports bar", "sports pub", "sports grill"),
    "dive bar": _m("bar", "dive bar", "local bar", "neighborhood bar"),
    "rooftop bar": _m("bar", "rooftop bar", "rooftop lounge", "sky bar", "rooftop"),
    "tiki bar": _m("bar", "tiki bar", "tropical bar", "rum bar", "polynesian"),
    "brewery": _m("bar", "brewery", "brewpub", "craft brewery", "taproom"),
    "jazz lounge": _m("bar", "jazz lounge", "jazz bar", "live jazz", "jazz club"),
    "hookah lounge": _m("bar", "hookah lounge", "shisha bar", "hookah bar"),
    "cocktail lounge": _m("bar", "cocktail lounge", "upscale lounge", "craft cocktails"),
    # nightlife
    "comedy club": _m("night_club", "comedy club", "comedy show", "stand up", "comedy theater", "improv comedy"),
    "karaoke": _m("night_club", "karaoke", "karaoke bar", "karaoke lounge", "private karaoke"),
    "karaoke bar": _m("night_club", "karaoke bar", "karaoke", "private karaoke", "karaoke room"),
    "nightclub": _m("night_club", "nightclub", "club", "dance club", "night club"),
    "live music": _m("night_club", "live music", "music venue", "concert", "live band", "live entertainment"),
    # games & recreation
    "bowling": _m("bowling_alley", "bowling", "bowling alley", "bowling lanes", "bowling lounge"),
    "mini golf": _m("amusement_center", "mini golf", "putt putt", "miniature golf", "glow golf"),
    "golf": _m("park", "golf", "golf course", "driving range", "top golf", "topgolf"),
    "pool hall": _m("bar", "pool hall", "billiards", "pool table", "billiard hall"),
    "axe throwing": _m("amusement_center", "axe throwing", "hatchet throwing", "axe bar"),
    "escape room": _m("amusement_center", "escape room", "escape game", "puzzle room", "immersive experience"),
    "arcade": _m("amusement_center", "arcade", "game room", "barcade", "video arcade", "retro arcade"),
    "movie theater": _m("movie_theater", "movie theater", "cinema", "movie house", "luxury cinema"),
    # arts & culture
    "wine tasting": _m("bar", "wine tasting", "winery", "vineyard", "tasting room"),
    "painting class": _m("art_gallery", "painting class", "paint night", "sip and paint", "paint party"),
    "paint and sip": _m("art_gallery", "paint and sip", "wine and paint", "sip and paint", "canvas and cocktails"),
    "art gallery": _m("art_gallery", "art gallery", "gallery", "art exhibit", "contemporary art"),
    "museum": _m("museum", "museum", "exhibit", "exhibition", "art museum"),
    "theater": _m("performing_arts_theater", "theater", "play", "musical", "theatre", "live theater"),
    # outdoor & date-worthy experiences
    "outdoor activity": _m(
        "tourist_attraction", "outdoor entertainment", "outdoor venue", "scenic view",
        "outdoor experience", "outdoor activity",
    ),
    "outdoor date": _m(
        "tourist_attraction", "sunset spot", "scenic overlook", "outdoor venue", "romantic outdoor", "date spot"
    ),
    "outdoor": _m(
        "tourist_attraction", "outdoor entertainment", "scenic overlook", "rooftop",
        "outdoor venue", "patio", "garden venue",
    ),
    "fun outdoor": _m(
        "tourist_attraction", "outdoor entertainment", "rooftop bar", "outdoor venue", "scenic view", "beach activity"
    ),
    "sunset": _m("point_of_interest", "sunset view", "scenic overlook", "rooftop", "beach sunset", "sunset spot"),
    "sunset spot": _m("point_of_interest", "sunset view", "scenic overlook", "rooftop bar", "beach sunset"),
    "scenic overlook": _m("point_of_interest", "scenic overlook", "viewpoint", "scenic view", "panoramic view"),
    "rooftop": _m("bar", "rooftop bar", "rooftop lounge", "rooftop restaurant", "sky bar", "rooftop venue"),
    "outdoor movie": _m(
        "movie_theater", "outdoor cinema", "drive-in", "rooftop cinema", "outdoor movie", "movie in the park"
    ),
    "outdoor cinema": _m("movie_theater", "outdoor cinema", "drive-in theater", "rooftop cinema", "outdoor movie"),
    "drive-in": _m("movie_theater", "drive-in theater", "drive-in movie", "drive-in cinema"),
    "beach bonfire": _m("beach", "beach fire pit", "beach bonfire", "bonfire beach", "fire pit"),
    "bonfire": _m("beach", "beach bonfire", "fire pit venue", "outdoor bonfire"),
    "botanical garden": _m("tourist_attraction", "botanical garden", "garden venue", "arboretum", "botanical"),
    "garden": _m("tourist_attraction", "botanical garden", "garden venue", "sculpture garden", "rose garden"),
    "outdoor concert": _m(
        "tourist_attraction", "outdoor concert", "amphitheater", "outdoor music venue", "concert in the park"
    ),
    "food truck park": _m("restaurant", "food truck park", "food truck", "food truck lot", "street food"),
    "farmers market": _m("tourist_attraction", "farmers market", "artisan market", "outdoor market", "local market"),
    "night market": _m("tourist_attraction", "night market", "evening market", "food market", "asian night market"),
    "pier": _m("tourist_attraction", "pier", "boardwalk", "waterfront", "seaside"),
    "waterfront": _m("tourist_attraction", "waterfront", "marina", "harbor", "lakefront", "beachfront"),
    # unique experiences
    "cooking class": _m("restaurant", "cooking class", "culinary class", "cooking experience", "chef class"),
    "pottery class": _m("art_gallery", "pottery class", "ceramics class", "pottery studio", "clay studio"),
    "dance class": _m("gym", "dance class", "salsa class", "dance studio", "couples dance"),
    "spa": _m("spa", "spa", "couples spa", "day spa", "massage", "wellness"),
    "couples spa": _m("spa", "couples spa", "couples massage", "romantic spa", "day spa"),
    "bar": _m("bar", "bar", "cocktail bar", "lounge bar", "pub"),
    # vague keywords from voice prompts
    "entertainment": _m(
        "amusement_center", "entertainment venue", "comedy club", "escape room", "bowling", "arcade", "game venue"
    ),
    "nightlife": _m(
        "night_club", "cocktail bar", "lounge", "speakeasy", "jazz bar", "rooftop bar", "cocktail lounge"
    ),
    "fun things to do": _m("amusement_center", "escape room", "bowling", "arcade", "axe throwing", "comedy club"),
    "popular attractions": _m(
        "tourist_attraction", "cocktail bar", "rooftop bar", "comedy club", "escape room", "bowling"
    ),
    "things to do": _m("amusement_center", "escape room", "bowling", "comedy club", "arcade", "karaoke"),
    "fun activities": _m(
        "amusement_center", "bowling", "escape room", "arcade", "axe throwing", "comedy club", "karaoke"
    ),
}

_WHITESPACE = re.compile(r"\s+")


def activity_mapping(keyword: str) -> ActivityMapping | None:
    return ACTIVITY_MAPPINGS.get(keyword.strip().lower())


def category_for_types(types: list[str]) -> str:
    return "event" if any(t in EVENT_TYPES for t in types) else "activity"


def is_in_target_city(components: list[dict[str, Any]], target_city: str) -> bool:
    """Match the `locality` component against the target city (whitespace/containment tolerant)."""
    city = extract_city(components, include_sublocality=False)
    if not city:
        return False
    place_city = city.lower()
    target = target_city.lower()
    if place_city == target:
        return True
    if _WHITESPACE.sub("", place_city) == _WHITESPACE.sub("", target):
        return True
    return target in place_city or place_city in target


class GoogleActivityProvider(BaseProvider):
    name = "google"
    kind = "activity"
    flag = "enable_google"
    credential = "google"

    def __init__(self, settings: Settings, rules: ActivityExclusionRules | None = None):
        super().__init__(settings)
        self._rules = rules or ActivityExclusionRules()

    def build_request_body(self, request: SearchRequest) -> dict[str, Any]:
        google = self._settings.providers.google
        keyword = request.keyword or ""
        mapping = activity_mapping(keyword)
        text_query = " ".join(mapping.keywords) if mapping else keyword
        if request.target_city:
            text_query = f"{text_query} in {request.target_city}"

        body: dict[str, Any] = {
            "textQuery": text_query,
            "locationBias": location_bias(request),
            "maxResultCount": google.max_result_count,
            "languageCode": google.language_code,
            "excludedPrimaryTypes": list(EXCLUDED_RESTAURANT_PRIMARY_TYPES),
        }
        if mapping and mapping.place_type != "restaurant":
            body["includedType"] = mapping.place_type
        return body

    async def _search(self, request: SearchRequest) -> list[Venue]:
        body = self.build_request_body(request)
        logger.debug("Google activity textQuery=%r", body["textQuery"])
        data = await post_json(
            self._settings.providers.google.search_text_url,
            json=body,
            headers=google_headers(self.api_key or "", ACTIVITY_FIELD_MASK),
            timeout_seconds=self.timeout_seconds,
        )
        places = places_or_raise(self.name, data)

        venues: list[Venue] = []
        for place in places:
            name = (place.get("displayName") or {}).get("text") or ""
            types = [t.lower() for t in place.get("types") or []]
            primary_type = place.get("primaryType") or ""

            if primary_type in EXCLUDED_RESTAURANT_PRIMARY_TYPES:
                logger.debug("Google activity: dropping %r (primaryType=%s)", name, primary_type)
                continue
            if self._rules.should_exclude(types, request.keyword or "", name):
                continue

            location = place.get("location") or {}
            lat = float(location.get("latitude") or 0)
            lng = float(location.get("longitude") or 0)
            distance = self.distance_from(request, lat, lng)
            components = place.get("addressComponents") or []

            in_city = is_in_target_city(components, request.target_city) if request.target_city else None
            if not self.within_search_area(request, distance, in_city):
                continue

            venues.append(
                Venue(
                    id=place["id"],
                    name=name,
                    address=place.get("formattedAddress") or "",
                    rating=float(place.get("rating") or 0),
                    review_count=int(place.get("userRatingCount") or 0),
                    lat=lat,
                    lng=lng,
                    category=category_for_types(types),
                    source="google",
                    city=extract_city(components),
                    distance=distance,
                    types=types,
                    photo_count=len(place.get("photos") or []),
                )
            )
        return venues
