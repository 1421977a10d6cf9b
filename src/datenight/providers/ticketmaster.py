"""
Ticketmaster Discovery v2 event adapter (behind `enable_ticketmaster`).

Events carry no ratings, so every result has `has_premium_data=False`; the
quality floors leave them alone and the scoring engine treats them as neutral.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

from datenight.core.errors import ProviderRequestFailed
from datenight.core.http import get_json
from datenight.domain.models import SearchRequest, Venue
from datenight.providers.base import BaseProvider

logger = logging.getLogger(__name__)

KEYWORD_TO_CLASSIFICATION: dict[str, str] = {
    "comedy": "Comedy",
    "comedy show": "Comedy",
    "standup": "Comedy",
    "stand-up": "Comedy",
    "concert": "Music",
    "live music": "Music",
    "music": "Music",
    "band": "Music",
    "dj": "Music",
    "sports": "Sports",
    "game": "Sports",
    "basketball": "Sports",
    "football": "Sports",
    "baseball": "Sports",
    "hockey": "Sports",
    "soccer": "Sports",
    "theater": "Arts & Theatre",
    "theatre": "Arts & Theatre",
    "show": "Arts & Theatre",
    "musical": "Arts & Theatre",
    "broadway": "Arts & Theatre",
    "play": "Arts & Theatre",
    "opera": "Arts & Theatre",
    "ballet": "Arts & Theatre",
    "dance": "Arts & Theatre",
}


def classification_for_keyword(keyword: str) -> str | None:
    """Exact match first, then the first partial match in either direction."""
    keyword = keyword.strip().lower()
    if not keyword:
        return None
    if keyword in KEYWORD_TO_CLASSIFICATION:
        return KEYWORD_TO_CLASSIFICATION[keyword]
    for key, value in KEYWORD_TO_CLASSIFICATION.items():
        if key in keyword or keyword in key:
            return value
    return None


def _start_date_time(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class TicketmasterProvider(BaseProvider):
    name = "ticketmaster"
    kind = "activity"
    flag = "enable_ticketmaster"
    credential = "ticketmaster"

    def build_params(self, request: SearchRequest, *, now: datetime | None = None) -> dict[str, Any]:
        tm = self._settings.providers.ticketmaster
        keyword = request.keyword or ""
        limit = request.limit or tm.page_size
        params: dict[str, Any] = {
            "apikey": self.api_key or "",
            "latlong": f"{request.lat},{request.lng}",
            "radius": min(math.ceil(request.radius_miles), tm.max_radius_miles),
            "unit": "miles",
            "size": min(limit, 50),
            "sort": "relevance,desc",
            "startDateTime": _start_date_time(now),
        }
        classification = classification_for_keyword(keyword)
        if classification:
            params["classificationName"] = classification
        else:
            params["keyword"] = keyword
        return params

    async def _search(self, request: SearchRequest) -> list[Venue]:
        data = await get_json(
            self._settings.providers.ticketmaster.events_url,
            params=self.build_params(request),
            timeout_seconds=self.timeout_seconds,
        )
        if not isinstance(data, dict):
            raise ProviderRequestFailed(self.name, "unexpected response payload")

        events = (data.get("_embedded") or {}).get("events") or []
        venues = [v for v in (self._to_venue(e, request) for e in events) if v is not None]
        logger.info("Ticketmaster mapped %d of %d events", len(venues), len(events))
        return venues

    def _to_venue(self, event: dict[str, Any], request: SearchRequest) -> Venue | None:
        embedded_venues = (event.get("_embedded") or {}).get("venues") or []
        venue = embedded_venues[0] if embedded_venues else {}
        location = venue.get("location") or {}
        try:
            lat = float(location["latitude"])
            lng = float(location["longitude"])
        except (KeyError, TypeError, ValueError):
            logger.debug("Ticketmaster: skipping %r (no venue location)", event.get("name"))
            return None
        if math.isnan(lat) or math.isnan(lng):
            return None

        city = (venue.get("city") or {}).get("name")
        parts = [
            (venue.get("address") or {}).get("line1"),
            city,
            (venue.get("state") or {}).get("stateCode"),
            venue.get("postalCode"),
        ]
        address = ", ".join(p for p in parts if p) or venue.get("name") or "Address unavailable"

        classification = (event.get("classifications") or [{}])[0] or {}
        types = [
            (classification.get("segment") or {}).get("name") or "",
            (classification.get("genre") or {}).get("name") or "",
        ]

        return Venue(
            id=f"tm_{event['id']}",
            name=event.get("name") or "",
            address=address,
            lat=lat,
            lng=lng,
            category="event",
            source="ticketmaster",
            city=city,
            distance=self.distance_from(request, lat, lng),
            has_premium_data=False,
            types=types,
        )
