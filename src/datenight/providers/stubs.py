"""
Providers whose integration is pending.

They take part in enablement and status reporting like any other adapter but
return no venues yet.
"""

from __future__ import annotations

import logging

from datenight.domain.models import SearchRequest, Venue
from datenight.providers.base import BaseProvider

logger = logging.getLogger(__name__)


class _PendingProvider(BaseProvider):
    implemented = False

    async def _search(self, request: SearchRequest) -> list[Venue]:
        logger.info("%s %s integration pending; returning no results", self.name, self.kind)
        return []


class YelpRestaurantProvider(_PendingProvider):
    name = "yelp"
    kind = "restaurant"
    flag = "enable_yelp"
    credential = "yelp"


class YelpActivityProvider(_PendingProvider):
    name = "yelp"
    kind = "activity"
    flag = "enable_yelp_activities"
    credential = "yelp"


class EventbriteProvider(_PendingProvider):
    name = "eventbrite"
    kind = "activity"
    flag = "enable_eventbrite"
    credential = "eventbrite"
