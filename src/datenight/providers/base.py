"""
Provider adapter base class.

An adapter turns a `SearchRequest` into one provider's wire request and maps the
response back into `Venue` records. Adapters are built once from injected
`Settings`; whether they run is decided by `is_enabled` (feature flag AND
credential present).

A disabled adapter returns `[]` without touching the network. Enabled adapters
raise on failure (`ProviderRequestFailed` or `httpx.HTTPError`) and let the
aggregator decide what a failure means.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import ClassVar, Literal

from datenight.config.settings import Settings
from datenight.core.geo import distance_miles
from datenight.core.provider_meta import MODE_DISABLED, MODE_LIVE, record_provider_call
from datenight.domain.models import SearchRequest, Venue

logger = logging.getLogger(__name__)

ProviderKind = Literal["restaurant", "activity"]


class BaseProvider(ABC):
    """Common enablement, timing and bookkeeping for all adapters."""

    name: ClassVar[str]
    kind: ClassVar[ProviderKind]
    # Attribute on `FeatureFlags` that switches this adapter on.
    flag: ClassVar[str]
    # Section under `settings.providers` holding the API key; None when no key is needed.
    credential: ClassVar[str | None] = None
    # False for adapters whose integration is still pending (stubs).
    implemented: ClassVar[bool] = True

    def __init__(self, settings: Settings):
        self._settings = settings

    @property
    def api_key(self) -> str | None:
        if self.credential is None:
            return None
        section = getattr(self._settings.providers, self.credential)
        return section.api_key or None

    @property
    def flag_enabled(self) -> bool:
        return bool(getattr(self._settings.feature_flags, self.flag))

    @property
    def has_credential(self) -> bool:
        return self.credential is None or bool(self.api_key)

    @property
    def is_enabled(self) -> bool:
        return self.flag_enabled and self.has_credential

    @property
    def timeout_seconds(self) -> float:
        return float(self._settings.app.http_timeout_seconds)

    async def search(self, request: SearchRequest) -> list[Venue]:
        """Search this provider; disabled adapters return an empty list."""
        if not self.is_enabled:
            record_provider_call(self.name, {"mode": MODE_DISABLED, "count": 0})
            return []

        started = time.perf_counter()
        try:
            venues = await self._search(request)
        except Exception as e:
            record_provider_call(
                self.name,
                {
                    "mode": MODE_LIVE,
                    "elapsed_ms": int((time.perf_counter() - started) * 1000),
                    "error": f"{type(e).__name__}: {e}",
                },
            )
            raise

        record_provider_call(
            self.name,
            {
                "mode": MODE_LIVE,
                "elapsed_ms": int((time.perf_counter() - started) * 1000),
                "count": len(venues),
            },
        )
        logger.info("%s %s provider returned %d venues", self.name, self.kind, len(venues))
        return venues

    @abstractmethod
    async def _search(self, request: SearchRequest) -> list[Venue]:
        raise NotImplementedError

    @staticmethod
    def distance_from(request: SearchRequest, lat: float, lng: float) -> float:
        return distance_miles(request.lat, request.lng, lat, lng)

    def within_search_area(self, request: SearchRequest, distance: float, in_target_city: bool | None) -> bool:
        """Distance cap (radius x buffer) plus the soft target-city preference.

        `in_target_city=None` means the provider could not tell; such venues are kept.
        Out-of-city venues survive only when they are close.
        """
        area = self._settings.search_area
        if distance > request.radius_miles * area.distance_buffer:
            return False
        if request.target_city and in_target_city is False and distance > area.soft_city_max_miles:
            return False
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, enabled={self.is_enabled})"
