"""
Provider registry.

Adapters are a static list built from injected settings; there is no dynamic
registration. Per-request enablement is just `is_enabled` on each adapter.
"""

from __future__ import annotations

from typing import Iterable, Literal

from datenight.config.settings import Settings
from datenight.providers.base import BaseProvider
from datenight.providers.exclusions import ActivityExclusionRules, RestaurantExclusionRules
from datenight.providers.foursquare import FoursquareActivityProvider, FoursquareRestaurantProvider
from datenight.providers.google_activities import GoogleActivityProvider
from datenight.providers.google_places import GooglePlacesRestaurantProvider
from datenight.providers.mock import MockRestaurantProvider
from datenight.providers.stubs import EventbriteProvider, YelpActivityProvider, YelpRestaurantProvider
from datenight.providers.ticketmaster import TicketmasterProvider

ProviderStatus = Literal["active", "ready", "needs_api_key", "disabled"]


def build_restaurant_providers(
    settings: Settings, rules: RestaurantExclusionRules | None = None
) -> list[BaseProvider]:
    rules = rules or RestaurantExclusionRules()
    return [
        GooglePlacesRestaurantProvider(settings, rules),
        FoursquareRestaurantProvider(settings, rules),
        YelpRestaurantProvider(settings),
        MockRestaurantProvider(settings),
    ]


def build_activity_providers(
    settings: Settings, rules: ActivityExclusionRules | None = None
) -> list[BaseProvider]:
    rules = rules or ActivityExclusionRules()
    return [
        GoogleActivityProvider(settings, rules),
        FoursquareActivityProvider(settings, rules),
        TicketmasterProvider(settings),
        EventbriteProvider(settings),
        YelpActivityProvider(settings),
    ]


def enabled_providers(providers: Iterable[BaseProvider]) -> list[BaseProvider]:
    return [p for p in providers if p.is_enabled]


def status_of(provider: BaseProvider) -> ProviderStatus:
    """active: will be queried; ready: credential present but switched off or pending."""
    if not provider.has_credential:
        return "needs_api_key"
    if provider.flag_enabled and provider.implemented:
        return "active"
    if provider.credential is None:
        return "disabled"
    return "ready"


def provider_status(settings: Settings) -> dict[str, dict[str, dict[str, object]]]:
    """Readiness per provider, grouped by kind. Never includes credentials."""
    groups = {
        "restaurants": build_restaurant_providers(settings),
        "activities": build_activity_providers(settings),
    }
    return {
        group: {
            p.name: {
                "status": status_of(p),
                "enabled": p.is_enabled,
                "flag": p.flag,
            }
            for p in providers
        }
        for group, providers in groups.items()
    }
