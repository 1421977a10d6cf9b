# src/datenight/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/datenight/config/defaults.yaml`, then optionally overridden by:
- environment variables (provider API keys, `DATENIGHT_LOG_LEVEL`, `DATENIGHT_ENABLE_MOCK`)
- an external YAML file via `DATENIGHT_CONFIG_PATH`

Design rule:
- Tuning knobs (quality floors, ranking bands, search area buffers) live in YAML,
  not hard-coded in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any
from datenight.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `datenight.config`."""
    text = resources.files("datenight.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "DateNight"
    http_timeout_seconds: float = 10
    log_level: str = "INFO"


class GoogleSettings(BaseModel):
    api_key: str | None = None
    search_text_url: str = "https://places.googleapis.com/v1/places:searchText"
    max_result_count: int = Field(20, ge=1, le=20)
    language_code: str = "en"


class FoursquareSettings(BaseModel):
    api_key: str | None = None
    search_url: str = "https://api.foursquare.com/v3/places/search"
    limit: int = Field(50, ge=1, le=50)


class TicketmasterSettings(BaseModel):
    api_key: str | None = None
    events_url: str = "https://app.ticketmaster.com/discovery/v2/events.json"
    max_radius_miles: int = 100
    page_size: int = Field(20, ge=1, le=50)


class YelpSettings(BaseModel):
    api_key: str | None = None


class EventbriteSettings(BaseModel):
    api_key: str | None = None


class ProvidersSettings(BaseModel):
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    foursquare: FoursquareSettings = Field(default_factory=FoursquareSettings)
    ticketmaster: TicketmasterSettings = Field(default_factory=TicketmasterSettings)
    yelp: YelpSettings = Field(default_factory=YelpSettings)
    eventbrite: EventbriteSettings = Field(default_factory=EventbriteSettings)


class FeatureFlags(BaseModel):
    """Static rollout switches; a provider also needs its credential to be enabled."""

    enable_google: bool = True
    enable_foursquare: bool = True
    enable_yelp: bool = False
    enable_ticketmaster: bool = False
    enable_eventbrite: bool = False
    enable_yelp_activities: bool = False
    enable_mock: bool = False


class QualitySettings(BaseModel):
    min_rating_restaurant: float = Field(3.5, ge=0, le=5)
    min_rating_activity: float = Field(3.5, ge=0, le=5)
    min_review_count: int = Field(5, ge=0)
    min_review_count_if_no_photos: int = Field(50, ge=0)


class RankingSettings(BaseModel):
    restaurant_rating_band: float = Field(0.3, ge=0)
    activity_rating_band: float = Field(0.2, ge=0)
    date_worthiness_tolerance: float = Field(5.0, ge=0)
    surprise_top_n: int = Field(15, ge=1)
    max_excluded_place_ids: int = Field(100, ge=0)


class SearchAreaSettings(BaseModel):
    distance_buffer: float = Field(1.5, ge=1)
    soft_city_max_miles: float = Field(5.0, ge=0)


class PlanSettings(BaseModel):
    proximity_candidates: int = Field(5, ge=1)
    dinner_minutes: int = 90
    travel_minutes: int = 15
    dessert_minutes: int = 45
    show_minutes: int = 120
    max_miles_from_venue: float = 5.0
    earliest_dinner_hour: int = Field(11, ge=0, le=23)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    providers: ProvidersSettings = Field(default_factory=ProvidersSettings)
    feature_flags: FeatureFlags = Field(default_factory=FeatureFlags)
    quality: QualitySettings = Field(default_factory=QualitySettings)
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    search_area: SearchAreaSettings = Field(default_factory=SearchAreaSettings)
    plan: PlanSettings = Field(default_factory=PlanSettings)


_PROVIDER_KEY_ENV = {
    "google": "GOOGLE_MAPS_API_KEY",
    "foursquare": "FOURSQUARE_API_KEY",
    "ticketmaster": "TICKETMASTER_API_KEY",
    "yelp": "YELP_API_KEY",
    "eventbrite": "EVENTBRITE_API_KEY",
}


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small to avoid exposing unsafe overrides.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("DATENIGHT_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    for provider, env_name in _PROVIDER_KEY_ENV.items():
        value = os.getenv(env_name)
        if value:
            data.setdefault("providers", {}).setdefault(provider, {})["api_key"] = value

    enable_mock = os.getenv("DATENIGHT_ENABLE_MOCK")
    if enable_mock:
        data.setdefault("feature_flags", {})["enable_mock"] = enable_mock.strip().lower() in {
            "1",
            "true",
            "yes",
            "y",
        }

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("DATENIGHT_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
