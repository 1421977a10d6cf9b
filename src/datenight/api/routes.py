"""
API routes.

Endpoints:
- POST `/api/restaurants/search`: ranked restaurants (`cuisine` required).
- POST `/api/activities/search`: ranked activities and events (`keyword` required).
- POST `/api/plans`: pick a restaurant + activity pairing from ranked lists.
- GET  `/api/providers/status`: provider readiness (never exposes credentials).
- GET  `/api/health`: liveness.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from datenight.config.settings import get_settings
from datenight.core.geo import GeoPoint
from datenight.core.provider_meta import ProviderMeta, capture_provider_meta
from datenight.domain.models import SearchResponse, Venue
from datenight.planner.plan import PlanCriteria, build_plan_from_indices, build_sequenced_plan
from datenight.providers.base import BaseProvider
from datenight.providers.registry import build_activity_providers, build_restaurant_providers, provider_status
from datenight.search.service import search_activities, search_restaurants
from datenight.search.validation import parse_search_request

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache
def _restaurant_providers() -> list[BaseProvider]:
    return build_restaurant_providers(get_settings())


@lru_cache
def _activity_providers() -> list[BaseProvider]:
    return build_activity_providers(get_settings())


def _validation_error(e: Exception) -> HTTPException:
    return HTTPException(status_code=400, detail={"code": "VALIDATION_ERROR", "message": str(e)})


def _internal_error(e: Exception) -> HTTPException:
    logger.exception("Unhandled error")
    return HTTPException(status_code=500, detail={"code": "INTERNAL_ERROR", "message": str(e)})


def _with_provider_meta(response: SearchResponse, pm: ProviderMeta) -> dict[str, Any]:
    payload = response.model_dump(by_alias=True)
    payload["meta"] = {**payload.get("meta", {}), "providers": pm.calls, "providerSummary": pm.summary()}
    return payload


@router.post("/api/restaurants/search")
async def post_restaurant_search(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Search restaurants across enabled providers."""
    settings = get_settings()
    try:
        request = parse_search_request(
            payload, "restaurant", max_excluded_place_ids=settings.ranking.max_excluded_place_ids
        )
        # Overrides may change provider-side knobs (search area), so rebuild adapters for them.
        providers = None if request.settings_overrides else _restaurant_providers()
        with capture_provider_meta() as pm:
            response = await search_restaurants(request, providers, settings)
        return _with_provider_meta(response, pm)
    except ValueError as e:
        raise _validation_error(e) from e
    except Exception as e:
        raise _internal_error(e) from e


@router.post("/api/activities/search")
async def post_activity_search(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Search activities and events across enabled providers."""
    settings = get_settings()
    try:
        request = parse_search_request(
            payload, "activity", max_excluded_place_ids=settings.ranking.max_excluded_place_ids
        )
        providers = None if request.settings_overrides else _activity_providers()
        with capture_provider_meta() as pm:
            response = await search_activities(request, providers, settings)
        return _with_provider_meta(response, pm)
    except ValueError as e:
        raise _validation_error(e) from e
    except Exception as e:
        raise _internal_error(e) from e


def _venues(items: Any, field: str) -> list[Venue]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError(f"{field} must be a list of venues")
    return [Venue.model_validate(item) for item in items]


@router.post("/api/plans")
def post_plan(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Build a plan from ranked lists (by preference, or by explicit indices for swaps)."""
    settings = get_settings()
    try:
        try:
            center = GeoPoint(lat=float(payload["lat"]), lng=float(payload["lng"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError("Missing or invalid required parameters: lat, lng") from e

        restaurants = _venues(payload.get("restaurants"), "restaurants")
        activities = _venues(payload.get("activities"), "activities")
        criteria_payload = dict(payload.get("criteria") or {})
        if payload.get("mode"):
            criteria_payload["mode"] = payload["mode"]
        criteria = PlanCriteria.from_dict(criteria_payload)

        restaurant_index = payload.get("restaurantIndex")
        activity_index = payload.get("activityIndex")
        if restaurant_index is not None or activity_index is not None:
            plan = build_plan_from_indices(
                center,
                restaurants,
                activities,
                int(restaurant_index or 0),
                int(activity_index or 0),
                criteria.mode,
            )
        else:
            plan = build_sequenced_plan(center, restaurants, activities, criteria, settings=settings.plan)
        return plan.as_dict()
    except ValueError as e:
        raise _validation_error(e) from e
    except Exception as e:
        raise _internal_error(e) from e


@router.get("/api/providers/status")
def get_provider_status() -> dict[str, Any]:
    """Return provider readiness grouped by search kind."""
    return provider_status(get_settings())


@router.get("/api/health")
def get_health() -> dict[str, str]:
    return {"status": "ok", "app": get_settings().app.name}
