"""
Plan builder.

Given already-ranked restaurant and activity lists, pick one of each and compute
the distances between the search center and the two venues.

Selection is a compatibility filter, not a re-ranking: each list is walked in
rank order and the first entry satisfying the caller's preferences wins, with
index 0 as the fallback. `build_plan_from_indices` supports "swap" by taking
explicit positions in the same lists.

`build_sequenced_plan` handles the dinner-and-show flow: the show time is fixed,
so dinner is scheduled backwards from it (or dessert after it when dinner would
start too early).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Sequence

from datenight.config.settings import PlanSettings
from datenight.core.geo import GeoPoint, haversine_miles
from datenight.domain.models import Venue

PlanMode = Literal["both", "restaurant_only", "activity_only"]
Intent = Literal["surprise", "specific", "flexible"]

INDOOR_KEYWORDS = ("museum", "theater", "arcade", "bowling", "spa", "mall")
OUTDOOR_KEYWORDS = ("park", "hiking", "mini golf", "outdoor")

MINUTES_PER_MILE = 4


@dataclass(frozen=True)
class PlanCriteria:
    """Caller preferences used to pick venues from the ranked lists."""

    mode: PlanMode = "both"
    cuisines: tuple[str, ...] = ()
    activities: tuple[str, ...] = ()
    # > 0 favors indoor activities, < 0 outdoor ones.
    indoor_preference: float | None = None
    intent: Intent | None = None
    avoid_place_ids: frozenset[str] = frozenset()
    pair_by_proximity: bool = False
    plan_intent: str | None = None
    scheduled_time: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PlanCriteria":
        """Build criteria from a camelCase or snake_case JSON payload."""
        data = data or {}

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return None

        mode = pick("mode", "searchMode", "search_mode") or "both"
        if mode not in ("both", "restaurant_only", "activity_only"):
            raise ValueError(f"Invalid plan mode: {mode!r}")
        indoor = pick("indoorPreference", "indoor_preference")
        return cls(
            mode=mode,
            cuisines=tuple(pick("cuisines") or ()),
            activities=tuple(pick("activities") or ()),
            indoor_preference=float(indoor) if indoor is not None else None,
            intent=pick("intent"),
            avoid_place_ids=frozenset(pick("avoidPlaceIds", "avoid_place_ids") or ()),
            pair_by_proximity=bool(pick("pairByProximity", "pair_by_proximity") or False),
            plan_intent=pick("planIntent", "plan_intent"),
            scheduled_time=pick("scheduledTime", "scheduled_time"),
        )


@dataclass(frozen=True)
class PlanDistances:
    to_restaurant: float = 0.0
    to_activity: float = 0.0
    between_places: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "toRestaurant": self.to_restaurant,
            "toActivity": self.to_activity,
            "betweenPlaces": self.between_places,
        }


@dataclass(frozen=True)
class Plan:
    restaurant: Venue | None
    activity: Venue | None
    distances: PlanDistances = field(default_factory=PlanDistances)

    def as_dict(self) -> dict[str, Any]:
        return {
            "restaurant": self.restaurant.model_dump(by_alias=True) if self.restaurant else None,
            "activity": self.activity.model_dump(by_alias=True) if self.activity else None,
            "distances": self.distances.as_dict(),
        }


@dataclass(frozen=True)
class PlanTiming:
    dinner_start: str
    dinner_end: str
    travel_minutes: int
    activity_start: str
    activity_end: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "dinnerStart": self.dinner_start,
            "dinnerEnd": self.dinner_end,
            "travelTime": self.travel_minutes,
            "activityStart": self.activity_start,
            "activityEnd": self.activity_end,
        }


@dataclass(frozen=True)
class SequencedPlan(Plan):
    sequence: Literal["dinner_first", "show_first"] = "dinner_first"
    narrative: str | None = None
    timing: PlanTiming | None = None

    def as_dict(self) -> dict[str, Any]:
        data = super().as_dict()
        data["sequence"] = self.sequence
        data["narrative"] = self.narrative
        data["timing"] = self.timing.as_dict() if self.timing else None
        return data


def _point(venue: Venue) -> GeoPoint:
    return GeoPoint(venue.lat, venue.lng)


def _miles(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_miles(a, b)


def compute_distances(center: GeoPoint, restaurant: Venue | None, activity: Venue | None) -> PlanDistances:
    return PlanDistances(
        to_restaurant=_miles(center, _point(restaurant)) if restaurant else 0.0,
        to_activity=_miles(center, _point(activity)) if activity else 0.0,
        between_places=_miles(_point(restaurant), _point(activity)) if restaurant and activity else 0.0,
    )


def _text_of(venue: Venue, *, with_category: bool = False) -> str:
    parts = [venue.name, *venue.types]
    if with_category:
        parts.append(venue.category)
    return " ".join(parts).lower().replace("_", " ")


def _matches_any(text: str, wanted: Sequence[str]) -> bool:
    return any(w.lower().replace("_", " ") in text for w in wanted if w)


def _restaurant_predicate(criteria: PlanCriteria) -> Callable[[Venue], bool]:
    def ok(venue: Venue) -> bool:
        if criteria.intent == "surprise" and venue.id in criteria.avoid_place_ids:
            return False
        if criteria.cuisines and not _matches_any(_text_of(venue), criteria.cuisines):
            return False
        return True

    return ok


def _activity_predicate(criteria: PlanCriteria) -> Callable[[Venue], bool]:
    def ok(venue: Venue) -> bool:
        if criteria.intent == "surprise" and venue.id in criteria.avoid_place_ids:
            return False
        text = _text_of(venue, with_category=True)
        if criteria.activities and not _matches_any(text, criteria.activities):
            return False
        if criteria.indoor_preference:
            wanted = INDOOR_KEYWORDS if criteria.indoor_preference > 0 else OUTDOOR_KEYWORDS
            if not _matches_any(text, wanted):
                return False
        return True

    return ok


def select_first(ranked: Sequence[Venue], predicate: Callable[[Venue], bool]) -> Venue | None:
    """First entry satisfying `predicate`, else the top entry, else None."""
    if not ranked:
        return None
    for venue in ranked:
        if predicate(venue):
            return venue
    return ranked[0]


def _closest_to(anchor: Venue, candidates: Sequence[Venue]) -> Venue:
    anchor_point = _point(anchor)
    return min(candidates, key=lambda v: _miles(anchor_point, _point(v)))


def build_plan(
    center: GeoPoint,
    restaurants: Sequence[Venue],
    activities: Sequence[Venue],
    criteria: PlanCriteria | None = None,
    *,
    settings: PlanSettings | None = None,
) -> Plan:
    """Pick a restaurant and/or an activity from ranked lists.

    Raises:
        ValueError: If the mode selects neither a restaurant nor an activity.
    """
    criteria = criteria or PlanCriteria()
    settings = settings or PlanSettings()

    restaurant = None
    activity = None
    if criteria.mode in ("both", "restaurant_only"):
        restaurant = select_first(restaurants, _restaurant_predicate(criteria))
    if criteria.mode in ("both", "activity_only"):
        if criteria.mode == "both" and criteria.pair_by_proximity and restaurant and activities:
            activity = _closest_to(restaurant, activities[: settings.proximity_candidates])
        else:
            activity = select_first(activities, _activity_predicate(criteria))

    if restaurant is None and activity is None:
        raise ValueError("Cannot build a plan: no restaurant or activity available for this mode.")

    return Plan(restaurant=restaurant, activity=activity, distances=compute_distances(center, restaurant, activity))


def build_plan_from_indices(
    center: GeoPoint,
    restaurants: Sequence[Venue],
    activities: Sequence[Venue],
    restaurant_index: int,
    activity_index: int,
    mode: PlanMode = "both",
) -> Plan:
    """Build a plan from explicit list positions.

    An out-of-range position leaves that slot empty; `ValueError` when both are empty.
    """

    def at(items: Sequence[Venue], index: int) -> Venue | None:
        return items[index] if 0 <= index < len(items) else None

    restaurant = at(restaurants, restaurant_index) if mode in ("both", "restaurant_only") else None
    activity = at(activities, activity_index) if mode in ("both", "activity_only") else None
    if restaurant is None and activity is None:
        raise ValueError("Cannot build a plan: neither index points at a venue for this mode.")
    return Plan(restaurant=restaurant, activity=activity, distances=compute_distances(center, restaurant, activity))


def format_time(minutes: int) -> str:
    """Minutes since midnight -> "7:05 PM"."""
    h = (minutes // 60) % 24
    m = minutes % 60
    suffix = "PM" if h >= 12 else "AM"
    display_h = h - 12 if h > 12 else 12 if h == 0 else h
    return f"{display_h}:{m:02d} {suffix}"


def _parse_clock(value: str) -> int:
    hours, _, mins = value.partition(":")
    return int(hours) * 60 + int(mins or 0)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def build_sequenced_plan(
    center: GeoPoint,
    restaurants: Sequence[Venue],
    activities: Sequence[Venue],
    criteria: PlanCriteria | None = None,
    *,
    settings: PlanSettings | None = None,
) -> SequencedPlan:
    """Schedule dinner around a show; other intents fall back to `build_plan`."""
    criteria = criteria or PlanCriteria()
    settings = settings or PlanSettings()

    if criteria.plan_intent != "dinner_and_show" or not criteria.scheduled_time or not restaurants or not activities:
        plan = build_plan(center, restaurants, activities, criteria, settings=settings)
        return SequencedPlan(restaurant=plan.restaurant, activity=plan.activity, distances=plan.distances)

    show_start = _parse_clock(criteria.scheduled_time)
    show_end = show_start + settings.show_minutes
    activity = select_first(activities, _activity_predicate(criteria)) or activities[0]

    latest_dinner_start = show_start - settings.dinner_minutes - settings.travel_minutes
    if latest_dinner_start >= settings.earliest_dinner_hour * 60:
        activity_point = _point(activity)
        nearby = [r for r in restaurants if _miles(_point(r), activity_point) <= settings.max_miles_from_venue]
        restaurant = nearby[0] if nearby else restaurants[0]
        between = _miles(_point(restaurant), activity_point)
        travel = max(settings.travel_minutes, _round_half_up(between * MINUTES_PER_MILE))
        return SequencedPlan(
            restaurant=restaurant,
            activity=activity,
            distances=compute_distances(center, restaurant, activity),
            sequence="dinner_first",
            narrative=(
                f"Dinner at {format_time(latest_dinner_start)}, {travel} min drive, "
                f"show starts at {format_time(show_start)}"
            ),
            timing=PlanTiming(
                dinner_start=format_time(latest_dinner_start),
                dinner_end=format_time(latest_dinner_start + settings.dinner_minutes),
                travel_minutes=travel,
                activity_start=format_time(show_start),
                activity_end=format_time(show_end),
            ),
        )

    restaurant = restaurants[0]
    return SequencedPlan(
        restaurant=restaurant,
        activity=activity,
        distances=compute_distances(center, restaurant, activity),
        sequence="show_first",
        narrative=f"Show at {format_time(show_start)}, then dessert/cocktails at {format_time(show_end)}",
        timing=PlanTiming(
            dinner_start=format_time(show_end),
            dinner_end=format_time(show_end + settings.dessert_minutes),
            travel_minutes=settings.travel_minutes,
            activity_start=format_time(show_start),
            activity_end=format_time(show_end),
        ),
    )
