"""
DateNight CLI entrypoint.

This CLI is intended for quick local demos and debugging without a web client.
It delegates search logic to `datenight.search.service` and pairing logic to
`datenight.planner.plan`.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from datenight.config.settings import get_settings
from datenight.core.geo import GeoPoint
from datenight.core.logging import configure_logging
from datenight.domain.models import SearchResponse
from datenight.planner.plan import PlanCriteria, build_sequenced_plan
from datenight.providers.registry import provider_status
from datenight.scoring.explain import one_line_summary
from datenight.search.service import search_activities, search_restaurants
from datenight.search.validation import parse_search_request


def _search_payload(args: argparse.Namespace) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "lat": args.lat,
        "lng": args.lng,
        "radius_miles": args.radius,
        "novelty_mode": args.novelty,
        "seed": args.seed,
        "force_fresh": args.fresh,
        "surprise_me": args.surprise,
        "exclude_place_ids": args.exclude or [],
        "limit": args.limit,
        "target_city": args.target_city,
    }
    for key in ("cuisine", "keyword", "price_level"):
        value = getattr(args, key, None)
        if value is not None:
            payload[key] = value
    return {k: v for k, v in payload.items() if v is not None}


def _print_response(title: str, response: SearchResponse) -> None:
    print(f"{title}: {len(response.items)} results  providers={response.provider_stats}")
    for i, venue in enumerate(response.items, start=1):
        print(f"{i:>2}. {venue.name}  {one_line_summary(venue)}")
    errors = response.meta.get("providerErrors") or {}
    for name, message in errors.items():
        print(f"    ! {name}: {message}")
    fallbacks = response.meta.get("fallbackKeywords")
    if fallbacks:
        print(f"Try instead: {', '.join(fallbacks)}")


def _cmd_restaurants(args: argparse.Namespace) -> int:
    """Handle the `restaurants` subcommand."""
    request = parse_search_request(_search_payload(args), "restaurant")
    response = asyncio.run(search_restaurants(request, settings=get_settings()))
    if args.json:
        print(json.dumps(response.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
        return 0
    _print_response("Restaurants", response)
    return 0


def _cmd_activities(args: argparse.Namespace) -> int:
    """Handle the `activities` subcommand."""
    request = parse_search_request(_search_payload(args), "activity")
    response = asyncio.run(search_activities(request, settings=get_settings()))
    if args.json:
        print(json.dumps(response.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
        return 0
    _print_response("Activities", response)
    return 0


async def _search_both(args: argparse.Namespace) -> tuple[SearchResponse, SearchResponse]:
    settings = get_settings()
    payload = _search_payload(args)
    restaurants = parse_search_request(payload, "restaurant")
    activities = parse_search_request(payload, "activity")
    return await asyncio.gather(
        search_restaurants(restaurants, settings=settings),
        search_activities(activities, settings=settings),
    )


def _cmd_plan(args: argparse.Namespace) -> int:
    """Handle the `plan` subcommand: search both kinds, then pair them."""
    settings = get_settings()
    restaurants, activities = asyncio.run(_search_both(args))
    criteria = PlanCriteria(
        mode=args.mode,
        pair_by_proximity=args.pair_by_proximity,
        plan_intent="dinner_and_show" if args.show_time else None,
        scheduled_time=args.show_time,
    )
    plan = build_sequenced_plan(
        GeoPoint(args.lat, args.lng), restaurants.items, activities.items, criteria, settings=settings.plan
    )

    if args.json:
        print(json.dumps(plan.as_dict(), ensure_ascii=False, indent=2, default=str))
        return 0

    d = plan.distances
    if plan.restaurant:
        print(f"Dinner:   {plan.restaurant.name} ({d.to_restaurant:.1f} mi)")
    if plan.activity:
        print(f"Activity: {plan.activity.name} ({d.to_activity:.1f} mi)")
    if plan.restaurant and plan.activity:
        print(f"Between:  {d.between_places:.1f} mi")
    if plan.narrative:
        print(plan.narrative)
    return 0


def _cmd_providers(args: argparse.Namespace) -> int:
    status = provider_status(get_settings())
    if args.json:
        print(json.dumps(status, ensure_ascii=False, indent=2))
        return 0
    for group, providers in status.items():
        print(f"{group}:")
        for name, info in providers.items():
            print(f"  {name:<12} {info['status']}")
    return 0


def _add_search_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", required=True, type=float)
    p.add_argument("--lng", required=True, type=float)
    p.add_argument("--radius", required=True, type=float, help="Search radius in miles")
    p.add_argument("--target-city", dest="target_city", default=None)
    p.add_argument("--novelty", choices=["popular", "balanced", "hidden_gems"], default="balanced")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fresh", action="store_true", help="Generate a new seed for varied results")
    p.add_argument("--surprise", action="store_true", help="Top results only, no shuffle")
    p.add_argument("--exclude", action="append", default=[], help="Place id already shown (repeatable)")
    p.add_argument("--limit", type=int, default=None)
    p.add_argument("--json", action="store_true", help="Output machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the DateNight CLI."""
    parser = argparse.ArgumentParser(prog="datenight")
    sub = parser.add_subparsers(dest="command", required=True)

    rest = sub.add_parser("restaurants", help="Search and rank restaurants.")
    _add_search_args(rest)
    rest.add_argument("--cuisine", required=True)
    rest.add_argument("--price-level", dest="price_level", choices=["budget", "moderate", "upscale", "fine_dining"])
    rest.set_defaults(func=_cmd_restaurants)

    act = sub.add_parser("activities", help="Search and rank activities and events.")
    _add_search_args(act)
    act.add_argument("--keyword", required=True)
    act.set_defaults(func=_cmd_activities)

    plan = sub.add_parser("plan", help="Search both kinds and build a date plan.")
    _add_search_args(plan)
    plan.add_argument("--cuisine", required=True)
    plan.add_argument("--keyword", required=True)
    plan.add_argument("--mode", choices=["both", "restaurant_only", "activity_only"], default="both")
    plan.add_argument("--pair-by-proximity", dest="pair_by_proximity", action="store_true")
    plan.add_argument("--show-time", dest="show_time", default=None, help="HH:MM; schedules dinner around a show")
    plan.set_defaults(func=_cmd_plan)

    prov = sub.add_parser("providers", help="Show provider readiness.")
    prov.add_argument("--json", action="store_true")
    prov.set_defaults(func=_cmd_providers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m datenight.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
