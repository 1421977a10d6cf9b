from __future__ import annotations

# Search orchestration.
#
# One pipeline serves both search kinds:
#   providers (concurrent) -> merge -> quality floors -> drop previously shown
#   -> score -> order -> limit
#
# The kinds differ only in the merger flavor, the rating floor and whether the
# date-worthiness score participates in ordering. Provider failures never fail
# a search: they surface in `meta.providerErrors` and a zero in provider stats.

import logging
import random
import time
from typing import Callable, Literal, Sequence

from datenight.aggregation.aggregator import aggregate
from datenight.aggregation.merger import merge_activities, merge_restaurants
from datenight.aggregation.quality import apply_quality_floors
from datenight.config.overrides import apply_settings_overrides
from datenight.config.settings import Settings, get_settings
from datenight.domain.models import SearchRequest, SearchResponse
from datenight.providers.base import BaseProvider
from datenight.providers.registry import build_activity_providers, build_restaurant_providers, enabled_providers
from datenight.ranking.orderer import exclude_previously_shown, order
from datenight.scoring.date_worthiness import fallback_keywords, results_are_weak, venue_date_score
from datenight.scoring.uniqueness import score_venue

logger = logging.getLogger(__name__)

SearchKind = Literal["restaurant", "activity"]
ProviderFactory = Callable[[Settings], list[BaseProvider]]

MAX_GENERATED_SEED = 2**31 - 1


def effective_seed(request: SearchRequest) -> int | None:
    """The caller's seed; a fresh one when `force_fresh` asks for new variety."""
    if request.seed is not None:
        return request.seed
    if request.force_fresh:
        return random.randint(1, MAX_GENERATED_SEED)
    return None


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


async def run_search(
    request: SearchRequest,
    kind: SearchKind,
    *,
    providers: Sequence[BaseProvider] | None = None,
    settings: Settings | None = None,
) -> SearchResponse:
    """Run the full pipeline for one search kind.

    `providers` defaults to the static registry list built from the effective
    settings (after per-request overrides).
    """
    started = time.perf_counter()
    settings = apply_settings_overrides(settings or get_settings(), request.settings_overrides)
    if providers is None:
        factory: ProviderFactory = build_restaurant_providers if kind == "restaurant" else build_activity_providers
        providers = factory(settings)
    active = enabled_providers(providers)
    if not active:
        logger.warning("No %s providers enabled; returning an empty result", kind)

    timings_ms: dict[str, int] = {}

    t0 = time.perf_counter()
    aggregated = await aggregate(active, request)
    timings_ms["aggregate"] = _elapsed_ms(t0)

    t0 = time.perf_counter()
    merged = merge_restaurants(aggregated.lists) if kind == "restaurant" else merge_activities(aggregated.lists)
    timings_ms["merge"] = _elapsed_ms(t0)

    kept, quality_drops = apply_quality_floors(merged, kind, settings.quality)
    unseen, previously_shown = exclude_previously_shown(kept, request.exclude_place_ids)

    t0 = time.perf_counter()
    if kind == "activity":
        scored = [score_venue(v, request.novelty_mode, date_worthiness=venue_date_score(v)) for v in unseen]
    else:
        scored = [score_venue(v, request.novelty_mode) for v in unseen]
    timings_ms["score"] = _elapsed_ms(t0)

    seed = effective_seed(request)
    ranked = order(scored, kind, seed=seed, surprise_me=request.surprise_me, ranking=settings.ranking)
    if request.limit is not None:
        ranked = ranked[: request.limit]
    timings_ms["total"] = _elapsed_ms(started)

    meta: dict[str, object] = {
        "seed": seed,
        "excludedCountsByReason": {"previouslyShown": previously_shown},
        "qualityDropsByReason": quality_drops,
        "providerErrors": aggregated.provider_errors,
        "timingsMs": timings_ms,
    }
    if kind == "activity":
        keyword = request.keyword or ""
        meta["fallbackKeywords"] = fallback_keywords(keyword, results_are_weak(unseen, keyword))

    logger.info(
        "%s search: %d merged, %d kept, %d returned in %dms",
        kind,
        len(merged),
        len(unseen),
        len(ranked),
        timings_ms["total"],
    )
    return SearchResponse(
        items=ranked,
        provider_stats=aggregated.provider_stats,
        force_fresh=request.force_fresh,
        meta=meta,
    )


async def search_restaurants(
    request: SearchRequest,
    providers: Sequence[BaseProvider] | None = None,
    settings: Settings | None = None,
) -> SearchResponse:
    return await run_search(request, "restaurant", providers=providers, settings=settings)


async def search_activities(
    request: SearchRequest,
    providers: Sequence[BaseProvider] | None = None,
    settings: Settings | None = None,
) -> SearchResponse:
    return await run_search(request, "activity", providers=providers, settings=settings)
