"""
Concurrent provider fan-out.

Every enabled provider is queried at once and the call settles when all of them
have finished. A failing provider contributes an empty list, a `0` in the stats
and an entry in `provider_errors`; it never fails the search.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Sequence

from datenight.domain.models import SearchRequest, Venue
from datenight.providers.base import BaseProvider

logger = logging.getLogger(__name__)


@dataclass
class AggregationResult:
    results: dict[str, list[Venue]] = field(default_factory=dict)
    provider_stats: dict[str, int] = field(default_factory=dict)
    provider_errors: dict[str, str] = field(default_factory=dict)
    elapsed_ms: int = 0

    @property
    def venues(self) -> list[Venue]:
        """All provider results concatenated in provider order."""
        return [v for venues in self.results.values() for v in venues]

    @property
    def lists(self) -> list[list[Venue]]:
        return list(self.results.values())


async def aggregate(providers: Sequence[BaseProvider], request: SearchRequest) -> AggregationResult:
    """Query `providers` concurrently and collect their results."""
    if not providers:
        return AggregationResult()

    started = time.perf_counter()
    outcomes = await asyncio.gather(*(p.search(request) for p in providers), return_exceptions=True)

    result = AggregationResult()
    for provider, outcome in zip(providers, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning("Provider %s failed: %s: %s", provider.name, type(outcome).__name__, outcome)
            result.results[provider.name] = []
            result.provider_stats[provider.name] = 0
            result.provider_errors[provider.name] = f"{type(outcome).__name__}: {outcome}"
            continue
        result.results[provider.name] = list(outcome)
        result.provider_stats[provider.name] = len(outcome)

    result.elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info("Aggregated %d venues from %d providers in %dms", len(result.venues), len(providers), result.elapsed_ms)
    return result
