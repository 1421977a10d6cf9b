"""
Chain detection.

A venue counts as a chain when the provider says so (structured chain metadata)
or when its name matches known chain keywords or "store number" patterns. Chains
are sorted into penalty tiers; fine-dining chains remain good date-night venues
and only get a token penalty.

Everything here is a pure function of `(name, chains)` so the scoring engine
never needs provider-specific field names.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable


class ChainTier(str, Enum):
    FAST_FOOD = "fast_food"
    CASUAL = "casual"
    FINE_DINING = "fine_dining"
    GENERIC = "generic"


CHAIN_PENALTIES: dict[ChainTier, float] = {
    ChainTier.FAST_FOOD: 0.05,
    ChainTier.CASUAL: 0.15,
    ChainTier.FINE_DINING: 0.85,
    ChainTier.GENERIC: 0.3,
}

FAST_FOOD_CHAINS: tuple[str, ...] = (
    # quick service
    "mcdonald", "burger king", "wendy", "kfc", "taco bell", "subway",
    "jack in the box", "carl's jr", "hardee", "arby", "sonic", "whataburger",
    "popeyes", "wingstop", "chick-fil-a", "del taco", "in-n-out", "five guys",
    "shake shack", "chipotle", "panda express", "el pollo loco",
    # fast casual
    "panera", "jimmy john", "jersey mike", "blaze pizza", "mod pizza", "pieology",
    # coffee
    "starbucks", "dunkin", "coffee bean", "peet's coffee",
)

CASUAL_CHAINS: tuple[str, ...] = (
    "applebee", "chili's", "olive garden", "red lobster", "outback",
    "texas roadhouse", "longhorn", "cheesecake factory", "yard house",
    "bj's restaurant", "buffalo wild wings", "hooters", "twin peaks",
    "california pizza kitchen", "pf chang", "benihana", "claim jumper",
    "red robin", "cheddar", "cracker barrel", "denny's", "ihop",
    # regional (west coast)
    "lucille's", "lazy dog", "the habit", "rubio", "islands",
    # bar / nightlife
    "dave & buster", "punch bowl social",
)

FINE_DINING_CHAINS: tuple[str, ...] = (
    "capital grille", "morton's", "morton", "ruth's chris", "ruth chris",
    "fleming's", "flemings", "mastro's", "mastro", "eddie v",
    "seasons 52", "houston's", "del frisco", "boa steakhouse",
    "stk", "the palm", "smith & wollensky", "fogo de chao",
)

# Chain signals that do not map to a specific tier.
GENERIC_CHAIN_KEYWORDS: tuple[str, ...] = (
    "top golf", "topgolf",
    " grill & bar", " bar & grill", " sports bar",
)

CHAIN_KEYWORDS: tuple[str, ...] = FAST_FOOD_CHAINS + CASUAL_CHAINS + FINE_DINING_CHAINS + GENERIC_CHAIN_KEYWORDS

# "Location #42", "Pizza Place 7"
_STORE_NUMBER = re.compile(r"\s#\d+|\s\d+$")


def _contains_any(name_lower: str, keywords: Iterable[str]) -> bool:
    return any(kw in name_lower for kw in keywords)


def is_fast_food_chain(name: str) -> bool:
    return _contains_any(name.lower().strip(), FAST_FOOD_CHAINS)


def is_casual_chain(name: str) -> bool:
    return _contains_any(name.lower().strip(), CASUAL_CHAINS)


def is_fine_dining_chain(name: str) -> bool:
    return _contains_any(name.lower().strip(), FINE_DINING_CHAINS)


def is_chain(name: str, chains: Iterable[str] | None = None) -> bool:
    """Return True when provider metadata or the name marks the venue as a chain."""
    if chains and any(chains):
        return True
    name_lower = name.lower().strip()
    if _contains_any(name_lower, CHAIN_KEYWORDS):
        return True
    if _STORE_NUMBER.search(name):
        return True
    return "Multiple Locations" in name


def chain_tier(name: str) -> ChainTier:
    """Classify a (known) chain by name; unrecognized chains are GENERIC."""
    if is_fast_food_chain(name):
        return ChainTier.FAST_FOOD
    if is_casual_chain(name):
        return ChainTier.CASUAL
    if is_fine_dining_chain(name):
        return ChainTier.FINE_DINING
    return ChainTier.GENERIC


def classify_chain(name: str, chains: Iterable[str] | None = None) -> ChainTier | None:
    """Return the penalty tier for a chain venue, or None for independents."""
    chains = list(chains or [])
    if not is_chain(name, chains):
        return None
    return chain_tier(name)


def chain_penalty(tier: ChainTier) -> float:
    return CHAIN_PENALTIES[tier]
