# src/datenight/providers/exclusions.py
"""
Shared exclusion rules for provider adapters.

Every adapter used to carry its own copy of "is this a grocery store?" lists.
They live here now, in one place:
- type exclusion lists (always / restaurant-only / activity-only)
- golf allow/deny lists (Topgolf yes, country clubs no)
- per-category venue filters for activity keywords (brewery, wine, art, ...)
- boba, catering, non-venue and retail patterns
- the upscale quality gate used by upscale/fine-dining restaurant searches
- the italian-vs-pizza rule

Adapters receive a `RestaurantExclusionRules` / `ActivityExclusionRules` instance
instead of importing individual helpers, so tests can swap the rules out.

Type labels passed in here are already normalized (lower snake_case).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from datenight.scoring.chains import is_casual_chain, is_fast_food_chain

logger = logging.getLogger(__name__)

# ===== type-based exclusions =====

EXCLUDED_ALWAYS_TYPES: frozenset[str] = frozenset(
    {
        "school", "university", "cemetery", "hospital", "doctor", "dentist",
        "pharmacy", "funeral_home", "church", "post_office", "courthouse",
        "police", "fire_station", "local_government_office", "embassy",
        "veterinary_care", "lawyer", "accounting", "insurance_agency",
    }
)

EXCLUDED_RESTAURANT_TYPES: frozenset[str] = frozenset(
    {
        "grocery_store", "supermarket", "convenience_store", "gas_station",
        "department_store", "shopping_mall", "drugstore", "pet_store",
        "hardware_store", "car_repair", "car_wash", "car_dealer",
        "liquor_store", "home_goods_store", "furniture_store",
    }
)

EXCLUDED_ACTIVITY_TYPES: frozenset[str] = frozenset(
    {
        "store", "department_store", "clothing_store", "electronics_store",
        "video_game_store", "furniture_store", "home_goods_store", "shopping_mall",
        "grocery_store", "supermarket", "convenience_store", "gas_station",
        "gym", "laundry", "parking", "atm", "bank", "liquor_store",
        "beauty_salon", "hair_care", "spa", "nail_salon", "barber_shop",
        # parks / nature
        "park", "state_park", "national_park", "dog_park", "playground",
        "campground", "nature_reserve", "hiking_area", "trail",
        # low-effort venues
        "cafe", "bakery",
    }
)

# Primary types that make a place a restaurant, never an activity.
EXCLUDED_RESTAURANT_PRIMARY_TYPES: tuple[str, ...] = (
    "restaurant", "fast_food_restaurant", "pizza_restaurant", "hamburger_restaurant",
    "sushi_restaurant", "seafood_restaurant", "chinese_restaurant", "japanese_restaurant",
    "korean_restaurant", "thai_restaurant", "vietnamese_restaurant", "mexican_restaurant",
    "indian_restaurant", "mediterranean_restaurant", "greek_restaurant", "italian_restaurant",
    "french_restaurant", "american_restaurant", "brunch_restaurant", "breakfast_restaurant",
    "cafe", "coffee_shop", "bakery", "meal_takeaway", "meal_delivery",
    "bar_and_grill",
)

RESTAURANT_TYPES: frozenset[str] = frozenset({"restaurant", "food", "meal_takeaway", "meal_delivery", "bakery"})
BAR_TYPES: frozenset[str] = frozenset({"bar", "night_club", "lounge"})

# ===== golf =====

ENTERTAINMENT_GOLF_ALLOWLIST: tuple[str, ...] = (
    "topgolf", "top golf", "driving range", "golf entertainment",
    "night golf", "glow golf", "mini golf", "putt putt", "miniature golf",
    "golf simulator", "indoor golf", "golf lounge", "puttshack",
)

TRADITIONAL_GOLF_EXCLUSIONS: tuple[str, ...] = (
    "golf course", "country club", "golf club", "golf resort",
    "links", "championship golf", "18 hole", "9 hole", "golf & country",
    "golf and country", "private club", "members only",
)

# ===== name patterns =====

BOBA_PATTERN = re.compile(
    r"\bboba\b|\bbubble\s?tea\b|\bmilk\s?tea\b|\btapioca\b|\btea\s?shop\b|\btea\s?house\b|\bteahouse\b|\bpearl\s?tea\b",
    re.IGNORECASE,
)
CATERING_PATTERN = re.compile(r"\bcatering\b|\bcaterer\b", re.IGNORECASE)
_DINE_IN_PATTERN = re.compile(r"\brestaurant\b|\bbistro\b|\bkitchen\b", re.IGNORECASE)
CAFE_NAME_PATTERN = re.compile(
    r"\bcafe\b|\bcafé\b|\bcoffee\b|\bespresso\b|\broasters?\b|\bcoffeehouse\b", re.IGNORECASE
)

# Production/management companies and caterers are not venues.
NON_VENUE_KEYWORDS: tuple[str, ...] = (
    "production", "productions", "entertainment inc", "entertainment llc",
    "entertainment group", "event management", "event planning", "promotions",
    "booking agency", "talent agency", "media group", "studios llc",
    "consulting", "marketing agency", "management company", "staffing",
    "catering", "caterers",
)

RESTAURANT_KEYWORDS: tuple[str, ...] = (
    "burger", "pizza", "taco", "sushi", "restaurant", "grill", "diner",
    "cafe", "bakery", "kitchen", "eatery", "food", "wings", "chicken",
    "bbq", "barbecue", "steakhouse", "fatburger", "in-n-out", "mcdonalds",
    "five guys", "shake shack", "wendys", "chick-fil-a", "popeyes",
    "del taco", "taco bell", "chipotle", "panda express", "wingstop",
)

# Names that mark a legitimate sit-down restaurant.
RESTAURANT_NAME_ALLOWLIST: tuple[str, ...] = (
    "restaurant", "bistro", "steakhouse", "trattoria",
    "brasserie", "eatery", "dining", "grill", "kitchen",
    "tavern", "pub", "diner", "bar & grill", "ristorante", "osteria",
)

RESTAURANT_NAME_EXCLUSIONS: tuple[str, ...] = (
    "whole foods", "trader joe", "7-eleven", "chevron",
    "shell", "arco", "grocery", "market", "walmart",
    "target", "costco", "safeway", "ralphs", "vons",
    "total wine", "bevmo", "liquor store",
)

# Words that keep a cafe-like name in the restaurant pool ("Cafe Bistro").
_CAFE_RESCUE_WORDS: tuple[str, ...] = ("bistro", "kitchen", "grill")

BAR_IDENTITY_KEYWORDS: tuple[str, ...] = (
    "bar", "pub", "lounge", "tavern", "speakeasy", "brewery", "brewpub",
    "taproom", "cocktail", "whiskey", "wine", "jazz",
)

PARK_NAME_PATTERNS: tuple[str, ...] = ("park", "nature reserve", "nature preserve", "wildlife refuge", "state beach")

# ===== coffee searches =====

COFFEE_KEEP_PATTERN = re.compile(
    r"coffee|café|cafe|espresso|roasters|roastery|java|brew|roast|grind|bean|drip|pour.?over|latte"
    r"|coffeehouse|coffee.?house|coffee.?spot|cold.?brew|cortado|cappuccino",
    re.IGNORECASE,
)
COFFEE_EXCLUDE_PATTERN = re.compile(
    r"boba|bubble|milk tea|tapioca|tea shop|tea house|teahouse|starbucks|dunkin|peet's|peets"
    r"|the coffee bean|coffee bean & tea|caribou|tim horton|tims|mccafe|mcdonalds|7-eleven",
    re.IGNORECASE,
)
COFFEE_EXCLUDE_FOOD_FOCUS = re.compile(
    r"sandwich|deli|bakery|bagel|pizza|burger|grill|bistro|kitchen|restaurant|diner|eatery|donut|doughnut"
    r"|panera|au bon pain|corner bakery|la boulange|einstein",
    re.IGNORECASE,
)

# ===== upscale gate =====

UPSCALE_NAME_SIGNALS = re.compile(
    r"steakhouse|steak\s*house|chophouse|chop\s*house|brasserie|ristorante|trattoria|osteria|enoteca|maison"
    r"|le\s+\w|la\s+\w|bistro|gastropub|supper\s*club|tasting\s*menu|omakase|chef.s\s*table|prix\s*fixe"
    r"|rooftop\s*dining|sky\s*dining|penthouse|grille|fine\s*dining|upscale|gourmet|signature\s*kitchen"
    r"|prime\s*steak|prime\s*chop|tavern\s*\d|oyster\s*bar|raw\s*bar|seafood\s*bar|izakaya|kaiseki|fondue"
    r"|raclette|wine\s*bar|cocktail\s*lounge|members?\s*club",
    re.IGNORECASE,
)
UPSCALE_CHAIN_NAMES = re.compile(
    r"mastro|ruth.?s\s*chris|capital\s*grille|morton.?s|fleming.?s|eddie\s*v|del\s*frisco|boa\s*steakhouse"
    r"|nobu|spago|craft|melisse|providence|republique|n/naka|vespertine|hayato|jordon|the\s*palm"
    r"|smith\s*&\s*wollensky|fogo\s*de\s*chao|las\s*brisas|water\s*grill|the\s*ivy|bottega\s*louie|perino"
    r"|perino.?s|peppone|four\s*seasons\s*restaurant|hotel\s*restaurant",
    re.IGNORECASE,
)
NON_UPSCALE_SIGNALS = re.compile(
    r"boba|bubble\s*tea|milk\s*tea|tapioca|tea\s*shop|tea\s*house|teahouse|pearl\s*tea|catering|caterers"
    r"|food\s*truck|buffet|all.?you.?can.?eat|smorgasbord|hot\s*dog|hot\s*dogs|deli\s*mart|deli\s*shop"
    r"|fast\s*food|quick\s*bites|drive.?thru|drive.?through|wing\s*stop|wingstop|taco\s*bell|mcdonald"
    r"|burger\s*king|subway\s*sandwich|pizza\s*hut|domino.?s|kfc|chipotle|panda\s*express|in.?n.?out"
    r"|five\s*guys|shake\s*shack|chick.?fil|popeye|el\s*pollo|peet.?s\s*coffee|dunkin|starbucks|grocery"
    r"|convenience|gas\s*station|market|bodega",
    re.IGNORECASE,
)
UPSCALE_EDITORIAL_KEYWORDS = re.compile(
    r"upscale|elegant|refined|fine.?dining|sophisticated|luxurious|luxury|high.?end|award.?winning|michelin"
    r"|celebrity|exclusive|intimate|curated|artisanal|craft\s+cocktail|world.?class|acclaimed|renowned"
    r"|premier|signature|tasting.?menu|prix.?fixe|omakase",
    re.IGNORECASE,
)
_FINE_DINING_LABEL = re.compile(r"fine.?dining", re.IGNORECASE)

UPSCALE_RESERVABLE_MIN_RATING = 4.3
UPSCALE_RESERVABLE_MIN_REVIEWS = 100

# ===== italian vs pizza =====

PIZZA_KEYWORDS: tuple[str, ...] = (
    "pizza", "pizzeria", "domino's", "papa john", "little caesars",
    "round table", "pizza hut", "sbarro", "pieology", "blaze pizza",
    "mod pizza", "slice", "pie", "napoletana",
)
AUTHENTIC_ITALIAN_KEYWORDS: tuple[str, ...] = (
    "trattoria", "ristorante", "osteria", "enoteca", "italian restaurant",
    "italian bistro", "italian kitchen", "tuscan", "northern italian",
    "southern italian", "pasta", "risotto", "osso buco", "carbonara",
)

# ===== retail (Foursquare) =====

FOURSQUARE_RETAIL_CATEGORY_PREFIXES: tuple[str, ...] = ("170", "171", "172")

RETAIL_NAME_EXCLUSIONS: tuple[str, ...] = (
    # grocery
    "trader joe", "whole foods", "vons", "ralphs", "safeway", "kroger",
    "albertsons", "publix", "aldi", "lidl", "sprouts", "food 4 less",
    "smart & final", "grocery outlet", "hmart", "99 ranch", "gelson",
    # big box
    "costco", "walmart", "target", "sams club", "sam's club", "bjs wholesale",
    # discount
    "99 cent", "dollar tree", "dollar general", "family dollar", "five below",
    # drugstores
    "cvs", "walgreens", "rite aid",
    # home improvement
    "home depot", "lowes", "lowe's", "ace hardware",
    # beauty
    "sephora", "ulta beauty", "mac cosmetics",
    # other retail
    "best buy", "staples", "office depot", "petco", "petsmart", "nordstrom",
    "bloomingdale", "macy's", "jcpenney", "kohl's", "ross dress", "marshalls", "t.j. maxx",
)


@dataclass(frozen=True)
class VenueFilter:
    """Allowlist wins; otherwise excluded types or name keywords reject the venue."""

    allowlist: tuple[str, ...]
    exclude_types: tuple[str, ...] = ()
    exclude_keywords: tuple[str, ...] = ()

    def excludes(self, name_lower: str, types: Sequence[str]) -> bool:
        if any(venue in name_lower for venue in self.allowlist):
            return False
        if any(t in self.exclude_types for t in types):
            return True
        return any(kw in name_lower for kw in self.exclude_keywords)


VENUE_FILTERS: dict[str, VenueFilter] = {
    "brewery": VenueFilter(
        allowlist=("brewpub", "craft brewery", "microbrewery", "taproom", "beer garden", "brewing company", "brewery"),
        exclude_types=("liquor_store", "convenience_store", "supermarket", "shopping_mall", "department_store"),
        exclude_keywords=("beer store", "total wine", "bevmo", "liquor store", "bottle shop", "beverage store"),
    ),
    "wine": VenueFilter(
        allowlist=(
            "winery", "vineyard", "wine cellar", "tasting room", "wine tasting",
            "estate winery", "wine cave", "wine estate", "cellar door",
        ),
        exclude_types=(
            "liquor_store", "convenience_store", "supermarket", "shopping_mall", "department_store",
            "beauty_salon", "hair_care", "spa", "nail_salon", "barber_shop",
        ),
        exclude_keywords=("total wine", "bevmo", "liquor store", "bottle shop", "spirits store", "& more", "wine + spirits"),
    ),
    "art": VenueFilter(
        allowlist=(
            "art gallery", "contemporary gallery", "fine art gallery", "sculpture garden",
            "exhibition space", "art museum", "gallery", "art center",
        ),
        exclude_types=("furniture_store", "home_goods_store", "store", "shopping_mall", "department_store"),
        exclude_keywords=("furniture", "home goods", "art supplies", "michaels", "hobby lobby", "craft store", "art supply"),
    ),
    "golf": VenueFilter(
        allowlist=(
            "topgolf", "top golf", "driving range", "mini golf", "putt-putt", "miniature golf",
            "golf simulator", "indoor golf", "golf lounge", "puttshack",
        ),
        exclude_types=("sporting_goods_store", "store", "shopping_mall", "department_store"),
        exclude_keywords=(
            "golf shop", "golf store", "sporting goods", "dick's sporting", "golf galaxy",
            "pga superstore", "golf course", "country club", "golf club", "golf resort",
        ),
    ),
    "painting": VenueFilter(
        allowlist=(
            "paint and sip", "painting class", "art studio", "wine and paint", "sip and paint", "paint night",
            "painting with a twist", "pinot's palette", "canvas and cocktails", "paint bar",
        ),
        exclude_types=("store", "craft_store", "home_goods_store", "shopping_mall"),
        exclude_keywords=("michaels", "hobby lobby", "art supplies", "craft store", "art supply", "paint store"),
    ),
    "hookah": VenueFilter(
        allowlist=("hookah lounge", "shisha lounge", "hookah bar", "shisha bar", "hookah cafe", "hookah spot"),
        exclude_types=("store", "shopping_mall", "convenience_store"),
        exclude_keywords=("smoke shop", "tobacco shop", "vape shop", "tobacco store", "head shop"),
    ),
    "theater": VenueFilter(
        allowlist=(
            "live theater", "playhouse", "performing arts", "repertory", "stage theater",
            "broadway", "community theater", "theater company", "theatre",
        ),
        exclude_types=("movie_theater",),
        exclude_keywords=("cinema", "movie theater", "amc", "regal", "cinemark", "movies", "imax"),
    ),
    "comedy": VenueFilter(
        allowlist=("comedy club", "comedy theater", "improv", "stand-up comedy", "laugh factory", "comedy store", "improv comedy"),
    ),
}

# Keyword fragments -> venue filter; first match wins.
_KEYWORD_FILTER_ROUTES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("brewery", "brewpub", "beer"), "brewery"),
    (("wine", "bar", "lounge", "cocktail"), "wine"),
    (("art", "gallery", "museum"), "art"),
    (("paint", "painting"), "painting"),
    (("hookah", "shisha"), "hookah"),
    (("theater", "theatre", "play", "musical"), "theater"),
    (("comedy",), "comedy"),
)


def venue_filter_for_keyword(keyword: str) -> VenueFilter | None:
    keyword = keyword.lower()
    for fragments, key in _KEYWORD_FILTER_ROUTES:
        if any(f in keyword for f in fragments):
            return VENUE_FILTERS[key]
    return None


# ===== predicates =====


def has_excluded_type(types: Iterable[str], excluded: Iterable[str]) -> bool:
    excluded = set(excluded)
    return any(t.lower() in excluded for t in types)


def is_boba_venue(name: str) -> bool:
    return bool(BOBA_PATTERN.search(name))


def is_non_venue_business(name: str) -> bool:
    name_lower = name.lower()
    return any(kw in name_lower for kw in NON_VENUE_KEYWORDS)


def is_restaurant_by_keyword(name: str) -> bool:
    name_lower = name.lower()
    return any(kw in name_lower for kw in RESTAURANT_KEYWORDS)


def is_primarily_restaurant(types: Iterable[str]) -> bool:
    """Restaurant types present and no bar type."""
    lowered = {t.lower() for t in types}
    return bool(lowered & RESTAURANT_TYPES) and not (lowered & BAR_TYPES)


def is_entertainment_golf(name: str) -> bool:
    name_lower = name.lower()
    return any(kw in name_lower for kw in ENTERTAINMENT_GOLF_ALLOWLIST)


def is_traditional_golf(name: str, categories: Iterable[str] = ()) -> bool:
    name_lower = name.lower()
    category_names = " ".join(categories).lower().replace("_", " ")
    if any(kw in name_lower for kw in TRADITIONAL_GOLF_EXCLUSIONS):
        return True
    return "golf course" in category_names or "country club" in category_names


def should_exclude_as_traditional_golf(name: str, categories: Iterable[str] = ()) -> bool:
    if is_entertainment_golf(name):
        return False
    return is_traditional_golf(name, categories)


def is_pizza_place(name: str) -> bool:
    name_lower = name.lower()
    return any(kw in name_lower for kw in PIZZA_KEYWORDS)


def is_authentic_italian(name: str) -> bool:
    name_lower = name.lower()
    return any(kw in name_lower for kw in AUTHENTIC_ITALIAN_KEYWORDS)


def is_generic_park_name(name: str) -> bool:
    """Names like "Lincoln Park" or "Crystal Cove State Beach" (theme/amusement parks excluded)."""
    name_lower = name.lower()
    if "theme park" in name_lower or "amusement" in name_lower:
        return False
    return any(name_lower.endswith(f" {p}") or name_lower == p for p in PARK_NAME_PATTERNS)


def is_retail_place(category_ids: Iterable[str], name: str) -> bool:
    """Retail/grocery by Foursquare category id prefix or by name."""
    for category_id in category_ids:
        if category_id and category_id.startswith(FOURSQUARE_RETAIL_CATEGORY_PREFIXES):
            return True
    name_lower = name.lower()
    return any(kw in name_lower for kw in RETAIL_NAME_EXCLUSIONS)


def passes_upscale_quality_gate(
    name: str,
    price_level: int | None,
    *,
    editorial_summary: str | None = None,
    reservable: bool | None = None,
    primary_type_display_name: str | None = None,
    rating: float | None = None,
    review_count: int | None = None,
) -> bool:
    """Decide whether a venue belongs in an upscale/fine-dining result set.

    Negative signals fail fast; otherwise the venue needs at least one positive
    signal (price, editorial summary, known upscale name, or a reservable,
    well-reviewed listing). No signal means reject.
    """
    if NON_UPSCALE_SIGNALS.search(name):
        return False
    if price_level is not None:
        return price_level >= 3
    if primary_type_display_name and _FINE_DINING_LABEL.search(primary_type_display_name):
        return True
    if editorial_summary and UPSCALE_EDITORIAL_KEYWORDS.search(editorial_summary):
        return True
    if UPSCALE_CHAIN_NAMES.search(name):
        return True
    if UPSCALE_NAME_SIGNALS.search(name):
        return True
    return (
        reservable is True
        and rating is not None
        and rating >= UPSCALE_RESERVABLE_MIN_RATING
        and review_count is not None
        and review_count >= UPSCALE_RESERVABLE_MIN_REVIEWS
    )


def is_coffee_shop_name(name: str) -> bool:
    """Strict coffee-search check: coffee-ish name, no chain/boba/food focus."""
    if COFFEE_EXCLUDE_PATTERN.search(name):
        return False
    if COFFEE_EXCLUDE_FOOD_FOCUS.search(name):
        return False
    return bool(COFFEE_KEEP_PATTERN.search(name))


def _has_cafe_rescue_word(name_lower: str) -> bool:
    return any(w in name_lower for w in _CAFE_RESCUE_WORDS)


def is_pure_coffee_venue(types: Sequence[str], name: str) -> bool:
    """A cafe-typed, coffee-named place with no restaurant type (dropped from dinner searches)."""
    if "restaurant" in types:
        return False
    if "cafe" in types and COFFEE_KEEP_PATTERN.search(name):
        return not _has_cafe_rescue_word(name.lower())
    return False


class RestaurantExclusionRules:
    """Decides which provider places never appear as restaurants."""

    def should_exclude(
        self,
        types: Sequence[str],
        name: str,
        *,
        cuisine: str | None = None,
        coffee_search: bool = False,
    ) -> bool:
        name_lower = name.lower()

        if cuisine and cuisine.lower() == "italian":
            if is_pizza_place(name_lower) and not is_authentic_italian(name_lower):
                logger.debug("Excluding %r: pizza place in italian search", name)
                return True
            if is_authentic_italian(name_lower):
                return False

        if any(kw in name_lower for kw in RESTAURANT_NAME_ALLOWLIST):
            return False

        if not coffee_search:
            if CAFE_NAME_PATTERN.search(name_lower) and not _has_cafe_rescue_word(name_lower):
                logger.debug("Excluding %r: cafe in non-coffee search", name)
                return True
            has_cafe_type = "cafe" in types or "coffee_shop" in types
            if has_cafe_type and "restaurant" not in types and not _has_cafe_rescue_word(name_lower):
                logger.debug("Excluding %r: cafe type without restaurant type", name)
                return True

        if is_boba_venue(name_lower):
            logger.debug("Excluding %r: boba/tea venue", name)
            return True

        if CATERING_PATTERN.search(name_lower) and not _DINE_IN_PATTERN.search(name_lower):
            logger.debug("Excluding %r: catering company", name)
            return True

        if has_excluded_type(types, EXCLUDED_ALWAYS_TYPES | EXCLUDED_RESTAURANT_TYPES):
            return True

        return any(kw in name_lower for kw in RESTAURANT_NAME_EXCLUSIONS)

    def is_retail(self, category_ids: Iterable[str], name: str) -> bool:
        return is_retail_place(category_ids, name)


class ActivityExclusionRules:
    """Decides which provider places never appear as activities for a keyword."""

    def should_exclude(self, types: Sequence[str], keyword: str, name: str) -> bool:
        keyword = keyword.lower()
        name_lower = name.lower()

        if is_non_venue_business(name_lower):
            logger.debug("Excluding %r: non-venue business", name)
            return True

        if is_generic_park_name(name_lower):
            logger.debug("Excluding %r: park/nature area", name)
            return True

        if has_excluded_type(types, EXCLUDED_ALWAYS_TYPES | EXCLUDED_ACTIVITY_TYPES):
            logger.debug("Excluding %r: excluded type", name)
            return True

        # Yard House and friends have a "bar" type but are restaurants.
        if is_casual_chain(name) or is_fast_food_chain(name):
            logger.debug("Excluding %r: casual/fast food chain", name)
            return True

        if is_primarily_restaurant(types):
            logger.debug("Excluding %r: primarily a restaurant", name)
            return True

        bar_primary = "bar" in types or "night_club" in types
        if is_restaurant_by_keyword(name_lower) and not bar_primary:
            logger.debug("Excluding %r: restaurant by name", name)
            return True

        if "restaurant" in types and bar_primary:
            if not any(kw in name_lower for kw in BAR_IDENTITY_KEYWORDS):
                logger.debug("Excluding %r: restaurant+bar hybrid", name)
                return True

        if "golf" in keyword:
            if should_exclude_as_traditional_golf(name_lower, types):
                logger.debug("Excluding %r: traditional golf", name)
                return True
            if is_entertainment_golf(name_lower):
                return False

        venue_filter = venue_filter_for_keyword(keyword)
        if venue_filter is None:
            return False
        return venue_filter.excludes(name_lower, types)

    def is_retail(self, category_ids: Iterable[str], name: str) -> bool:
        return is_retail_place(category_ids, name)

    def is_traditional_golf(self, name: str, categories: Iterable[str] = ()) -> bool:
        return should_exclude_as_traditional_golf(name, categories)
