import random

import pytest

from datenight.scoring.chains import ChainTier, chain_penalty, classify_chain, is_chain
from datenight.scoring.explain import one_line_summary
from datenight.scoring.uniqueness import (
    is_hidden_gem,
    is_local_favorite,
    is_new_discovery,
    review_count_factor,
    score_venue,
    uniqueness_score,
)


@pytest.mark.parametrize(
    ("reviews", "factor"),
    [(5, 0.5), (20, 0.8), (49, 0.8), (50, 1.8), (300, 1.8), (301, 1.3), (800, 1.3), (2000, 1.0), (2001, 0.6)],
)
def test_review_count_factor_boundaries(reviews, factor):
    assert review_count_factor(reviews) == factor


def test_review_sweet_spot_beats_both_extremes(make_venue):
    sweet = uniqueness_score(make_venue(name="Little Osteria", rating=4.5, review_count=100))
    mainstream = uniqueness_score(make_venue(name="Big Hall", rating=4.5, review_count=2500))
    unknown = uniqueness_score(make_venue(name="New Spot", rating=4.5, review_count=10))

    assert sweet == pytest.approx(2.16)
    assert mainstream == pytest.approx(0.72)
    assert unknown == pytest.approx(0.6)
    assert sweet > mainstream and sweet > unknown


def test_fast_food_chain_is_clamped_to_floor(make_venue):
    score = uniqueness_score(make_venue(name="McDonald's", rating=4.0, review_count=500))
    assert score == pytest.approx(0.1)


def test_unique_type_boost(make_venue):
    plain = uniqueness_score(make_venue(name="Corner Spot", rating=4.0, review_count=100))
    wine = uniqueness_score(make_venue(name="Corner Spot", rating=4.0, review_count=100, types=["Wine Bar"]))
    assert wine == pytest.approx(plain * 1.3)


def test_venue_without_provider_data_is_neutral_unless_chain(make_venue):
    independent = make_venue(name="Tiny Bistro", rating=0, review_count=0, has_premium_data=False)
    casual = make_venue(name="Olive Garden", rating=0, review_count=0, has_premium_data=False)
    tagged = make_venue(name="Somewhere", rating=0, review_count=0, has_premium_data=False, chains=["Acme"])

    assert uniqueness_score(independent) == 1.0
    assert uniqueness_score(casual) == pytest.approx(0.15)
    assert uniqueness_score(tagged) == pytest.approx(0.3)
    assert not is_hidden_gem(independent)
    assert not is_new_discovery(independent)
    assert not is_local_favorite(independent)


def test_hidden_gems_mode_raises_to_power(make_venue):
    venue = make_venue(name="Quiet Place", rating=4.0, review_count=30)
    assert uniqueness_score(venue, "hidden_gems") == pytest.approx(0.8**1.5)


def test_popular_mode_boosts_big_chains(make_venue):
    venue = make_venue(name="Olive Garden", rating=4.0, review_count=1500)
    # 1.0 (reviews) * 0.15 (casual chain) * 1.0 (rating) * 1.5 * 3.0
    assert uniqueness_score(venue, "popular") == pytest.approx(0.675)


def test_score_is_clamped_to_ceiling(make_venue):
    venue = make_venue(name="Hidden Speakeasy", rating=4.8, review_count=150, types=["speakeasy"])
    assert uniqueness_score(venue, "hidden_gems") == 3.0


def test_badges(make_venue):
    gem = make_venue(name="Little Osteria", rating=4.6, review_count=200)
    assert is_hidden_gem(gem)
    assert is_local_favorite(gem)
    assert not is_new_discovery(gem)

    chain = make_venue(name="Cheesecake Factory", rating=4.6, review_count=200)
    assert not is_hidden_gem(chain)

    fresh = make_venue(name="Brand New", rating=4.1, review_count=40)
    assert is_new_discovery(fresh)


def test_chain_detection_by_metadata_and_name():
    assert is_chain("Anything", ["Some Chain"])
    assert is_chain("Joe's Pizza #12")
    assert is_chain("Pizza Place 7")
    assert is_chain("Burgers - Multiple Locations")
    assert not is_chain("Joe's Pizza")

    assert classify_chain("Ruth's Chris Steak House") == ChainTier.FINE_DINING
    assert classify_chain("Taco Bell") == ChainTier.FAST_FOOD
    assert classify_chain("Joe's Pizza #12") == ChainTier.GENERIC
    assert classify_chain("Joe's Pizza") is None
    assert chain_penalty(ChainTier.FINE_DINING) == 0.85


def test_score_venue_hides_internal_fields(make_venue):
    scored = score_venue(make_venue(types=["italian"], chains=["x"], photo_count=3), "balanced", date_worthiness=12)
    dumped = scored.model_dump(by_alias=True)

    assert "uniquenessScore" in dumped
    assert dumped["dateWorthiness"] == 12
    for hidden in ("types", "chains", "hasPremiumData", "photoCount"):
        assert hidden not in dumped
    assert scored.types == ["italian"]


def test_one_line_summary(make_venue):
    scored = score_venue(make_venue(name="Little Osteria", rating=4.6, review_count=200, price_level=3, distance=1.25))
    line = one_line_summary(scored)
    assert "rating=4.6 (200)" in line
    assert "$$$" in line
    assert "1.2mi" in line or "1.3mi" in line
    assert "hidden-gem" in line


@pytest.mark.parametrize("name", ["Subway", "McDonald's", "Taco Bell #42"])
def test_fast_food_without_provider_data_stays_in_range(make_venue, name):
    venue = make_venue(name=name, rating=0, review_count=0, has_premium_data=False)

    assert uniqueness_score(venue) == pytest.approx(0.1)
    assert score_venue(venue).uniqueness_score == pytest.approx(0.1)


def test_score_stays_clamped_across_random_inputs(make_venue):
    rng = random.Random(20240214)
    names = ["Little Osteria", "McDonald's", "Olive Garden", "Morton's The Steakhouse", "Cafe #12", "Harbor Bistro"]
    type_sets = [[], ["wine_bar"], ["restaurant"], ["speakeasy", "jazz_club"]]
    modes = ["popular", "balanced", "hidden_gems"]

    for _ in range(500):
        venue = make_venue(
            name=rng.choice(names),
            rating=round(rng.uniform(0, 5), 1),
            review_count=rng.choice([0, 5, 19, 20, 49, 50, 300, 301, 800, 1500, 2001, 50_000]),
            chains=rng.choice([[], ["Acme"]]),
            types=rng.choice(type_sets),
            has_premium_data=rng.random() < 0.7,
        )
        mode = rng.choice(modes)
        score = uniqueness_score(venue, mode)
        assert 0.1 <= score <= 3.0, (venue, mode, score)
        assert score_venue(venue, mode).uniqueness_score == score
