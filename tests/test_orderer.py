import pytest

from datenight.config.settings import RankingSettings
from datenight.ranking.orderer import (
    exclude_previously_shown,
    order,
    seeded_random,
    seeded_shuffle,
    sort_activities,
    sort_restaurants,
)


def test_restaurant_rating_band_falls_through_to_price(make_scored):
    pricier = make_scored(id="a", rating=4.5, price_level=3)
    higher_rated = make_scored(id="b", rating=4.6, price_level=1)
    best = make_scored(id="c", rating=4.95, price_level=1)

    ranked = sort_restaurants([pricier, higher_rated, best])

    # 4.95 is outside the band of both; 4.6 vs 4.5 is inside, so price wins.
    assert [v.id for v in ranked] == ["c", "a", "b"]


def test_restaurant_uniqueness_breaks_full_ties(make_scored):
    a = make_scored(id="a", rating=4.5, price_level=2, uniqueness_score=1.2)
    b = make_scored(id="b", rating=4.5, price_level=2, uniqueness_score=2.0)
    assert [v.id for v in sort_restaurants([a, b])] == ["b", "a"]


def test_activity_order_uses_date_tolerance_then_uniqueness_then_distance(make_scored):
    a = make_scored(id="a", rating=4.5, date_worthiness=40, uniqueness_score=1.0, distance=3.0)
    b = make_scored(id="b", rating=4.6, date_worthiness=43, uniqueness_score=1.0, distance=1.0)
    c = make_scored(id="c", rating=4.5, date_worthiness=60, uniqueness_score=1.0, distance=9.0)
    d = make_scored(id="d", rating=4.5, date_worthiness=41, uniqueness_score=2.0, distance=5.0)

    ranked = sort_activities([a, b, c, d])

    assert [v.id for v in ranked] == ["c", "d", "b", "a"]


def test_seeded_random_is_deterministic_fraction():
    values = [seeded_random(42, i) for i in range(20)]
    assert values == [seeded_random(42, i) for i in range(20)]
    assert all(0 <= v < 1 for v in values)


def test_seeded_shuffle_is_reproducible_permutation():
    items = list(range(30))
    first = seeded_shuffle(items, 7)

    assert first == seeded_shuffle(items, 7)
    assert sorted(first) == items
    assert first != seeded_shuffle(items, 8)
    assert items == list(range(30))


def test_surprise_truncates_and_wins_over_seed(make_scored):
    venues = [make_scored(id=str(i), rating=round(3.0 + i * 0.1, 1)) for i in range(20)]

    surprise = order(venues, "restaurant", seed=99, surprise_me=True)
    plain = order(venues, "restaurant")

    assert len(surprise) == 15
    assert surprise == plain[:15]


def test_seed_shuffles_sorted_order(make_scored):
    venues = [make_scored(id=str(i), rating=round(3.0 + i * 0.1, 1)) for i in range(10)]
    plain = order(venues, "restaurant")
    assert order(venues, "restaurant", seed=5) == seeded_shuffle(plain, 5)


def test_surprise_top_n_follows_settings(make_scored):
    venues = [make_scored(id=str(i)) for i in range(10)]
    assert len(order(venues, "activity", surprise_me=True, ranking=RankingSettings(surprise_top_n=3))) == 3


def test_exclude_previously_shown(make_scored):
    venues = [make_scored(id="a"), make_scored(id="b"), make_scored(id="c")]

    kept, dropped = exclude_previously_shown(venues, ["b", "zzz"])

    assert [v.id for v in kept] == ["a", "c"]
    assert dropped == 1
    assert exclude_previously_shown(venues, []) == (venues, 0)


@pytest.mark.parametrize("kind", ["restaurant", "activity"])
def test_order_empty(kind):
    assert order([], kind, seed=1) == []
