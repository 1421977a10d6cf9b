from datenight.scoring.date_worthiness import (
    ACTIVITY_FALLBACKS,
    OUTDOOR_EXPAND_KEYWORDS,
    date_score,
    fallback_keywords,
    is_generic_park,
    results_are_weak,
)


def test_date_score_rewards_date_signals():
    # 20 (rating) + 10 (reviews) + 20 (rooftop, jazz) + 5 (lounge)
    assert date_score("Rooftop Jazz Lounge", 4.6, 600) == 55


def test_date_score_caps_high_value_bonus():
    name = "Rooftop Speakeasy Hidden Secret Romantic"
    assert date_score(name) == 30


def test_date_score_is_floored_at_zero():
    assert date_score("Dog Park", 4.8, 300) == 0


def test_date_score_penalizes_low_value_words():
    # 20 + 10 + 5 (bar) - 20 (sports bar, casual)
    assert date_score("Casual Sports Bar", 4.5, 500) == 15


def test_generic_park_detection():
    assert is_generic_park("Central City Park")
    assert is_generic_park("Lincoln Park", ["park"])
    assert not is_generic_park("Botanical Garden Park")
    assert not is_generic_park("Knott's Berry Farm")


def test_results_are_weak(make_venue):
    strong = [make_venue(id=str(i), name=f"Gallery {i}", rating=4.5) for i in range(3)]
    assert not results_are_weak(strong, "museum")
    assert results_are_weak(strong[:2], "museum")

    mediocre = [make_venue(id=str(i), name=f"Gallery {i}", rating=3.6) for i in range(3)]
    assert results_are_weak(mediocre, "museum")

    parks = [make_venue(id=str(i), name=f"Community Park {i}", rating=4.6) for i in range(3)]
    assert results_are_weak(parks, "fun outdoor")


def test_fallback_keywords():
    assert fallback_keywords("speakeasy", False) == []
    assert fallback_keywords("", True) == []
    assert fallback_keywords("Outdoor fun", True) == list(OUTDOOR_EXPAND_KEYWORDS)
    assert fallback_keywords("Speakeasy", True) == list(ACTIVITY_FALLBACKS["speakeasy"])
    assert fallback_keywords("secret speakeasy", True) == list(ACTIVITY_FALLBACKS["speakeasy"])
    assert fallback_keywords("bowling", True) == []
