from __future__ import annotations

# Overrides are pure (no network), so they are tested directly.
import pytest

# The cached loader gives us the real default config structure.
from datenight.config.settings import get_settings

from datenight.config.overrides import apply_settings_overrides


def test_apply_settings_overrides_returns_same_object_when_none():
    settings = get_settings()

    # No overrides is a no-op: the same object comes back.
    assert apply_settings_overrides(settings, None) is settings
    assert apply_settings_overrides(settings, {}) is settings


def test_apply_settings_overrides_can_override_allowed_numeric_knobs():
    # Do not mutate the baseline; it is shared via lru_cache.
    settings = get_settings()

    overrides = {
        "quality": {"min_rating_restaurant": 4.2},
        "ranking": {"surprise_top_n": 5},
        "search_area": {"distance_buffer": 2.0},
    }
    out = apply_settings_overrides(settings, overrides)

    assert out.quality.min_rating_restaurant == 4.2
    assert out.ranking.surprise_top_n == 5
    assert out.search_area.distance_buffer == 2.0

    # Untouched siblings keep their values.
    assert out.quality.min_review_count == settings.quality.min_review_count

    # The shared settings stay unchanged (no cross-request leakage).
    assert settings.ranking.surprise_top_n != 5


def test_apply_settings_overrides_rejects_disallowed_keys_with_clear_path():
    settings = get_settings()

    # Credentials are never overridable per request.
    with pytest.raises(ValueError, match=r"providers"):
        apply_settings_overrides(settings, {"providers": {"google": {"api_key": "stolen"}}})

    # Restricted subtree: only the listed ranking knobs are allowed.
    with pytest.raises(ValueError, match=r"ranking\.max_excluded_place_ids"):
        apply_settings_overrides(settings, {"ranking": {"max_excluded_place_ids": 10_000}})


def test_apply_settings_overrides_rejects_wrong_value_shapes_for_restricted_subtrees():
    settings = get_settings()

    with pytest.raises(ValueError, match=r"settings_overrides key 'ranking' must be a mapping"):
        apply_settings_overrides(settings, {"ranking": 1})


def test_apply_settings_overrides_revalidates_ranges():
    settings = get_settings()

    # Pydantic range checks still apply after the merge.
    with pytest.raises(ValueError):
        apply_settings_overrides(settings, {"quality": {"min_rating_restaurant": 9}})
