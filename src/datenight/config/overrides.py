from __future__ import annotations


# Overrides arrive as JSON payloads, so typing stays loose here; validation happens below.
from typing import Any, Mapping

from datenight.config.settings import Settings

"""
Per-request settings overrides (safe subset).

A search request may carry `settings_overrides` to tune a few knobs for a single
run (quality floors, ranking bands, search area buffers). This module:
- checks the payload against an allowlist tree,
- deep-merges the surviving subset onto a dump of the current settings,
- re-validates with Pydantic so types and ranges stay correct.

Provider credentials, URLs and feature flags are never overridable per request.
"""

# `True` opens a whole subtree; a nested dict lists the only keys allowed below it.
ALLOWED_SETTINGS_OVERRIDES_TREE: dict[str, Any] = {
    "quality": True,
    "ranking": {
        "restaurant_rating_band": True,
        "activity_rating_band": True,
        "date_worthiness_tolerance": True,
        "surprise_top_n": True,
    },
    "search_area": True,
}


def _dotted(path: tuple[str, ...]) -> str:
    return ".".join(path)


def _merge_into(target: dict[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively overlay `patch` onto a copy of `target`."""
    out = dict(target)
    for key, value in patch.items():
        current = out.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            out[key] = _merge_into(dict(current), value)
        else:
            out[key] = value
    return out


def _allowed_subset(
    overrides: Mapping[str, Any],
    tree: Mapping[str, Any],
    path: tuple[str, ...] = (),
) -> dict[str, Any]:
    subset: dict[str, Any] = {}
    for key, value in overrides.items():
        here = (*path, key)
        rule = tree.get(key)
        if rule is None:
            raise ValueError(f"settings_overrides contains a disallowed key: '{_dotted(here)}'")
        if rule is True:
            subset[key] = value
        elif isinstance(value, Mapping):
            subset[key] = _allowed_subset(value, rule, here)
        else:
            raise ValueError(f"settings_overrides key '{_dotted(here)}' must be a mapping")
    return subset


def apply_settings_overrides(settings: Settings, overrides: Mapping[str, Any] | None) -> Settings:
    """Return `settings` with the allowlisted subset of `overrides` applied.

    The input model is never mutated; a new `Settings` is returned when anything changes.

    Raises:
        ValueError: A key outside the allowlist, a restricted subtree that is not a
            mapping, or a merged payload that fails validation.
    """
    if not overrides:
        return settings

    subset = _allowed_subset(overrides, ALLOWED_SETTINGS_OVERRIDES_TREE)
    return Settings.model_validate(_merge_into(settings.model_dump(mode="python"), subset))
