"""
Inbound payload validation.

API and CLI payloads arrive as plain dicts (camelCase from the web client,
snake_case from Python callers). This module turns them into a `SearchRequest`
and reports every problem as `InvalidRequest`, so callers handle a single
exception type.
"""

from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import ValidationError

from datenight.core.errors import InvalidRequest
from datenight.domain.models import SearchRequest

SearchKind = Literal["restaurant", "activity"]

MAX_EXCLUDED_PLACE_IDS = 100

_REQUIRED_TEXT_FIELD = {"restaurant": "cuisine", "activity": "keyword"}


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def parse_search_request(
    payload: Mapping[str, Any],
    kind: SearchKind,
    *,
    max_excluded_place_ids: int = MAX_EXCLUDED_PLACE_IDS,
) -> SearchRequest:
    """Validate `payload` for a restaurant or activity search.

    Raises:
        InvalidRequest: Missing/invalid coordinates or radius, a missing
            cuisine (restaurants) or keyword (activities), or a bad novelty mode.
    """
    if not isinstance(payload, Mapping):
        raise InvalidRequest("Request body must be a JSON object")

    data = dict(payload)
    exclude = data.get("excludePlaceIds", data.get("exclude_place_ids"))
    if exclude is not None:
        if not isinstance(exclude, (list, tuple)):
            raise InvalidRequest("excludePlaceIds must be a list of place ids")
        # Oversized lists are truncated, not rejected.
        data.pop("exclude_place_ids", None)
        data["excludePlaceIds"] = [str(x) for x in exclude][:max_excluded_place_ids]

    try:
        request = SearchRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidRequest(_format_validation_error(e)) from e

    required = _REQUIRED_TEXT_FIELD[kind]
    if not getattr(request, required):
        raise InvalidRequest(f"Missing required parameter: {required}")
    return request
