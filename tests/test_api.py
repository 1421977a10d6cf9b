from starlette.testclient import TestClient

import datenight.api.routes as routes
from datenight.api.app import app
from datenight.domain.models import Venue


class _StubProvider:
    def __init__(self, name, venues):
        self.name = name
        self.is_enabled = True
        self._venues = venues

    async def search(self, request):
        return list(self._venues)


def _venue(id, name, lat, category="restaurant", **kw):
    return Venue(id=id, name=name, rating=4.6, review_count=250, lat=lat, lng=-117.83, category=category, source="stub", **kw)


def _stub_providers(monkeypatch):
    restaurants = [_venue("r1", "Harbor Bistro", 33.69), _venue("r2", "Sakura Sushi", 33.70)]
    activities = [_venue("a1", "Rooftop Jazz Lounge", 33.69, category="activity")]
    monkeypatch.setattr(routes, "_restaurant_providers", lambda: [_StubProvider("google", restaurants)])
    monkeypatch.setattr(routes, "_activity_providers", lambda: [_StubProvider("google", activities)])


def test_restaurant_search_returns_ranked_items(monkeypatch):
    # Patch the cached provider factories so API tests stay offline.
    _stub_providers(monkeypatch)

    payload = {"lat": 33.6846, "lng": -117.8265, "radiusMiles": 5, "cuisine": "italian", "excludePlaceIds": ["r2"]}
    with TestClient(app) as c:
        resp = c.post("/api/restaurants/search", json=payload)

    assert resp.status_code == 200
    data = resp.json()
    assert [item["id"] for item in data["items"]] == ["r1"]
    assert data["providerStats"] == {"google": 2}
    assert data["nextPageToken"] is None
    assert data["meta"]["excludedCountsByReason"] == {"previouslyShown": 1}
    assert data["meta"]["providers"] == {}
    assert data["meta"]["providerSummary"] == {"live": [], "disabled": [], "failed": {}, "venues": 0}
    assert "uniquenessScore" in data["items"][0]
    assert "hasPremiumData" not in data["items"][0]


def test_activity_search_reports_fallback_keywords(monkeypatch):
    _stub_providers(monkeypatch)

    payload = {"lat": 33.6846, "lng": -117.8265, "radiusMiles": 5, "keyword": "speakeasy"}
    with TestClient(app) as c:
        resp = c.post("/api/activities/search", json=payload)

    assert resp.status_code == 200
    data = resp.json()
    # 20 (rating) + 7 (reviews) + 20 (rooftop, jazz) + 5 (lounge)
    assert data["items"][0]["dateWorthiness"] == 52
    assert "cocktail lounge" in data["meta"]["fallbackKeywords"]


def test_missing_required_parameter_is_a_400(monkeypatch):
    _stub_providers(monkeypatch)

    with TestClient(app) as c:
        resp = c.post("/api/restaurants/search", json={"lat": 33.68, "lng": -117.82, "radiusMiles": 5})
        bad_radius = c.post(
            "/api/activities/search", json={"lat": 33.68, "lng": -117.82, "radiusMiles": 0, "keyword": "bowling"}
        )

    assert resp.status_code == 400
    assert resp.json()["detail"] == {"code": "VALIDATION_ERROR", "message": "Missing required parameter: cuisine"}
    assert bad_radius.status_code == 400
    assert "radiusMiles" in bad_radius.json()["detail"]["message"]


def test_disallowed_settings_override_is_a_400():
    payload = {
        "lat": 33.68,
        "lng": -117.82,
        "radiusMiles": 5,
        "cuisine": "thai",
        "settingsOverrides": {"providers": {"google": {"api_key": "x"}}},
    }
    with TestClient(app) as c:
        resp = c.post("/api/restaurants/search", json=payload)

    assert resp.status_code == 400
    assert "disallowed key" in resp.json()["detail"]["message"]


def test_unexpected_errors_are_a_500(monkeypatch):
    async def boom(*args, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(routes, "search_restaurants", boom)
    _stub_providers(monkeypatch)

    with TestClient(app) as c:
        resp = c.post("/api/restaurants/search", json={"lat": 33.68, "lng": -117.82, "radiusMiles": 5, "cuisine": "thai"})

    assert resp.status_code == 500
    assert resp.json()["detail"]["code"] == "INTERNAL_ERROR"


def test_plan_endpoint():
    restaurants = [_venue("r1", "Harbor Bistro", 33.69).model_dump(), _venue("r2", "Sakura Sushi", 33.70).model_dump()]
    activities = [_venue("a1", "City Art Museum", 33.69, category="activity").model_dump()]

    with TestClient(app) as c:
        by_criteria = c.post(
            "/api/plans",
            json={"lat": 33.6846, "lng": -117.8265, "restaurants": restaurants, "activities": activities},
        )
        swapped = c.post(
            "/api/plans",
            json={
                "lat": 33.6846,
                "lng": -117.8265,
                "restaurants": restaurants,
                "activities": activities,
                "restaurantIndex": 1,
            },
        )
        missing = c.post("/api/plans", json={"restaurants": restaurants})

    assert by_criteria.status_code == 200
    plan = by_criteria.json()
    assert plan["restaurant"]["id"] == "r1"
    assert plan["activity"]["id"] == "a1"
    assert plan["sequence"] == "dinner_first"
    assert set(plan["distances"]) == {"toRestaurant", "toActivity", "betweenPlaces"}

    assert swapped.status_code == 200
    assert swapped.json()["restaurant"]["id"] == "r2"

    assert missing.status_code == 400


def test_provider_status_never_leaks_keys(monkeypatch, settings_with_keys):
    monkeypatch.setattr(routes, "get_settings", lambda: settings_with_keys)

    with TestClient(app) as c:
        resp = c.get("/api/providers/status")

    assert resp.status_code == 200
    data = resp.json()
    assert data["restaurants"]["google"]["status"] == "active"
    assert data["activities"]["ticketmaster"]["status"] == "active"
    assert "g-key" not in resp.text


def test_health():
    with TestClient(app) as c:
        resp = c.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "app": "DateNight"}
