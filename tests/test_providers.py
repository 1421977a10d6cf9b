from datetime import datetime, timezone

import pytest

from datenight.config.settings import Settings
from datenight.core.errors import ProviderRequestFailed
from datenight.core.provider_meta import capture_provider_meta
from datenight.domain.models import SearchRequest
from datenight.providers import foursquare, google_activities, google_places, ticketmaster
from datenight.providers.foursquare import FoursquareActivityProvider, FoursquareRestaurantProvider
from datenight.providers.google_activities import GoogleActivityProvider, is_in_target_city
from datenight.providers.google_places import GooglePlacesRestaurantProvider, build_text_query
from datenight.providers.mock import MockRestaurantProvider
from datenight.providers.registry import build_restaurant_providers, enabled_providers, provider_status
from datenight.providers.ticketmaster import TicketmasterProvider, classification_for_keyword

LAT, LNG = 33.6846, -117.8265


def _restaurant_request(**kw):
    return SearchRequest(lat=LAT, lng=LNG, radius_miles=5, cuisine=kw.pop("cuisine", "italian"), **kw)


def _activity_request(**kw):
    return SearchRequest(lat=LAT, lng=LNG, radius_miles=5, keyword=kw.pop("keyword", "speakeasy"), **kw)


def _google_place(place_id, name, *, types=("restaurant",), price=None, rating=4.5, reviews=200, lat=LAT, lng=LNG, **extra):
    place = {
        "id": place_id,
        "displayName": {"text": name},
        "formattedAddress": "1 Main St",
        "rating": rating,
        "userRatingCount": reviews,
        "location": {"latitude": lat, "longitude": lng},
        "types": list(types),
        "photos": [{"name": "p1"}],
        "addressComponents": [{"types": ["locality"], "longText": "Irvine"}],
    }
    if price:
        place["priceLevel"] = price
    place.update(extra)
    return place


class _Recorder:
    def __init__(self, response):
        self.response = response
        self.calls = []

    async def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.response


def test_disabled_without_key():
    provider = GooglePlacesRestaurantProvider(Settings())
    assert not provider.is_enabled
    assert enabled_providers([provider]) == []


@pytest.mark.asyncio
async def test_disabled_provider_returns_empty_without_network(monkeypatch):
    async def _explode(*args, **kwargs):
        raise AssertionError("network must not be touched")

    monkeypatch.setattr(google_places, "post_json", _explode)
    with capture_provider_meta() as meta:
        venues = await GooglePlacesRestaurantProvider(Settings()).search(_restaurant_request())

    assert venues == []
    assert meta.calls["google"] == {"mode": "disabled", "count": 0}


def test_google_text_query_variants():
    assert build_text_query(_restaurant_request(cuisine="thai")) == ("thai restaurant best rated", "restaurant")
    query, _ = build_text_query(_restaurant_request(cuisine="italian", price_level="budget"))
    assert query.startswith("affordable italian restaurant")
    assert "-pizza" in query
    assert build_text_query(_restaurant_request(venue_type="coffee", target_city="Irvine")) == (
        "coffee shop in Irvine",
        "cafe",
    )


@pytest.mark.asyncio
async def test_google_restaurants_map_and_filter(monkeypatch, settings_with_keys):
    recorder = _Recorder(
        {
            "places": [
                _google_place("p1", "Trattoria Lupo", price="PRICE_LEVEL_EXPENSIVE"),
                _google_place("p2", "Boba Palace"),
                _google_place("p3", "Free Lunch Hall", price="PRICE_LEVEL_FREE"),
            ]
        }
    )
    monkeypatch.setattr(google_places, "post_json", recorder)

    provider = GooglePlacesRestaurantProvider(settings_with_keys)
    venues = await provider.search(_restaurant_request(price_level="upscale"))

    url, kwargs = recorder.calls[0]
    assert url.endswith("places:searchText")
    assert kwargs["headers"]["X-Goog-Api-Key"] == "g-key"
    assert kwargs["json"]["priceLevels"] == ["PRICE_LEVEL_VERY_EXPENSIVE", "PRICE_LEVEL_EXPENSIVE"]

    # Boba is excluded; FREE fails the upscale gate.
    assert [v.id for v in venues] == ["p1"]
    venue = venues[0]
    assert venue.price_level == 3
    assert venue.city == "Irvine"
    assert venue.photo_count == 1
    assert venue.source == "google"


@pytest.mark.asyncio
async def test_google_relaxed_price_floor(monkeypatch, settings_with_keys):
    recorder = _Recorder(
        {
            "places": [
                _google_place("cheap", "Harbor Kitchen", price="PRICE_LEVEL_INEXPENSIVE"),
                _google_place("mid", "Harbor Grill", price="PRICE_LEVEL_MODERATE"),
                _google_place("unknown", "Harbor Bistro"),
            ]
        }
    )
    monkeypatch.setattr(google_places, "post_json", recorder)

    venues = await GooglePlacesRestaurantProvider(settings_with_keys).search(
        _restaurant_request(cuisine="american", price_level="moderate")
    )

    assert [v.id for v in venues] == ["mid", "unknown"]


@pytest.mark.asyncio
async def test_google_error_payload_raises(monkeypatch, settings_with_keys):
    monkeypatch.setattr(google_places, "post_json", _Recorder({"error": {"message": "API key not valid"}}))

    with capture_provider_meta() as meta:
        with pytest.raises(ProviderRequestFailed, match="API key not valid"):
            await GooglePlacesRestaurantProvider(settings_with_keys).search(_restaurant_request())
    assert "error" in meta.calls["google"]


@pytest.mark.asyncio
async def test_google_activities_apply_area_and_exclusions(monkeypatch, settings_with_keys):
    recorder = _Recorder(
        {
            "places": [
                _google_place("bar1", "The Blind Rabbit", types=("bar",), primaryType="bar"),
                _google_place("food", "Pasta House", types=("restaurant",), primaryType="italian_restaurant"),
                _google_place("far", "Faraway Lounge", types=("bar",), primaryType="bar", lat=LAT + 0.2),
                _google_place(
                    "othercity",
                    "Costa Mesa Speakeasy",
                    types=("bar",),
                    primaryType="bar",
                    lat=LAT + 0.09,
                    addressComponents=[{"types": ["locality"], "longText": "Costa Mesa"}],
                ),
                _google_place("show", "Main Stage", types=("performing_arts_theater",), primaryType="performing_arts_theater"),
            ]
        }
    )
    monkeypatch.setattr(google_activities, "post_json", recorder)

    provider = GoogleActivityProvider(settings_with_keys)
    venues = await provider.search(_activity_request(target_city="Irvine"))

    body = recorder.calls[0][1]["json"]
    assert body["includedType"] == "bar"
    assert body["textQuery"].startswith("speakeasy hidden bar")
    assert body["textQuery"].endswith("in Irvine")
    assert "restaurant" in body["excludedPrimaryTypes"]

    ids = [v.id for v in venues]
    assert ids == ["bar1", "show"]
    assert venues[1].category == "event"


def test_is_in_target_city():
    components = [{"types": ["locality"], "longText": "Newport Beach"}]
    assert is_in_target_city(components, "newport beach")
    assert is_in_target_city(components, "NewportBeach")
    assert is_in_target_city(components, "Newport")
    assert not is_in_target_city(components, "Irvine")
    assert not is_in_target_city([], "Irvine")


@pytest.mark.asyncio
async def test_foursquare_restaurants_normalize_ratings(monkeypatch, settings_with_keys):
    recorder = _Recorder(
        {
            "results": [
                {
                    "fsq_id": "f1",
                    "name": "Osteria Mamma",
                    "geocodes": {"main": {"latitude": LAT, "longitude": LNG}},
                    "location": {"formatted_address": "2 Main St", "locality": "Irvine"},
                    "rating": 9.0,
                    "stats": {"total_ratings": 150},
                    "price": 2,
                    "categories": [{"id": "13236", "name": "Italian Restaurant"}],
                },
                {
                    "fsq_id": "f2",
                    "name": "Quiet Corner",
                    "geocodes": {"main": {"latitude": LAT, "longitude": LNG}},
                    "categories": [{"id": "13065", "name": "Restaurant"}],
                },
                {
                    "fsq_id": "f3",
                    "name": "Trader Joe's",
                    "geocodes": {"main": {"latitude": LAT, "longitude": LNG}},
                    "categories": [{"id": "17069", "name": "Grocery Store"}],
                },
                {
                    "fsq_id": "f4",
                    "name": "Ghost Kitchen",
                    "geocodes": {"main": {"latitude": LAT, "longitude": LNG}},
                    "rating": 8.0,
                    "stats": {"total_ratings": 0},
                },
            ]
        }
    )
    monkeypatch.setattr(foursquare, "get_json", recorder)

    provider = FoursquareRestaurantProvider(settings_with_keys)
    venues = await provider.search(_restaurant_request(price_level="upscale"))

    params = recorder.calls[0][1]["params"]
    assert params["query"] == "italian"
    assert params["price"] == "3,4"
    assert params["categories"] == "13065"
    assert recorder.calls[0][1]["headers"]["Authorization"] == "fsq-key"

    assert [v.id for v in venues] == ["f1", "f2"]
    rated, unrated = venues
    assert rated.rating == 4.5
    assert rated.review_count == 150
    assert rated.has_premium_data
    assert rated.types == ["italian_restaurant"]
    assert not unrated.has_premium_data
    assert unrated.photo_count is None


@pytest.mark.asyncio
async def test_foursquare_activities_drop_golf_courses_and_tag_events(monkeypatch, settings_with_keys):
    def place(fsq_id, name, category):
        return {
            "fsq_id": fsq_id,
            "name": name,
            "geocodes": {"main": {"latitude": LAT, "longitude": LNG}},
            "categories": [{"id": "10000", "name": category}],
        }

    recorder = _Recorder(
        {
            "results": [
                place("g1", "Oak Creek Golf Course", "Golf Course"),
                place("g2", "Topgolf", "Golf Driving Range"),
                place("m1", "Edwards Cinema", "Movie Theater"),
            ]
        }
    )
    monkeypatch.setattr(foursquare, "get_json", recorder)

    venues = await FoursquareActivityProvider(settings_with_keys).search(_activity_request(keyword="golf"))

    assert recorder.calls[0][1]["params"]["categories"] == "18000"
    assert [(v.id, v.category) for v in venues] == [("g2", "activity"), ("m1", "event")]


def test_ticketmaster_params():
    provider = TicketmasterProvider(Settings.model_validate({"providers": {"ticketmaster": {"api_key": "tm"}}}))
    now = datetime(2026, 5, 1, 18, 30, tzinfo=timezone.utc)

    params = provider.build_params(_activity_request(keyword="live music", limit=80), now=now)
    assert params["classificationName"] == "Music"
    assert "keyword" not in params
    assert params["size"] == 50
    assert params["radius"] == 5
    assert params["startDateTime"] == "2026-05-01T18:30:00Z"

    params = provider.build_params(_activity_request(keyword="magic"), now=now)
    assert params["keyword"] == "magic"
    assert classification_for_keyword("stand-up comedy") == "Comedy"
    assert classification_for_keyword("") is None


@pytest.mark.asyncio
async def test_ticketmaster_maps_events(monkeypatch, settings_with_keys):
    response = {
        "_embedded": {
            "events": [
                {
                    "id": "E1",
                    "name": "Jazz Night",
                    "classifications": [{"segment": {"name": "Music"}, "genre": {"name": "Jazz"}}],
                    "_embedded": {
                        "venues": [
                            {
                                "name": "Hall",
                                "city": {"name": "Irvine"},
                                "state": {"stateCode": "CA"},
                                "address": {"line1": "5 Stage Rd"},
                                "location": {"latitude": str(LAT), "longitude": str(LNG)},
                            }
                        ]
                    },
                },
                {"id": "E2", "name": "Nowhere Show", "_embedded": {"venues": [{"name": "TBA"}]}},
            ]
        }
    }
    monkeypatch.setattr(ticketmaster, "get_json", _Recorder(response))

    venues = await TicketmasterProvider(settings_with_keys).search(_activity_request(keyword="jazz"))

    assert len(venues) == 1
    event = venues[0]
    assert event.id == "tm_E1"
    assert event.category == "event"
    assert event.address == "5 Stage Rd, Irvine, CA"
    assert not event.has_premium_data
    assert event.types == ["music", "jazz"]


@pytest.mark.asyncio
async def test_mock_provider_filters_by_cuisine():
    settings = Settings.model_validate({"feature_flags": {"enable_mock": True}})
    provider = MockRestaurantProvider(settings)

    assert provider.is_enabled
    venues = await provider.search(_restaurant_request(cuisine="japanese"))
    assert [v.id for v in venues] == ["mock-sushi-palace"]
    assert len(await provider.search(_restaurant_request(cuisine="restaurant"))) == 5


def test_provider_status(settings_with_keys):
    status = provider_status(settings_with_keys)

    restaurants = status["restaurants"]
    assert restaurants["google"]["status"] == "active"
    assert restaurants["yelp"]["status"] == "ready"
    assert restaurants["mock"]["status"] == "disabled"
    assert status["activities"]["ticketmaster"]["status"] == "active"

    bare = provider_status(Settings())
    assert bare["restaurants"]["google"]["status"] == "needs_api_key"
    assert "g-key" not in str(status)


def test_registry_builds_static_list(settings_with_keys):
    names = [p.name for p in build_restaurant_providers(settings_with_keys)]
    assert names == ["google", "foursquare", "yelp", "mock"]
