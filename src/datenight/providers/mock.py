"""Deterministic restaurant provider for local development (`enable_mock`)."""

from __future__ import annotations

from datenight.domain.models import SearchRequest, Venue
from datenight.providers.base import BaseProvider

# (id, name, address, rating, price, reviews, dlat, dlng, types)
_MOCK_PLACES = (
    ("mock-italian-bistro", "Mock Italian Bistro", "123 Test Street", 4.7, 2, 185, 0.002, 0.002,
     ["italian", "restaurant"]),
    ("mock-sushi-palace", "Mock Sushi Palace", "456 Demo Avenue", 4.5, 3, 142, -0.001, 0.003,
     ["japanese", "sushi", "restaurant"]),
    ("mock-taco-truck", "Mock Taco Truck", "789 Sample Road", 4.8, 1, 98, 0.003, -0.001,
     ["mexican", "food_truck"]),
    ("mock-steakhouse", "Mock Prime Steakhouse", "321 Placeholder Blvd", 4.6, 4, 267, -0.002, -0.002,
     ["steakhouse", "upscale", "restaurant"]),
    ("mock-cafe", "Mock Coffee & Brunch", "555 Testing Lane", 4.4, 2, 156, 0.001, -0.003,
     ["cafe", "breakfast", "brunch"]),
)


class MockRestaurantProvider(BaseProvider):
    name = "mock"
    kind = "restaurant"
    flag = "enable_mock"

    async def _search(self, request: SearchRequest) -> list[Venue]:
        venues = []
        for place_id, name, address, rating, price, reviews, dlat, dlng, types in _MOCK_PLACES:
            lat, lng = request.lat + dlat, request.lng + dlng
            venues.append(
                Venue(
                    id=place_id,
                    name=name,
                    address=address,
                    rating=rating,
                    review_count=reviews,
                    lat=lat,
                    lng=lng,
                    category="restaurant",
                    source="mock",
                    price_level=price,
                    distance=self.distance_from(request, lat, lng),
                    types=types,
                )
            )

        cuisine = (request.cuisine or "").lower()
        if cuisine and cuisine != "restaurant":
            venues = [v for v in venues if any(cuisine in t for t in v.types)]
        return venues
