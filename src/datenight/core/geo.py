from __future__ import annotations
from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt

"""
Geospatial helpers.

Distances in this project are in statute miles (search radii arrive in miles and
the merge threshold is expressed in miles), so the Earth radius below is in miles.
"""

EARTH_RADIUS_MILES = 3959
METERS_PER_MILE = 1609.34


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def haversine_miles(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in miles between two points."""
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlat = radians(b.lat - a.lat)
    dlng = radians(b.lng - a.lng)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    return EARTH_RADIUS_MILES * 2 * atan2(sqrt(h), sqrt(1 - h))


def distance_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Convenience wrapper over `haversine_miles` for raw coordinates."""
    return haversine_miles(GeoPoint(lat1, lng1), GeoPoint(lat2, lng2))


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE
