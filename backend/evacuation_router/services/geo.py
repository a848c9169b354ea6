"""
Great-circle geometry helpers.
"""

import math

from schemas.common import Bounds, Coordinate

EARTH_RADIUS_M = 6_371_000.0
METERS_PER_DEGREE_LAT = math.pi * EARTH_RADIUS_M / 180


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in meters between two coordinates."""
    return haversine_m(a.lat, a.lng, b.lat, b.lng)


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    # rounding can push antipodal points just past 1
    a = min(1.0, a)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def bounds_around(center: Coordinate, radius_m: float) -> Bounds:
    """
    Square window of half-width `radius_m` around `center`, clamped to
    valid latitude/longitude ranges.
    """
    dlat = radius_m / METERS_PER_DEGREE_LAT
    cos_lat = math.cos(math.radians(center.lat))
    # Near the poles every longitude is within reach
    if cos_lat < 1e-6:
        dlon = 180.0
    else:
        dlon = min(180.0, dlat / cos_lat)

    return Bounds(
        north=min(90.0, center.lat + dlat),
        south=max(-90.0, center.lat - dlat),
        east=min(180.0, center.lng + dlon),
        west=max(-180.0, center.lng - dlon),
    )
