"""Great-circle distance helpers."""

import math

EARTH_RADIUS_MILES = 3959.0
METERS_PER_MILE = 1609.34


def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in miles. NaN coordinates yield NaN."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def miles_to_meters(miles: float) -> int:
    return int(miles * METERS_PER_MILE)
