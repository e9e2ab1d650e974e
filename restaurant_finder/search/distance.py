from __future__ import annotations

import math

from .models import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(origin: Coordinate, target: Coordinate) -> float:
    """Great-circle distance between two WGS-84 points, in kilometres."""
    if origin == target:
        return 0.0

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(target.longitude - origin.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push ``a`` just past 1 for antipodal points.
    if a > 1.0:
        a = 1.0
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))
