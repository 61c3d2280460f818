"""Geospatial helpers: great-circle distance on a spherical earth."""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_METERS, KM_PER_DEGREE_LAT


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance in meters between two (lat, lng) points in degrees.

    Identical points give exactly 0.0. The haversine term is clamped to [0, 1]
    so rounding near antipodal points cannot push sqrt/atan2 out of domain.
    """
    if lat1 == lat2 and lng1 == lng2:
        return 0.0

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def latitude_gap_km(lat1: float, lat2: float) -> float:
    """
    Meridian distance between two latitudes.

    Never larger than the great-circle distance between any two points at
    those latitudes, so it is safe as a first-pass envelope.
    """
    return abs(lat1 - lat2) * KM_PER_DEGREE_LAT
