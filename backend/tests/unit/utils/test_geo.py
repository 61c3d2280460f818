"""Tests for great-circle distance helpers."""

import math

import pytest

from app.core.constants import EARTH_RADIUS_METERS
from app.utils.geo import haversine_meters, latitude_gap_km


def test_identical_points_are_zero():
    assert haversine_meters(40.7128, -74.0060, 40.7128, -74.0060) == 0.0


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_METERS * math.radians(1.0)
    assert haversine_meters(10.0, 20.0, 11.0, 20.0) == pytest.approx(expected, rel=1e-9)


def test_distance_is_symmetric():
    a = haversine_meters(40.7128, -74.0060, 34.0522, -118.2437)
    b = haversine_meters(34.0522, -118.2437, 40.7128, -74.0060)
    assert a == pytest.approx(b)


def test_known_city_pair():
    """New York to Los Angeles is roughly 3,936 km."""
    meters = haversine_meters(40.7128, -74.0060, 34.0522, -118.2437)
    assert meters == pytest.approx(3_936_000, rel=0.01)


def test_antipodal_points_are_half_circumference():
    meters = haversine_meters(0.0, 0.0, 0.0, 180.0)
    assert not math.isnan(meters)
    assert meters == pytest.approx(math.pi * EARTH_RADIUS_METERS, rel=1e-9)


def test_near_antipodal_points_stay_finite():
    meters = haversine_meters(45.0, 10.0, -45.0, -170.0)
    assert math.isfinite(meters)
    assert meters <= math.pi * EARTH_RADIUS_METERS + 1e-6


def test_crossing_the_antimeridian():
    meters = haversine_meters(0.0, 179.9, 0.0, -179.9)
    assert meters == pytest.approx(EARTH_RADIUS_METERS * math.radians(0.2), rel=1e-6)


def test_latitude_gap_never_exceeds_true_distance():
    points = [
        (40.0, -74.0, 40.5, -73.0),
        (-33.9, 151.2, -34.5, 150.1),
        (0.0, 0.0, 1.0, 1.0),
        (89.0, 0.0, 88.0, 180.0),
    ]
    for lat1, lng1, lat2, lng2 in points:
        gap_m = latitude_gap_km(lat1, lat2) * 1000
        assert gap_m <= haversine_meters(lat1, lng1, lat2, lng2)
