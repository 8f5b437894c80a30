"""Tests for distance calculations."""
import math

import pytest

from localfind.core.models import Coordinate, DistanceUnit, LocationRecord
from localfind.core.proximity import (
    calculate_distance,
    find_nearest,
    format_distance,
    haversine_km,
)


POINTS = [
    (12.9716, 77.5946),
    (19.0760, 72.8777),
    (28.6139, 77.2090),
    (-33.8688, 151.2093),
    (0.0, 0.0),
    (0.0, 180.0),
]


def test_identical_points_are_zero():
    """Distance from a point to itself is zero."""
    assert haversine_km(12.9716, 77.5946, 12.9716, 77.5946) == 0
    for lat, lng in POINTS:
        assert haversine_km(lat, lng, lat, lng) == 0


def test_distance_is_symmetric():
    """Swapping the points does not change the distance."""
    for a in POINTS:
        for b in POINTS:
            assert haversine_km(a[0], a[1], b[0], b[1]) == haversine_km(b[0], b[1], a[0], a[1])


def test_clamp_prevents_nan():
    """Antipodal and nearly identical points never produce NaN."""
    antipodal = haversine_km(0.0, 0.0, 0.0, 180.0)
    assert math.isfinite(antipodal)
    assert antipodal > 20000

    adjacent = haversine_km(12.9716, 77.5946, 12.97160000000001, 77.5946)
    assert math.isfinite(adjacent)
    assert adjacent == 0.0


def test_known_city_distance():
    """Bengaluru to Mumbai is roughly 845 km."""
    distance = haversine_km(12.9716, 77.5946, 19.0760, 72.8777)
    assert 830 < distance < 860
    assert distance == round(distance, 1)


def test_units():
    """Miles and nautical miles are derived from the same statute mile value."""
    km = calculate_distance(12.9716, 77.5946, 19.0760, 72.8777, DistanceUnit.KILOMETERS)
    miles = calculate_distance(12.9716, 77.5946, 19.0760, 72.8777, "M")
    nautical = calculate_distance(12.9716, 77.5946, 19.0760, 72.8777, DistanceUnit.NAUTICAL_MILES)

    assert miles < km
    assert nautical < miles
    assert km == pytest.approx(miles * 1.609344, abs=0.2)


def test_format_distance():
    """Short distances are shown in metres."""
    assert format_distance(0.5) == "500 m"
    assert format_distance(1.23) == "1.2 km"
    assert format_distance(3, unit="mi") == "3.0 mi"


def test_find_nearest():
    """Records are returned nearest first, skipping ones without coordinates."""
    origin = Coordinate(13.0, 77.6)
    records = [
        LocationRecord(id="far", latitude=13.1, longitude=77.6),
        LocationRecord(id="none"),
        LocationRecord(id="near", latitude=13.01, longitude=77.6),
    ]

    nearest = find_nearest(origin, records, max_distance_km=5)

    assert [r.id for r in nearest] == ["near"]
    assert nearest[0].calculated_distance_km == pytest.approx(1.1, abs=0.1)
    assert records[2].calculated_distance_km is None
