"""Distance calculations between coordinates."""
import math
from typing import List, Optional, Union

from localfind.core.models import Coordinate, DistanceUnit, LocationRecord


def calculate_distance(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    unit: Union[DistanceUnit, str] = DistanceUnit.KILOMETERS
) -> float:
    """
    Calculate great-circle distance between two points.

    Uses the spherical law of cosines. The cosine term is clamped to [-1, 1]
    so floating point overshoot never turns into NaN inside acos.

    Args:
        lat1: Latitude of first point
        lng1: Longitude of first point
        lat2: Latitude of second point
        lng2: Longitude of second point
        unit: K for kilometers, M for statute miles, N for nautical miles

    Returns:
        Distance in the requested unit, rounded to one decimal
    """
    if lat1 == lat2 and lng1 == lng2:
        return 0.0

    unit = DistanceUnit(unit)

    radlat1 = math.radians(lat1)
    radlat2 = math.radians(lat2)
    radtheta = math.radians(lng1 - lng2)

    dist = (
        math.sin(radlat1) * math.sin(radlat2)
        + math.cos(radlat1) * math.cos(radlat2) * math.cos(radtheta)
    )
    dist = max(-1.0, min(1.0, dist))

    dist = math.degrees(math.acos(dist))
    dist = dist * 60 * 1.1515  # statute miles

    if unit is DistanceUnit.KILOMETERS:
        dist = dist * 1.609344
    elif unit is DistanceUnit.NAUTICAL_MILES:
        dist = dist * 0.8684

    return round(dist, 1)


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometers, rounded to one decimal."""
    return calculate_distance(lat1, lng1, lat2, lng2, DistanceUnit.KILOMETERS)


def distance_between(a: Coordinate, b: Coordinate) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def format_distance(distance: float, unit: str = "km") -> str:
    """
    Format distance for display.

    Distances under one unit are shown in metres.
    """
    if distance < 1:
        return f"{distance * 1000:.0f} m"
    return f"{distance:.1f} {unit}"


def find_nearest(
    origin: Coordinate,
    records: List[LocationRecord],
    max_distance_km: Optional[float] = None,
    limit: int = 10
) -> List[LocationRecord]:
    """
    Find the records with explicit coordinates closest to a point.

    Args:
        origin: Query point
        records: Records to search
        max_distance_km: Maximum distance in km (None = no limit)
        limit: Maximum number of results

    Returns:
        Copies of the nearest records sorted by distance, with
        calculated_distance_km set
    """
    results = []

    for record in records:
        coordinate = record.explicit_coordinate()
        if coordinate is None:
            continue

        distance_km = distance_between(origin, coordinate)

        if max_distance_km is None or distance_km <= max_distance_km:
            results.append(record.with_updates(calculated_distance_km=distance_km))

    results.sort(key=lambda r: r.calculated_distance_km)

    return results[:limit]
