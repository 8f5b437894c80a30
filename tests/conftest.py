"""Pytest configuration and fixtures."""
from datetime import datetime

import pytest

from localfind.core.geocoder import CoordinateResolver
from localfind.core.models import LocationRecord
from localfind.core.ranking import ResultRanker


@pytest.fixture
def sample_records():
    """The three records from the min-rating example."""
    return [
        LocationRecord(id="a", name="Salon A", rating=4.9, tags=["unisex"]),
        LocationRecord(id="b", name="Cafe B", rating=4.2, tags=[]),
        LocationRecord(id="c", name="Salon C", rating=3.8, tags=["unisex", "walkins"]),
    ]


@pytest.fixture
def salon_record():
    """A fully populated salon in Indiranagar."""
    return LocationRecord(
        id="1",
        name="Chic Cuts Salon",
        description="Modern unisex salon offering haircuts",
        category="Salons",
        address="123 Style Avenue, Indiranagar, Bangalore",
        tags=["Unisex", "Walk-ins"],
        rating=4.8,
        review_count=120,
    )


@pytest.fixture
def bike_listing():
    """A marketplace listing for coverage scoring."""
    return LocationRecord(
        id="m1",
        name="Royal Enfield Classic 350",
        description="Well maintained bike, single owner",
        category="Vehicles",
        address="Nagarbhavi, Bangalore",
        seller_name="Ravi",
        tags=["bike", "motorcycle"],
        rating=4.5,
    )


@pytest.fixture
def wednesday_afternoon():
    """Wednesday 5 June 2024, 14:30."""
    return datetime(2024, 6, 5, 14, 30)


@pytest.fixture
def resolver():
    return CoordinateResolver()


@pytest.fixture
def ranker(resolver):
    return ResultRanker(resolver=resolver)
