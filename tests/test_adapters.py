"""Tests for source row adapters."""
import logging

from localfind.core.adapters import (
    record_from_event,
    record_from_marketplace_listing,
    record_from_recommendation,
    record_from_service_provider,
    records_from_rows,
)


def test_service_provider_row():
    """Area and city are folded into the address."""
    record = record_from_service_provider({
        "id": 7,
        "name": "Glow Studio",
        "category": "Salons",
        "address": "12 MG Road",
        "area": "Indiranagar",
        "city": "Bangalore",
        "tags": "unisex, walk-ins",
        "rating": "4.5",
        "availability_days": ["Monday", "Tuesday"],
        "availability_start_time": "9:00 AM",
        "availability_end_time": "6:00 PM",
    })
    assert record.id == "7"
    assert record.address == "12 MG Road, Indiranagar, Bangalore"
    assert record.tags == ["unisex", "walk-ins"]
    assert record.rating == 4.5
    assert record.availability_days == ["Monday", "Tuesday"]
    assert record.source == "service_provider"


def test_marketplace_listing_row():
    """Title, location, price and seller rating are mapped."""
    record = record_from_marketplace_listing({
        "id": "m9",
        "title": "Used Laptop",
        "location": "Jayanagar, Bangalore",
        "price": 25000,
        "seller_rating": 4.1,
        "seller_name": "Asha",
    })
    assert record.name == "Used Laptop"
    assert record.address == "Jayanagar, Bangalore"
    assert record.price_range_min == 25000.0
    assert record.rating == 4.1
    assert record.seller_name == "Asha"


def test_recommendation_row_with_camel_case_keys():
    """Recommendation rows may use camelCase column names."""
    record = record_from_recommendation({
        "id": 3,
        "name": "Hidden Cafe",
        "hiddenGem": True,
        "priceLevel": "$$",
        "reviewCount": 12,
        "lat": 12.9,
        "lng": 77.6,
    })
    assert record.flags == {"hidden_gem": True}
    assert record.has_flag("hiddenGem")
    assert not record.has_flag("mustVisit")
    assert record.price_level == "$$"
    assert record.review_count == 12
    assert record.explicit_coordinate() is not None


def test_event_row():
    """Attendee counts stand in for review counts."""
    record = record_from_event({"id": "e1", "title": "Jazz Night", "attendees": "40", "pricePerPerson": 500})
    assert record.name == "Jazz Night"
    assert record.review_count == 40
    assert record.price_range_min == 500.0


def test_records_from_rows_skips_bad_rows(caplog):
    """Rows that cannot be mapped are skipped and counted."""
    rows = [
        {"id": 1, "name": "Good"},
        {"name": "No id"},
        {"id": 2, "rating": "not a number"},
        {"id": 4, "name": "Also good"},
    ]
    with caplog.at_level(logging.WARNING, logger="localfind"):
        records = records_from_rows(rows, record_from_recommendation)

    assert [r.id for r in records] == ["1", "4"]
    assert any('"skipped": 2' in r.getMessage() for r in caplog.records)
