"""Tests for opening hours parsing and display helpers."""
from datetime import datetime

import pytest

from localfind.core.availability import (
    ALL_DAY,
    format_availability_days,
    format_business_hours,
    format_day_short,
    has_availability_info,
    format_distance_text,
    format_price,
    is_open_now,
    parse_time_string,
)
from localfind.core.models import LocationRecord


@pytest.mark.parametrize("text, minutes", [
    ("9:30 PM", 21 * 60 + 30),
    ("12 AM", 0),
    ("12:15 PM", 12 * 60 + 15),
    ("9am", 9 * 60),
    ("21:30", 21 * 60 + 30),
    ("21.30", 21 * 60 + 30),
    ("9", 9 * 60),
    ("3", 15 * 60),
    ("24 hours", ALL_DAY),
    ("", 0),
    ("closed", 0),
])
def test_parse_time_string(text, minutes):
    """Loose time formats parse to minutes since midnight."""
    assert parse_time_string(text) == minutes


def test_explicit_flag_wins(wednesday_afternoon):
    """An explicit open_now value is used as-is."""
    assert is_open_now(LocationRecord(id="1", open_now=True), wednesday_afternoon) is True
    assert is_open_now(LocationRecord(id="1", open_now=False, hours="24 hours"), wednesday_afternoon) is False


def test_availability_days_and_times(wednesday_afternoon):
    """Today's weekday and the time window both have to match."""
    record = LocationRecord(
        id="1",
        availability_days=["Monday", "Wednesday"],
        availability_start_time="9:00 AM",
        availability_end_time="6:00 PM",
    )
    assert is_open_now(record, wednesday_afternoon) is True
    assert is_open_now(record, datetime(2024, 6, 5, 19, 0)) is False
    assert is_open_now(record, datetime(2024, 6, 4, 14, 30)) is False


def test_short_day_names(wednesday_afternoon):
    """Abbreviated day names match the full weekday."""
    record = LocationRecord(id="1", availability_days=["Mon", "Wed"])
    assert is_open_now(record, wednesday_afternoon) is True


def test_window_wrapping_midnight():
    """An end time before the start time wraps past midnight."""
    record = LocationRecord(
        id="1",
        availability_days=["Wednesday"],
        availability_start_time="8:00 PM",
        availability_end_time="2:00 AM",
    )
    assert is_open_now(record, datetime(2024, 6, 5, 23, 0)) is True
    assert is_open_now(record, datetime(2024, 6, 5, 1, 0)) is True
    assert is_open_now(record, datetime(2024, 6, 5, 12, 0)) is False


def test_all_day_window():
    """24 hour entries are always open on listed days."""
    record = LocationRecord(
        id="1",
        availability_days=["Wednesday"],
        availability_start_time="24 hours",
        availability_end_time="24 hours",
    )
    assert is_open_now(record, datetime(2024, 6, 5, 3, 0)) is True


def test_hours_range(wednesday_afternoon):
    """A free text hours range is used when no days are listed."""
    record = LocationRecord(id="1", hours="9:00 AM - 5:00 PM")
    assert is_open_now(record, wednesday_afternoon) is True
    assert is_open_now(record, datetime(2024, 6, 5, 18, 0)) is False


def test_availability_text(wednesday_afternoon):
    """Free text availability is interpreted as a last resort."""
    assert is_open_now(LocationRecord(id="1", availability="Weekdays"), wednesday_afternoon) is True
    assert is_open_now(LocationRecord(id="1", availability="All days"), wednesday_afternoon) is True
    assert is_open_now(LocationRecord(id="1", availability="Wednesday only"), wednesday_afternoon) is True
    assert is_open_now(LocationRecord(id="1", availability="By appointment"), wednesday_afternoon) is False
    assert is_open_now(LocationRecord(id="1", availability="Weekends"), wednesday_afternoon) is None


def test_no_information(wednesday_afternoon):
    """Records without hours give no answer."""
    assert is_open_now(LocationRecord(id="1"), wednesday_afternoon) is None


def test_display_helpers():
    """Card display helpers format days, hours, prices and distances."""
    record = LocationRecord(
        id="1",
        availability_days=["monday", "wednesday"],
        availability_start_time="9:00 AM",
        availability_end_time="6:00 PM",
        price_range_min=500.0,
        price_range_max=1500.0,
        price_unit="per hour",
    )
    assert format_day_short("Monday") == "Mon"
    assert format_day_short("Funday") == "Funday"
    assert has_availability_info(record)
    assert not has_availability_info(LocationRecord(id="2"))
    assert format_availability_days(record) == "Mon, Wed"
    assert format_business_hours("Until 8 PM", record) == "monday, wednesday: 9:00 AM - 6:00 PM"
    assert format_business_hours("Until 8 PM", LocationRecord(id="2")) == "Until 8 PM"
    assert format_price(record) == "500-1500/hour"
    assert format_price(LocationRecord(id="2", price_level="$$")) == "$$"
    assert format_price(LocationRecord(id="3")) == ""
    assert format_distance_text("0.5 miles away") == "0.5 km away"
    assert format_distance_text(None) == ""
