"""Opening hours parsing and display helpers."""
import re
from datetime import datetime
from typing import Optional

from localfind.core.models import LocationRecord


DAYS_OF_WEEK = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

DAY_SHORT_NAMES = {day: day[:3].title() for day in DAYS_OF_WEEK}

# Returned by parse_time_string for "24 hours" entries
ALL_DAY = -1

_HOURS_RANGE_RE = re.compile(r"([\d:]+\s*[AP]M)\s*-\s*([\d:]+\s*[AP]M)", re.IGNORECASE)


def parse_time_string(time_string: Optional[str]) -> int:
    """
    Parse a loosely formatted time into minutes since midnight.

    Accepts "9:30 PM", "9 PM", "21:30", "21.30" and bare hours. A bare hour
    between 7 and 11 is read as AM, any other hour from 1 to 12 as PM.

    Args:
        time_string: Time text from a business profile

    Returns:
        Minutes since midnight, ALL_DAY for "24 hours", 0 if unparseable
    """
    if not time_string:
        return 0

    clean = time_string.strip().upper()
    if "24" in clean and "HOUR" in clean:
        return ALL_DAY

    match = re.search(r"(\d+)(?::(\d+))?\s*(AM|PM)", clean)
    if not match:
        match = re.search(r"(\d{1,2})[:.](\d{2})", clean)
        if match:
            return int(match.group(1)) * 60 + int(match.group(2))

        match = re.search(r"(\d+)", clean)
        if match:
            hours = int(match.group(1))
            if 1 <= hours <= 12:
                if 7 <= hours <= 11:
                    return hours * 60
                return (hours + 12) * 60
            return hours * 60
        return 0

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    period = match.group(3)
    if period == "PM" and hours < 12:
        hours += 12
    if period == "AM" and hours == 12:
        hours = 0
    return hours * 60 + minutes


def _within_window(start: int, end: int, current: int) -> bool:
    if start == ALL_DAY or end == ALL_DAY:
        return True
    # Window wraps past midnight
    if end < start:
        return current >= start or current <= end
    return start <= current <= end


def _day_matches(today: str, day) -> bool:
    day = str(day).strip().lower()
    if not day:
        return False
    return day in today or today in day or today[:3] in day


def is_open_now(record: LocationRecord, now: Optional[datetime] = None) -> Optional[bool]:
    """
    Work out whether a record is open at the given time.

    Checks, in order: the explicit open_now flag, availability days with
    start/end times, an "hours" range like "9:00 AM - 5:00 PM", and the free
    text availability field ("weekdays", "weekends", "all days", ...).

    Args:
        record: Record to check
        now: Time to check against (defaults to local now)

    Returns:
        True/False, or None when the record carries no usable information
    """
    if record.open_now is True:
        return True
    if record.open_now is False:
        return False

    now = now or datetime.now()
    today = DAYS_OF_WEEK[now.weekday()]
    current = now.hour * 60 + now.minute

    if record.availability_days:
        if not any(_day_matches(today, day) for day in record.availability_days):
            return False

        if record.availability_start_time and record.availability_end_time:
            start = parse_time_string(record.availability_start_time)
            end = parse_time_string(record.availability_end_time)
            return _within_window(start, end, current)
        return True

    if record.hours:
        match = _HOURS_RANGE_RE.search(record.hours)
        if match:
            start = parse_time_string(match.group(1))
            end = parse_time_string(match.group(2))
            return _within_window(start, end, current)

    if record.availability:
        text = record.availability.lower()
        if "appointment" in text:
            return False

        today_index = now.weekday()
        if "weekdays" in text and today_index < 5:
            return True
        if "weekends" in text and today_index >= 5:
            return True
        if "all days" in text:
            return True
        if "monday to friday" in text and today_index < 5:
            return True
        if today in text:
            return True

    return None


def format_day_short(day: str) -> str:
    return DAY_SHORT_NAMES.get(day.lower(), day)


def has_availability_info(record: LocationRecord) -> bool:
    return bool(record.availability_days)


def format_availability_days(record: LocationRecord) -> Optional[str]:
    if not record.availability_days:
        return None
    return ", ".join(format_day_short(day) for day in record.availability_days)


def format_business_hours(hours: Optional[str], record: LocationRecord) -> Optional[str]:
    """
    Build the hours line shown on a card.

    Availability days (with times when both are set) take precedence over
    the free text hours.
    """
    if has_availability_info(record):
        days = ", ".join(record.availability_days)
        start = record.availability_start_time or ""
        end = record.availability_end_time or ""
        if start and end:
            return f"{days}: {start} - {end}"
        return days
    return hours or None


def format_price(record: LocationRecord) -> str:
    if record.price_range_min and record.price_range_max and record.price_unit:
        unit = record.price_unit.replace("per ", "")
        return f"{record.price_range_min:g}-{record.price_range_max:g}/{unit}"
    if record.price_level:
        return str(record.price_level)
    return ""


def format_distance_text(distance_text: Optional[str]) -> str:
    """Normalize a stored distance label like "0.5 miles away" to "0.5 km away"."""
    if not distance_text:
        return ""
    match = re.search(r"(\d+(\.\d+)?)", distance_text)
    if match:
        return f"{float(match.group(0)):.1f} km away"
    formatted = distance_text.replace("miles", "km")
    return formatted.replace("away away", "away")
