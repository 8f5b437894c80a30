"""Mapping of source table rows onto LocationRecord."""
from typing import Any, Callable, Dict, Iterable, List, Optional

from localfind.core.models import LocationRecord
from localfind.utils.error_handler import safe_execute
from localfind.utils.logging import log_structured


RowAdapter = Callable[[Dict[str, Any]], LocationRecord]


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(item) for item in value if item is not None and str(item).strip()]


def _flags(row: Dict[str, Any]) -> Dict[str, bool]:
    """Collect hidden gem / must visit markers under snake_case names."""
    flags = {}
    for key, names in {
        "hidden_gem": ("hidden_gem", "hiddenGem", "isHiddenGem", "is_hidden_gem"),
        "must_visit": ("must_visit", "mustVisit", "isMustVisit", "is_must_visit"),
    }.items():
        if any(row.get(name) for name in names):
            flags[key] = True
    return flags


def _join_address(*parts: Any) -> Optional[str]:
    cleaned = [str(p).strip() for p in parts if p and str(p).strip()]
    return ", ".join(cleaned) or None


def record_from_recommendation(row: Dict[str, Any]) -> LocationRecord:
    """Map a row of the recommendations table (camelCase or snake_case keys)."""
    return LocationRecord(
        id=str(row["id"]),
        name=_text(row.get("name")),
        description=_text(row.get("description")),
        category=_text(row.get("category")),
        address=_text(row.get("address")),
        tags=_list(row.get("tags")),
        rating=_float(row.get("rating")),
        review_count=_int(row.get("review_count", row.get("reviewCount"))),
        price_level=row.get("priceLevel", row.get("price_level")),
        latitude=_float(row.get("latitude", row.get("lat"))),
        longitude=_float(row.get("longitude", row.get("lng"))),
        map_link=_text(row.get("map_link", row.get("mapLink"))),
        open_now=row.get("openNow", row.get("open_now")),
        hours=_text(row.get("hours")),
        created_at=_text(row.get("created_at", row.get("createdAt"))),
        flags=_flags(row),
        source="recommendation",
    )


def record_from_service_provider(row: Dict[str, Any]) -> LocationRecord:
    """Map a service provider (business) row; area and city are folded into the address."""
    return LocationRecord(
        id=str(row["id"]),
        name=_text(row.get("name")),
        description=_text(row.get("description")),
        category=_text(row.get("category")),
        address=_join_address(row.get("address"), row.get("area"), row.get("city")),
        tags=_list(row.get("tags")),
        rating=_float(row.get("rating")),
        review_count=_int(row.get("review_count")),
        price_level=row.get("price_level"),
        price_range_min=_float(row.get("price_range_min")),
        price_range_max=_float(row.get("price_range_max")),
        price_unit=_text(row.get("price_unit")),
        latitude=_float(row.get("latitude")),
        longitude=_float(row.get("longitude")),
        map_link=_text(row.get("map_link")),
        availability_days=_list(row.get("availability_days")),
        availability_start_time=_text(row.get("availability_start_time")),
        availability_end_time=_text(row.get("availability_end_time")),
        hours=_text(row.get("hours")),
        availability=_text(row.get("availability")),
        created_at=_text(row.get("created_at")),
        flags=_flags(row),
        source="service_provider",
    )


def record_from_marketplace_listing(row: Dict[str, Any]) -> LocationRecord:
    """Map a marketplace listing; the seller rating stands in for the rating."""
    price = _float(row.get("price"))
    return LocationRecord(
        id=str(row["id"]),
        name=_text(row.get("title")),
        description=_text(row.get("description")),
        category=_text(row.get("category")),
        address=_text(row.get("location")),
        tags=_list(row.get("tags")),
        rating=_float(row.get("seller_rating")),
        review_count=_int(row.get("review_count")),
        price_range_min=price,
        price_range_max=price,
        map_link=_text(row.get("map_link")),
        created_at=_text(row.get("created_at")),
        seller_name=_text(row.get("seller_name")),
        flags=_flags(row),
        source="marketplace_listing",
    )


def record_from_event(row: Dict[str, Any]) -> LocationRecord:
    """Map an event row; attendee count is used as the review count."""
    price = _float(row.get("price_per_person", row.get("pricePerPerson")))
    return LocationRecord(
        id=str(row["id"]),
        name=_text(row.get("title")),
        description=_text(row.get("description")),
        address=_text(row.get("location")),
        review_count=_int(row.get("attendees")),
        price_range_min=price,
        price_range_max=price,
        created_at=_text(row.get("created_at")),
        flags=_flags(row),
        source="event",
    )


def records_from_rows(rows: Iterable[Dict[str, Any]], adapter: RowAdapter) -> List[LocationRecord]:
    """
    Map rows with an adapter, skipping rows that cannot be mapped.

    Args:
        rows: Rows fetched from a source table
        adapter: One of the record_from_* functions

    Returns:
        Records in row order
    """
    records = []
    skipped = 0
    for row in rows:
        record = safe_execute(adapter, row, default_return=None)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        log_structured(
            "warning",
            "Skipped rows that could not be mapped",
            adapter=getattr(adapter, "__name__", "unknown"),
            skipped=skipped,
            mapped=len(records),
        )
    return records
