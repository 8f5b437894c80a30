"""Single-pass ranking pipeline: distance, hard filters, relevance, sort."""
import math
import re
from datetime import datetime
from typing import Any, List, Optional, Sequence, Union

from localfind.core.availability import is_open_now
from localfind.core.geocoder import CoordinateResolver
from localfind.core.models import Coordinate, FilterConfig, LocationRecord, SortMode
from localfind.core.proximity import distance_between
from localfind.core.relevance import KeywordRelevanceScorer, RelevanceScorer
from localfind.utils.logging import log_structured
from localfind.utils.timing import Timer


_LEADING_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_FRACTION_RE = re.compile(r"(?<=\d{2}:\d{2}:\d{2})\.(\d+)")

ReferenceInput = Union[Coordinate, Sequence[float], dict, None]


def parse_leading_float(text: Any) -> Optional[float]:
    """Parse the numeric prefix of a string ("42abc" -> 42.0), like JavaScript parseFloat."""
    if text is None:
        return None
    match = _LEADING_FLOAT_RE.match(str(text))
    if not match:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def placeholder_coordinate(record_id: Any, city_center: Coordinate) -> Optional[Coordinate]:
    """
    Legacy placeholder position for records stored without coordinates.

    Both axes are offset from the city centre by parseFloat(id) mod 0.1.
    Ids without a numeric prefix get no coordinate.
    """
    value = parse_leading_float(record_id)
    if value is None:
        return None
    offset = math.fmod(value, 0.1)
    return Coordinate(offset + city_center.lat, offset + city_center.lng)


def _coerce_reference(ref: ReferenceInput) -> Optional[Coordinate]:
    if ref is None or isinstance(ref, (str, bytes)):
        return None
    if isinstance(ref, Coordinate):
        return ref if ref.is_valid() else None
    if isinstance(ref, dict):
        return Coordinate.from_values(ref.get("lat"), ref.get("lng"))
    try:
        lat, lng = ref
    except (TypeError, ValueError):
        return None
    return Coordinate.from_values(lat, lng)


def _number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _timestamp(value: Any) -> Optional[float]:
    """Seconds since epoch for an ISO timestamp, or None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.timestamp()
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fraction digits
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text).timestamp()
    except ValueError:
        return None


class ResultRanker:
    """Filters and orders location records for a search."""

    def __init__(
        self,
        resolver: Optional[CoordinateResolver] = None,
        scorer: Optional[RelevanceScorer] = None,
        city_center: Optional[Coordinate] = None
    ):
        """
        Initialize ranker.

        Args:
            resolver: Resolver used for map links (and its default city centre)
            scorer: Relevance strategy (defaults to keyword scoring)
            city_center: Base of the per-id placeholder coordinates
        """
        self.resolver = resolver or CoordinateResolver()
        self.scorer = scorer or KeywordRelevanceScorer()
        self.city_center = city_center or self.resolver.default

    def record_coordinate(self, record: LocationRecord) -> Optional[Coordinate]:
        """Explicit coordinates, then the map link, then the id placeholder."""
        coordinate = record.explicit_coordinate()
        if coordinate is not None:
            return coordinate

        if record.map_link:
            coordinate = self.resolver.extract_from_map_link(record.map_link)
            if coordinate is not None:
                return coordinate

        return placeholder_coordinate(record.id, self.city_center)

    def attach_distance(self, record: LocationRecord, ref: Coordinate) -> LocationRecord:
        coordinate = self.record_coordinate(record)
        if coordinate is None:
            return record.with_updates(calculated_distance_km=None)
        return record.with_updates(calculated_distance_km=distance_between(ref, coordinate))

    def passes_filters(
        self,
        record: LocationRecord,
        filters: FilterConfig,
        now: Optional[datetime] = None
    ) -> bool:
        """Apply every hard filter; all must pass."""
        distance = record.calculated_distance_km
        if (
            filters.max_distance_km is not None
            and distance is not None
            and distance > filters.max_distance_km
        ):
            return False

        if record.effective_rating() < (filters.min_rating or 0):
            return False

        price_level = record.price_signal()
        if (
            filters.max_price_level is not None
            and price_level is not None
            and price_level > filters.max_price_level
        ):
            return False

        if record.price_range_min is not None:
            price = _number(record.price_range_min)
            if filters.min_price is not None and price < filters.min_price:
                return False
            if filters.max_price is not None and price > filters.max_price:
                return False

        if filters.open_now_only and is_open_now(record, now) is not True:
            return False

        for flag in filters.required_flags:
            if not record.has_flag(flag):
                return False

        return True

    def apply_relevance(self, records: List[LocationRecord], query: str) -> List[LocationRecord]:
        """Score every record and keep the scorer's matches."""
        scored = []
        for record in records:
            result = self.scorer.score(query, record)
            if not self.scorer.is_match(result):
                continue
            scored.append(record.with_updates(
                relevance_score=max(0.0, result.score),
                matched_tags=list(result.matched_tags),
            ))
        return scored

    def sort(
        self,
        records: List[LocationRecord],
        sort_mode: SortMode,
        has_query: bool = False
    ) -> List[LocationRecord]:
        """
        Order records by the sort mode.

        Python's sort is stable, so ties keep input order. With a query the
        relevance score is applied first and acts as the tie-break.
        """
        ordered = list(records)

        if sort_mode is SortMode.RELEVANCE and not has_query:
            sort_mode = SortMode.RATING

        if has_query:
            ordered.sort(key=lambda r: -(r.relevance_score or 0.0))
            if sort_mode is SortMode.RELEVANCE:
                return ordered

        if sort_mode is SortMode.RATING:
            ordered.sort(key=lambda r: -_number(r.rating))
        elif sort_mode is SortMode.DISTANCE:
            ordered.sort(key=lambda r: (
                r.calculated_distance_km is None,
                r.calculated_distance_km or 0.0,
            ))
        elif sort_mode is SortMode.REVIEW_COUNT:
            ordered.sort(key=lambda r: -_number(r.review_count))
        elif sort_mode is SortMode.NEWEST:
            def newest_key(record):
                ts = _timestamp(record.created_at)
                return (ts is None, -(ts or 0.0))
            ordered.sort(key=newest_key)

        return ordered

    def rank(
        self,
        records: Sequence[LocationRecord],
        ref: ReferenceInput,
        filters: Optional[FilterConfig] = None,
        sort_mode: Union[SortMode, str] = SortMode.RATING,
        query: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> List[LocationRecord]:
        """
        Rank records for a search.

        Steps:
        1. Attach calculated_distance_km (skipped without a reference point)
        2. Hard filters: distance, rating, price, open now, required flags
        3. Relevance filtering when a query is given
        4. Sort by the requested mode

        The input list and its records are never modified.

        Args:
            records: Records to rank
            ref: User reference point, or None to disable distance handling
            filters: Hard filters (defaults to none)
            sort_mode: rating, distance, review_count, newest or relevance
            query: Optional free text query
            now: Time used for open-now checks

        Returns:
            New list of new record objects
        """
        if not records:
            return []

        filters = filters or FilterConfig()
        sort_mode = SortMode.parse(sort_mode)
        reference = _coerce_reference(ref)
        has_query = bool(query and query.strip())

        with Timer("rank", input_count=len(records), sort_mode=sort_mode.value):
            if reference is not None:
                working = [self.attach_distance(record, reference) for record in records]
            else:
                working = [record.with_updates(calculated_distance_km=None) for record in records]

            working = [r for r in working if self.passes_filters(r, filters, now)]

            if has_query:
                working = self.apply_relevance(working, query)

            ranked = self.sort(working, sort_mode, has_query)

        log_structured(
            "debug",
            "Ranking complete",
            input_count=len(records),
            output_count=len(ranked),
            sort_mode=sort_mode.value,
            scorer=self.scorer.name,
            has_reference=reference is not None,
        )
        return ranked


def rank_results(
    records: Sequence[LocationRecord],
    ref: ReferenceInput,
    filters: Optional[FilterConfig] = None,
    sort_mode: Union[SortMode, str] = SortMode.RATING,
    query: Optional[str] = None,
    scorer: Optional[RelevanceScorer] = None,
    now: Optional[datetime] = None
) -> List[LocationRecord]:
    """Rank records with a default resolver and the given scoring strategy."""
    return ResultRanker(scorer=scorer).rank(records, ref, filters, sort_mode, query, now)
