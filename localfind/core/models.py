"""Data models for location ranking."""
import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, List, Dict, Any, FrozenSet, Union


def _to_float(value: Any) -> Optional[float]:
    """Convert a loosely typed value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in degrees."""
    lat: float
    lng: float

    def is_valid(self) -> bool:
        return _to_float(self.lat) is not None and _to_float(self.lng) is not None

    @classmethod
    def from_values(cls, lat: Any, lng: Any) -> Optional["Coordinate"]:
        """Build a coordinate, treating missing or NaN values as absent."""
        lat_value = _to_float(lat)
        lng_value = _to_float(lng)
        if lat_value is None or lng_value is None:
            return None
        return cls(lat_value, lng_value)


@dataclass(frozen=True)
class MapLink:
    """Marks a string as a map-sharing URL."""
    url: str


class DistanceUnit(str, Enum):
    KILOMETERS = "K"
    MILES = "M"
    NAUTICAL_MILES = "N"


class SortMode(str, Enum):
    """Orderings supported by the ranker."""
    RATING = "rating"
    DISTANCE = "distance"
    REVIEW_COUNT = "review_count"
    NEWEST = "newest"
    RELEVANCE = "relevance"

    @classmethod
    def parse(cls, value: Union[str, "SortMode", None]) -> "SortMode":
        """Parse a sort mode, accepting the names used by the web UI."""
        if isinstance(value, SortMode):
            return value
        if not value:
            return cls.RATING
        aliases = {
            "reviewcount": cls.REVIEW_COUNT,
            "review_count": cls.REVIEW_COUNT,
            "reviews": cls.REVIEW_COUNT,
            "top-rated": cls.RATING,
            "nearest": cls.DISTANCE,
        }
        key = str(value).strip().lower()
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            return cls.RATING


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass
class LocationRecord:
    """
    A business, listing or event that can be ranked.

    Only `id` is required. `calculated_distance_km`, `relevance_score` and
    `matched_tags` are filled in by the ranker and stay empty until then.
    """
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    address: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    rating: Optional[float] = None
    review_count: Optional[int] = None
    price_level: Optional[Union[float, str]] = None
    price_range_min: Optional[float] = None
    price_range_max: Optional[float] = None
    price_unit: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    map_link: Optional[str] = None
    open_now: Optional[bool] = None
    availability_days: List[str] = field(default_factory=list)
    availability_start_time: Optional[str] = None
    availability_end_time: Optional[str] = None
    hours: Optional[str] = None
    availability: Optional[str] = None
    created_at: Optional[str] = None
    seller_name: Optional[str] = None
    flags: Dict[str, bool] = field(default_factory=dict)
    source: Optional[str] = None
    calculated_distance_km: Optional[float] = None
    relevance_score: Optional[float] = None
    matched_tags: List[str] = field(default_factory=list)

    def explicit_coordinate(self) -> Optional[Coordinate]:
        return Coordinate.from_values(self.latitude, self.longitude)

    def effective_rating(self) -> float:
        """Rating used for filtering; out-of-range or missing ratings count as 0."""
        rating = _to_float(self.rating)
        if rating is None or rating < 0 or rating > 5:
            return 0.0
        return rating

    def price_signal(self) -> Optional[float]:
        """
        Numeric price level of the record.

        Numbers are used as-is, strings of currency symbols ("$$", "₹₹₹")
        count their length and numeric strings are parsed.
        """
        level = self.price_level
        if level is None:
            return None
        if isinstance(level, str):
            stripped = level.strip()
            if not stripped:
                return None
            if len(set(stripped)) == 1 and stripped[0] in "$₹€£":
                return float(len(stripped))
        return _to_float(level)

    def has_flag(self, name: str) -> bool:
        key = _snake_case(name)
        return bool(self.flags.get(key) or self.flags.get(name))

    def with_updates(self, **changes) -> "LocationRecord":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "address": self.address,
            "tags": list(self.tags),
            "rating": self.rating,
            "review_count": self.review_count,
            "price_level": self.price_level,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "map_link": self.map_link,
            "open_now": self.open_now,
            "created_at": self.created_at,
            "flags": dict(self.flags),
            "source": self.source,
            "calculated_distance_km": self.calculated_distance_km,
            "relevance_score": self.relevance_score,
            "matched_tags": list(self.matched_tags),
        }


@dataclass(frozen=True)
class FilterConfig:
    """Hard filters for a single ranking call. None disables a bound."""
    max_distance_km: Optional[float] = None
    min_rating: float = 0.0
    max_price_level: Optional[float] = None
    open_now_only: bool = False
    required_flags: FrozenSet[str] = frozenset()
    min_price: Optional[float] = None
    max_price: Optional[float] = None


@dataclass
class RelevanceResult:
    """Outcome of scoring one record against a query."""
    score: float = 0.0
    matched_tags: List[str] = field(default_factory=list)
    coverage: Optional[float] = None


@dataclass
class Suggestion:
    """A search suggestion shown while the user types."""
    suggestion: str
    category: Optional[str] = None
    source: str = "default"
    score: float = 0.0
