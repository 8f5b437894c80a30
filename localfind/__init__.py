"""Location and relevance ranking for local business, marketplace and event search."""
from localfind.core.geocoder import CoordinateResolver, GeolocationError
from localfind.core.map_links import extract_from_map_link
from localfind.core.models import (
    Coordinate,
    FilterConfig,
    LocationRecord,
    MapLink,
    SortMode,
)
from localfind.core.proximity import calculate_distance, haversine_km
from localfind.core.ranking import ResultRanker, rank_results
from localfind.core.relevance import (
    KeywordRelevanceScorer,
    RelevanceScorer,
    WordCoverageRelevanceScorer,
)

__version__ = "0.1.0"

__all__ = [
    "Coordinate",
    "CoordinateResolver",
    "FilterConfig",
    "GeolocationError",
    "KeywordRelevanceScorer",
    "LocationRecord",
    "MapLink",
    "RelevanceScorer",
    "ResultRanker",
    "SortMode",
    "WordCoverageRelevanceScorer",
    "calculate_distance",
    "extract_from_map_link",
    "haversine_km",
    "rank_results",
]
