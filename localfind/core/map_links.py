"""Coordinate extraction from map-sharing links."""
import re
from typing import Callable, List, Optional, Tuple
from urllib.parse import unquote

from localfind.core.config import DEFAULT_CITY_CENTER
from localfind.core.models import Coordinate
from localfind.utils.logging import log_structured


_NUMBER = r"(-?\d+(?:\.\d+)?)"

# Shortened links only resolve by following the redirect
SHORT_LINK_HOSTS = ("maps.app.goo.gl",)

# Hosts that identify a Google Maps link even when no coordinates are found
MAPS_URL_MARKERS = ("google.com/maps", "goo.gl/maps")

MapLinkMatcher = Callable[[str], Optional[Coordinate]]


def _valid_pair(lat_text: str, lng_text: str) -> Optional[Coordinate]:
    coordinate = Coordinate.from_values(lat_text, lng_text)
    if coordinate is None:
        return None
    if not (-90.0 <= coordinate.lat <= 90.0 and -180.0 <= coordinate.lng <= 180.0):
        return None
    return coordinate


def regex_matcher(pattern: str) -> MapLinkMatcher:
    """
    Build a matcher from a regex whose first two groups are lat and lng.

    Every occurrence is tried so an out-of-range pair does not hide a valid
    one later in the URL.
    """
    compiled = re.compile(pattern)

    def match(url: str) -> Optional[Coordinate]:
        for found in compiled.finditer(url):
            coordinate = _valid_pair(found.group(1), found.group(2))
            if coordinate is not None:
                return coordinate
        return None

    match.__name__ = f"match_{pattern}"
    return match


# Tried in order; the first matcher returning a coordinate wins.
MAP_LINK_MATCHERS: List[Tuple[str, MapLinkMatcher]] = [
    ("query", regex_matcher(r"[?&]q=" + _NUMBER + r"\s*,\s*" + _NUMBER)),
    ("ll", regex_matcher(r"[?&]ll=" + _NUMBER + r"\s*,\s*" + _NUMBER)),
    ("center", regex_matcher(r"[?&]center=" + _NUMBER + r"\s*,\s*" + _NUMBER)),
    ("at", regex_matcher(r"@" + _NUMBER + r"," + _NUMBER)),
    ("embed", regex_matcher(r"!3d" + _NUMBER + r"!4d" + _NUMBER)),
    ("path", regex_matcher(r"(?:maps/|place/|^)" + r"(-?\d+\.\d+)" + r"," + r"(-?\d+\.\d+)")),
]


def is_short_link(url: str) -> bool:
    lowered = url.lower()
    return any(host in lowered for host in SHORT_LINK_HOSTS)


def is_maps_url(url: str) -> bool:
    lowered = url.lower()
    return is_short_link(lowered) or any(marker in lowered for marker in MAPS_URL_MARKERS)


def extract_from_map_link(
    url: Optional[str],
    default: Coordinate = DEFAULT_CITY_CENTER
) -> Optional[Coordinate]:
    """
    Try to extract coordinates from a Google Maps link.

    Supported formats:
        https://www.google.com/maps?q=12.9716,77.5946
        https://maps.google.com/?ll=12.9716,77.5946
        https://www.google.com/maps/@?api=1&map_action=map&center=12.97,77.59
        https://www.google.com/maps/@12.9716,77.5946,15z
        https://www.google.com/maps/place/X/data=!3d12.9716!4d77.5946

    Short links (maps.app.goo.gl) and Maps URLs without a recognisable
    pattern resolve to the default city centre. Anything that is not a Maps
    URL returns None.

    Args:
        url: Map-sharing URL
        default: Fallback coordinate for unresolvable Maps links

    Returns:
        Coordinate or None
    """
    if not url or not str(url).strip():
        return None

    url = unquote(str(url).strip())

    if is_short_link(url):
        log_structured("debug", "Short map link cannot be resolved offline", url=url)
        return default

    for name, matcher in MAP_LINK_MATCHERS:
        coordinate = matcher(url)
        if coordinate is not None:
            log_structured("debug", "Extracted coordinates from map link", matcher=name)
            return coordinate

    if is_maps_url(url):
        log_structured("debug", "No coordinates in map link, using default", url=url)
        return default

    log_structured("debug", "Could not extract coordinates from map link", url=url)
    return None
