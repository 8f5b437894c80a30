"""Coordinate resolution for free text locations, postal codes and map links."""
import re
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Callable, Optional, Tuple, Union

from localfind.core.config import (
    CURRENT_LOCATION,
    DEFAULT_CITY_CENTER,
    GEOLOCATION_TIMEOUT_SECONDS,
    POSTAL_BASE_LAT,
    POSTAL_BASE_LNG,
    POSTAL_CODE_PATTERN,
)
from localfind.core.map_links import extract_from_map_link
from localfind.core.models import Coordinate, MapLink
from localfind.gazetteers.base import GazetteerProvider
from localfind.gazetteers.static import StaticGazetteer
from localfind.utils.logging import log_structured


class GeolocationError(Exception):
    """Raised by geolocation providers when a position is unavailable or denied."""


# A device geolocation capability: returns (lat, lng) or raises GeolocationError
GeolocationProvider = Callable[[], Tuple[float, float]]

# (label, lat range, lng range) boxes for turning a position into a city label
REVERSE_GEOCODE_BOXES = [
    ("Bengaluru, Karnataka", (12.5, 13.5), (77.0, 78.0)),
    ("Mumbai, Maharashtra", (18.5, 19.5), (72.5, 73.5)),
    ("New Delhi, Delhi", (28.5, 29.5), (77.0, 78.0)),
]

_POSTAL_CODE_RE = re.compile(POSTAL_CODE_PATTERN)
_URL_RE = re.compile(r"^(https?://|www\.)|google\.com/maps|goo\.gl/", re.IGNORECASE)


def postal_code_coordinate(postal_code: str) -> Optional[Coordinate]:
    """
    Derive a deterministic placeholder coordinate for an Indian postal code.

    This is not real geocoding: the same code always maps to the same point
    near the geographic centre of India.

    Args:
        postal_code: Six digit postal code

    Returns:
        Coordinate, or None if the text is not a postal code
    """
    code = (postal_code or "").strip()
    if not _POSTAL_CODE_RE.match(code):
        return None

    seed = int(code) % 1000
    lat = POSTAL_BASE_LAT + (seed % 10) / 10
    lng = POSTAL_BASE_LNG + (seed % 15) / 10
    return Coordinate(lat, lng)


class CoordinateResolver:
    """Turns location-ish input into a coordinate, never failing."""

    def __init__(
        self,
        gazetteer: Optional[GazetteerProvider] = None,
        default: Coordinate = DEFAULT_CITY_CENTER,
        geolocation: Optional[GeolocationProvider] = None,
        timeout: float = GEOLOCATION_TIMEOUT_SECONDS
    ):
        """
        Initialize resolver.

        Args:
            gazetteer: Place name table (defaults to the built-in city list)
            default: Coordinate returned when nothing else resolves
            geolocation: Device position provider used for "Current Location"
            timeout: Seconds to wait for the geolocation provider
        """
        self.gazetteer = gazetteer or StaticGazetteer()
        self.default = default
        self.geolocation = geolocation
        self.timeout = timeout

    def resolve(self, value: Union[str, MapLink, None]) -> Coordinate:
        """
        Resolve a location to a coordinate.

        Resolution order:
        1. "Current Location" via device geolocation
        2. Six digit postal code placeholder
        3. Map-sharing URL
        4. Gazetteer substring match
        5. Default city centre

        Args:
            value: Free text, postal code, URL or MapLink

        Returns:
            Coordinate (always finite)
        """
        if isinstance(value, MapLink):
            return self.extract_from_map_link(value.url) or self.default

        text = (value or "").strip() if isinstance(value, str) else ""
        if not text:
            return self.default

        if text == CURRENT_LOCATION:
            return self.locate_device() or self.default

        postal = postal_code_coordinate(text)
        if postal is not None:
            return postal

        if _URL_RE.search(text):
            from_link = self.extract_from_map_link(text)
            if from_link is not None:
                return from_link

        from_gazetteer = self.gazetteer.lookup(text)
        if from_gazetteer is not None:
            return from_gazetteer

        log_structured("debug", "Location not resolved, using default", input_text=text)
        return self.default

    def extract_from_map_link(self, url: Optional[str]) -> Optional[Coordinate]:
        return extract_from_map_link(url, default=self.default)

    def locate_device(self) -> Optional[Coordinate]:
        """
        Ask the geolocation provider for the current position.

        The provider runs in a worker thread and is given at most
        `self.timeout` seconds. Denial, timeout, provider errors and invalid
        positions all return None; there is no retry.
        """
        if self.geolocation is None:
            log_structured("warning", "No geolocation provider configured")
            return None

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="geolocation")
        future = executor.submit(self.geolocation)
        try:
            position = future.result(timeout=self.timeout)
        except FutureTimeoutError:
            log_structured("warning", "Geolocation timed out", timeout_seconds=self.timeout)
            return None
        except GeolocationError as e:
            log_structured("warning", "Geolocation unavailable", reason=str(e))
            return None
        except Exception as e:
            log_structured(
                "warning",
                "Geolocation provider failed",
                error_type=type(e).__name__,
                reason=str(e),
            )
            return None
        finally:
            executor.shutdown(wait=False)

        try:
            lat, lng = position
        except (TypeError, ValueError):
            lat, lng = None, None

        coordinate = Coordinate.from_values(lat, lng)
        if coordinate is None:
            log_structured("warning", "Geolocation returned invalid coordinates", position=position)
        return coordinate

    def reverse_geocode(self, coordinate: Optional[Coordinate]) -> str:
        """Approximate a city label for a position, or "Current Location"."""
        if coordinate is None or not coordinate.is_valid():
            return CURRENT_LOCATION
        for label, (lat_min, lat_max), (lng_min, lng_max) in REVERSE_GEOCODE_BOXES:
            if lat_min < coordinate.lat < lat_max and lng_min < coordinate.lng < lng_max:
                return label
        return CURRENT_LOCATION
