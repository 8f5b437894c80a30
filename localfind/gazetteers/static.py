"""Built-in gazetteer of major Indian cities."""
from typing import Dict, List, Optional, Tuple

from localfind.core.models import Coordinate
from localfind.gazetteers.base import GazetteerProvider


# Insertion order is the match order: the first name found in the text wins.
KNOWN_CITIES: Dict[str, Coordinate] = {
    "bengaluru": Coordinate(12.9716, 77.5946),
    "bangalore": Coordinate(12.9716, 77.5946),
    "mumbai": Coordinate(19.0760, 72.8777),
    "delhi": Coordinate(28.6139, 77.2090),
    "hyderabad": Coordinate(17.3850, 78.4867),
    "ahmedabad": Coordinate(23.0225, 72.5714),
    "chennai": Coordinate(13.0827, 80.2707),
    "kolkata": Coordinate(22.5726, 88.3639),
    "surat": Coordinate(21.1702, 72.8311),
    "pune": Coordinate(18.5204, 73.8567),
    "jaipur": Coordinate(26.9124, 75.7873),
    "lucknow": Coordinate(26.8467, 80.9462),
    "kanpur": Coordinate(26.4499, 80.3319),
    "nagpur": Coordinate(21.1458, 79.0882),
    "indore": Coordinate(22.7196, 75.8577),
    "bhopal": Coordinate(23.2599, 77.4126),
}


class StaticGazetteer(GazetteerProvider):
    """In-memory gazetteer matched by case-insensitive substring."""

    def __init__(self, places: Optional[Dict[str, Coordinate]] = None):
        """
        Initialize gazetteer.

        Args:
            places: Ordered mapping of place name to coordinate
                (defaults to KNOWN_CITIES)
        """
        source = KNOWN_CITIES if places is None else places
        self._places: List[Tuple[str, Coordinate]] = [
            (name.lower(), coordinate) for name, coordinate in source.items()
        ]

    def lookup(self, text: str) -> Optional[Coordinate]:
        if not text:
            return None
        lowered = text.lower()
        for name, coordinate in self._places:
            if name in lowered:
                return coordinate
        return None

    def entries(self) -> List[Tuple[str, Coordinate]]:
        return list(self._places)

    def get_name(self) -> str:
        return "static"
