"""Place name lookup tables."""
from localfind.gazetteers.base import GazetteerProvider
from localfind.gazetteers.static import StaticGazetteer, KNOWN_CITIES

__all__ = ["GazetteerProvider", "StaticGazetteer", "KNOWN_CITIES"]
