"""Configuration management for the ranking core."""
import os
from typing import List
from dotenv import load_dotenv

from localfind.core.models import Coordinate

# Load environment variables from .env file
load_dotenv()

# Default city centre (Bengaluru). Every fallback coordinate comes from here.
DEFAULT_CITY_LAT: float = float(os.getenv("DEFAULT_CITY_LAT", "12.9716"))
DEFAULT_CITY_LNG: float = float(os.getenv("DEFAULT_CITY_LNG", "77.5946"))
DEFAULT_CITY_CENTER = Coordinate(DEFAULT_CITY_LAT, DEFAULT_CITY_LNG)

# Sentinel location string that asks for device geolocation
CURRENT_LOCATION = "Current Location"
GEOLOCATION_TIMEOUT_SECONDS: float = float(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "10"))

# Postal code placeholder geocoding (not real geocoding)
POSTAL_CODE_PATTERN = r"^[1-9][0-9]{5}$"
POSTAL_BASE_LAT = 20.5937
POSTAL_BASE_LNG = 78.9629

# Relevance settings. Both constants are empirical and tunable.
LOCATION_TERM_BOOST: float = float(os.getenv("LOCATION_TERM_BOOST", "10"))
COVERAGE_THRESHOLD: float = float(os.getenv("COVERAGE_THRESHOLD", "0.35"))

# Neighbourhoods recognised inside free-text queries
LOCATION_TERMS: List[str] = [
    "indiranagar",
    "koramangala",
    "jayanagar",
    "whitefield",
    "richmond",
    "nagarbhavi",
]

# Fuzzy suggestion settings
SUGGESTION_THRESHOLD: float = float(os.getenv("SUGGESTION_THRESHOLD", "0.6"))
SUGGESTION_CITY = os.getenv("SUGGESTION_CITY", "Bangalore")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
