"""Base class for gazetteer providers."""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from localfind.core.models import Coordinate


class GazetteerProvider(ABC):
    """Base class for place name lookup tables."""

    @abstractmethod
    def lookup(self, text: str) -> Optional[Coordinate]:
        """
        Find the coordinate of a place mentioned in the text.

        Args:
            text: Free text location string

        Returns:
            Coordinate of the first matching place or None
        """
        pass

    @abstractmethod
    def entries(self) -> List[Tuple[str, Coordinate]]:
        """Get all (name, coordinate) pairs in lookup order."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get provider name."""
        pass
