from abc import ABC, abstractmethod
from typing import Any


class NormalizerInterface(ABC):
    """Converts a field value to the format a search engine expects for a data type."""

    @abstractmethod
    def normalize(self, value: Any) -> Any:
        """
        Returns the normalized value. Must not modify the passed value.
        """
        pass
