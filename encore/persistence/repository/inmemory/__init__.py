"""In-memory repository implementations for testing."""

from .comparison import InMemoryComparisonRepository
from .rating import InMemoryRatingRepository
from .show import InMemoryShowRepository

__all__ = [
    "InMemoryComparisonRepository",
    "InMemoryRatingRepository",
    "InMemoryShowRepository",
]
