"""Repository interfaces for the ranking domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from encore.domain.repository.comparison import ComparisonRepository
from encore.domain.repository.rating import RatingRepository
from encore.domain.repository.show import ShowRepository

__all__ = [
    "ComparisonRepository",
    "RatingRepository",
    "ShowRepository",
]
