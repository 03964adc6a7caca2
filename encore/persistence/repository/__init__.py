"""PostgreSQL repository implementations."""

from encore.persistence.repository.comparison import PostgresComparisonRepository
from encore.persistence.repository.rating import PostgresRatingRepository
from encore.persistence.repository.show import PostgresShowRepository

__all__ = [
    "PostgresComparisonRepository",
    "PostgresRatingRepository",
    "PostgresShowRepository",
]
