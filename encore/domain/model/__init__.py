"""Domain model entities for the ranking engine."""

from encore.domain.model.comparison import ComparisonRecord
from encore.domain.model.rating import DEFAULT_ELO, RatingRecord
from encore.domain.model.show import Show

__all__ = [
    "ComparisonRecord",
    "DEFAULT_ELO",
    "RatingRecord",
    "Show",
]
