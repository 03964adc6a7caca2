"""Domain value objects for the ranking engine."""

from encore.domain.value.identifiers import ComparisonId, ItemId, OwnerId
from encore.domain.value.types import (
    Confidence,
    EloUpdate,
    NormalizedPair,
    RankResult,
    RankScope,
)

__all__ = [
    # Identifiers
    "OwnerId",
    "ItemId",
    "ComparisonId",
    # Types
    "Confidence",
    "EloUpdate",
    "NormalizedPair",
    "RankResult",
    "RankScope",
]
