"""Domain services."""

from .anchor_service import AnchorService
from .base import Service
from .jwt_service import JWTService
from .ledger_service import ComparisonOutcome, LedgerService
from .rank_service import RankedShow, RankService
from .rating_service import RatingChange, RatingService

__all__ = [
    "AnchorService",
    "ComparisonOutcome",
    "JWTService",
    "LedgerService",
    "RankedShow",
    "RankService",
    "RatingChange",
    "RatingService",
    "Service",
]
