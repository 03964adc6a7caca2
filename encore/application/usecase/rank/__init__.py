"""Rank use cases."""

from .get_rank import GetRankRequest, GetRankResponse, GetRankUseCase
from .list_rankings import (
    ListRankingsRequest,
    ListRankingsResponse,
    ListRankingsUseCase,
    RankingItem,
)

__all__ = [
    "GetRankRequest",
    "GetRankResponse",
    "GetRankUseCase",
    "ListRankingsRequest",
    "ListRankingsResponse",
    "ListRankingsUseCase",
    "RankingItem",
]
