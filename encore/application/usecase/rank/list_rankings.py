"""List rankings use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from encore.application.usecase.base import BaseUseCase
from encore.domain.service import RankService
from encore.domain.value import OwnerId, RankScope


class RankingItem(BaseModel):
    """Ranked show in response."""

    item_id: str
    position: int
    elo_score: float
    comparisons_count: int
    percentile: float


class ListRankingsRequest(BaseModel):
    """List rankings request."""

    owner_id: UUID
    scope: RankScope = RankScope.ALL_TIME
    category: str | None = None
    as_of: datetime | None = None


class ListRankingsResponse(BaseModel):
    """List rankings response."""

    scope: RankScope
    items: list[RankingItem]
    total: int


class ListRankingsUseCase(BaseUseCase[ListRankingsRequest, ListRankingsResponse]):
    """Use case for an owner's ranked list of shows."""

    def __init__(self, rank_service: RankService) -> None:
        """Initialize list rankings use case.

        Args:
            rank_service: Rank domain service
        """
        self.rank_service = rank_service

    async def execute(self, request: ListRankingsRequest) -> ListRankingsResponse:
        """Execute list rankings flow.

        Args:
            request: Scope and filters

        Returns:
            Ranked shows, best first
        """
        ranked = await self.rank_service.list_rankings(
            OwnerId(request.owner_id),
            request.scope,
            request.as_of or datetime.now(),
            category=request.category,
        )

        items = [
            RankingItem(
                item_id=str(entry.item_id),
                position=entry.position,
                elo_score=entry.elo_score,
                comparisons_count=entry.comparisons_count,
                percentile=entry.percentile,
            )
            for entry in ranked
        ]
        logfire.info("Rankings listed", scope=request.scope.value, count=len(items))

        return ListRankingsResponse(scope=request.scope, items=items, total=len(items))
