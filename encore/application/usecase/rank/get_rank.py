"""Get rank use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from encore.application.usecase.base import BaseUseCase
from encore.domain.service import RankService, RatingService
from encore.domain.value import Confidence, ItemId, OwnerId, RankScope


class GetRankRequest(BaseModel):
    """Get rank request."""

    owner_id: UUID
    item_id: UUID
    scope: RankScope = RankScope.ALL_TIME
    category: str | None = None
    as_of: datetime | None = None  # Reference time for the scope, defaults to now


class GetRankResponse(BaseModel):
    """Get rank response."""

    item_id: str
    scope: RankScope
    position: int  # 0 when the show is not ranked in this scope
    total: int
    percentile: float
    elo_score: float | None
    comparisons_count: int
    confidence: Confidence


class GetRankUseCase(BaseUseCase[GetRankRequest, GetRankResponse]):
    """Use case for the rank of one show within a scope."""

    def __init__(self, rank_service: RankService, rating_service: RatingService) -> None:
        """Initialize get rank use case.

        Args:
            rank_service: Rank domain service
            rating_service: Rating domain service
        """
        self.rank_service = rank_service
        self.rating_service = rating_service

    async def execute(self, request: GetRankRequest) -> GetRankResponse:
        """Execute get rank flow.

        Raises:
            NotFoundError: If the show is unknown to the owner
        """
        owner_id = OwnerId(request.owner_id)
        item_id = ItemId(request.item_id)

        result = await self.rank_service.compute_rank(
            owner_id,
            item_id,
            request.scope,
            request.as_of or datetime.now(),
            category=request.category,
        )
        record = await self.rating_service.get_or_create(owner_id, item_id)

        return GetRankResponse(
            item_id=str(item_id),
            scope=request.scope,
            position=result.position,
            total=result.total,
            percentile=result.percentile,
            elo_score=record.elo_score if record.is_persisted else None,
            comparisons_count=record.comparisons_count,
            confidence=self.rating_service.confidence(record),
        )
