"""Recompute ratings use case."""

from uuid import UUID

from pydantic import BaseModel

from encore.application.usecase.base import BaseUseCase
from encore.domain.service import RatingService
from encore.domain.value import OwnerId


class RecomputeRatingsRequest(BaseModel):
    """Recompute ratings request."""

    owner_id: UUID


class RecomputeRatingsResponse(BaseModel):
    """Recompute ratings response."""

    records: int
    comparisons: int


class RecomputeRatingsUseCase(BaseUseCase[RecomputeRatingsRequest, RecomputeRatingsResponse]):
    """Use case for rebuilding an owner's ratings from the ledger.

    Repairs records flagged after a failed update, and picks up deletions
    that removed ledger rows.
    """

    def __init__(self, rating_service: RatingService) -> None:
        """Initialize recompute ratings use case.

        Args:
            rating_service: Rating domain service
        """
        self.rating_service = rating_service

    async def execute(self, request: RecomputeRatingsRequest) -> RecomputeRatingsResponse:
        """Execute recompute flow."""
        owner_id = OwnerId(request.owner_id)
        records = await self.rating_service.recompute(owner_id)
        # Every comparison bumps two records by one
        comparisons = sum(record.comparisons_count for record in records) // 2

        return RecomputeRatingsResponse(records=len(records), comparisons=comparisons)
