"""Record comparison use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from encore.application.usecase.base import BaseUseCase
from encore.domain.service import LedgerService
from encore.domain.value import ItemId, OwnerId


class RecordComparisonRequest(BaseModel):
    """Record comparison request."""

    owner_id: UUID  # Owner ID from the authenticated session
    item_a: UUID
    item_b: UUID
    winner_id: UUID


class RecordComparisonResponse(BaseModel):
    """Record comparison response."""

    comparison_id: str
    winner_id: str
    loser_id: str
    new_winner_rating: float
    new_loser_rating: float


class RecordComparisonUseCase(BaseUseCase[RecordComparisonRequest, RecordComparisonResponse]):
    """Use case for recording which of two shows was better."""

    def __init__(self, ledger_service: LedgerService) -> None:
        """Initialize record comparison use case.

        Args:
            ledger_service: Comparison ledger domain service
        """
        self.ledger_service = ledger_service

    async def execute(self, request: RecordComparisonRequest) -> RecordComparisonResponse:
        """Execute record comparison flow.

        Args:
            request: The two shows and the winner

        Returns:
            Comparison ID and both new ratings

        Raises:
            ValidationError: If the comparison is malformed
            NotFoundError: If a show is unknown to the owner
            PersistenceError: If the write could not be completed
        """
        with logfire.span("record_comparison.execute", owner_id=str(request.owner_id)):
            outcome = await self.ledger_service.record_comparison(
                owner_id=OwnerId(request.owner_id),
                item_a=ItemId(request.item_a),
                item_b=ItemId(request.item_b),
                winner_id=ItemId(request.winner_id),
            )

            return RecordComparisonResponse(
                comparison_id=str(outcome.comparison_id),
                winner_id=str(outcome.winner_id),
                loser_id=str(outcome.loser_id),
                new_winner_rating=outcome.new_winner_rating,
                new_loser_rating=outcome.new_loser_rating,
            )
