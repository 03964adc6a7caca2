"""Comparison ledger domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from encore.domain.error import NotFoundError, PersistenceError, ValidationError
from encore.domain.model.common import DomainModel
from encore.domain.model.comparison import ComparisonRecord
from encore.domain.repository import ComparisonRepository, ShowRepository
from encore.domain.value import ComparisonId, ItemId, NormalizedPair, OwnerId

from .base import Service
from .rating_service import RatingService


class ComparisonOutcome(DomainModel):
    """Result of a recorded comparison."""

    comparison_id: ComparisonId
    winner_id: ItemId
    loser_id: ItemId
    new_winner_rating: float
    new_loser_rating: float


class LedgerService(Service):
    """Domain service for the append-only comparison ledger."""

    def __init__(
        self,
        comparison_repository: ComparisonRepository,
        show_repository: ShowRepository,
        rating_service: RatingService,
    ) -> None:
        """Initialize ledger service.

        Args:
            comparison_repository: Comparison repository
            show_repository: Show repository, used to check ownership
            rating_service: Rating domain service
        """
        self.comparison_repository = comparison_repository
        self.show_repository = show_repository
        self.rating_service = rating_service

    async def record_comparison(
        self,
        owner_id: OwnerId,
        item_a: ItemId,
        item_b: ItemId,
        winner_id: ItemId,
    ) -> ComparisonOutcome:
        """Record which of two shows was better and update both ratings.

        The ledger row is appended first, then the ratings are updated. If
        the rating update fails the affected records are flagged for
        recompute and the error is raised: success is never reported for a
        comparison whose ratings were not applied.

        On PostgreSQL the ledger row and the flags share the request
        session with the failed rating write. That write is undone by its own
        savepoint, so the session stays usable; once the API has turned the
        error into a 503 the request commits and the ledger row and flags
        persist, as they do in memory. Only an exception that escapes the
        request rolls all of it back.

        Args:
            owner_id: Owner ID
            item_a: First show, in whatever order the UI presented it
            item_b: Second show
            winner_id: The show that won

        Returns:
            Comparison ID and both new ratings

        Raises:
            ValidationError: If the shows are the same or the winner is not one of them
            NotFoundError: If a show does not exist or belongs to someone else
            PersistenceError: If the ledger or the rating update could not be written
        """
        if item_a == item_b:
            raise ValidationError("A show cannot be compared with itself")
        if winner_id not in (item_a, item_b):
            raise ValidationError("Winner must be one of the compared shows")

        with logfire.span(
            "ledger_service.record_comparison",
            owner_id=str(owner_id),
            item_a=str(item_a),
            item_b=str(item_b),
            winner_id=str(winner_id),
        ):
            await self._ensure_owned(owner_id, [item_a, item_b])

            pair = NormalizedPair.of(item_a, item_b)
            loser_id = pair.other(winner_id)
            comparison = ComparisonRecord(
                id=ComparisonId(uuid4()),
                owner_id=owner_id,
                item_low_id=pair.low,
                item_high_id=pair.high,
                winner_id=winner_id,
                created_at=datetime.now(),
            )
            saved = await self.comparison_repository.save(comparison)

            try:
                change = await self.rating_service.apply_comparison(
                    owner_id, winner_id, loser_id
                )
            except PersistenceError as e:
                logfire.error(
                    "Rating update failed after ledger write",
                    comparison_id=str(saved.id),
                    error=str(e),
                )
                await self.rating_service.mark_pending_recompute(
                    owner_id, [winner_id, loser_id]
                )
                raise

            logfire.info(
                "Comparison recorded",
                comparison_id=str(saved.id),
                winner_id=str(winner_id),
                loser_id=str(loser_id),
            )
            return ComparisonOutcome(
                comparison_id=saved.id,
                winner_id=winner_id,
                loser_id=loser_id,
                new_winner_rating=change.winner.elo_score,
                new_loser_rating=change.loser.elo_score,
            )

    async def history(
        self, owner_id: OwnerId, item_id: Optional[ItemId] = None
    ) -> list[ComparisonRecord]:
        """Get ledger rows, oldest first.

        Args:
            owner_id: Owner ID
            item_id: Restrict to comparisons this show took part in

        Returns:
            Comparisons in creation order
        """
        if item_id is None:
            return await self.comparison_repository.find_by_owner(owner_id)
        return await self.comparison_repository.find_by_item(owner_id, item_id)

    async def _ensure_owned(self, owner_id: OwnerId, item_ids: list[ItemId]) -> None:
        shows = {show.id: show for show in await self.show_repository.find_many(item_ids)}
        for item_id in item_ids:
            show = shows.get(item_id)
            if show is None or show.owner_id != owner_id:
                logfire.warn(
                    "Comparison on unknown show",
                    owner_id=str(owner_id),
                    item_id=str(item_id),
                )
                raise NotFoundError("Show", str(item_id))
