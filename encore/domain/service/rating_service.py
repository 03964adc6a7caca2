"""Rating domain service."""

from datetime import datetime
from typing import Sequence

import logfire
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from encore.config import RankingSettings
from encore.domain.error import ConcurrencyConflict, PersistenceError, ValidationError
from encore.domain.model.common import DomainModel
from encore.domain.model.rating import RatingRecord
from encore.domain.repository import ComparisonRepository, RatingRepository
from encore.domain.value import Confidence, ItemId, OwnerId

from . import elo
from .base import Service


class RatingChange(DomainModel):
    """Both records after a comparison was applied."""

    winner: RatingRecord
    loser: RatingRecord


class RatingService(Service):
    """Domain service owning every write to rating records."""

    def __init__(
        self,
        rating_repository: RatingRepository,
        comparison_repository: ComparisonRepository,
        ranking_settings: RankingSettings,
    ) -> None:
        """Initialize rating service.

        Args:
            rating_repository: Rating repository
            comparison_repository: Comparison ledger, read when rebuilding
            ranking_settings: Elo configuration
        """
        self.rating_repository = rating_repository
        self.comparison_repository = comparison_repository
        self.settings = ranking_settings

    def default_record(self, owner_id: OwnerId, item_id: ItemId) -> RatingRecord:
        """Transient record for a show that was never compared."""
        return RatingRecord(
            owner_id=owner_id,
            item_id=item_id,
            elo_score=self.settings.default_rating,
            comparisons_count=0,
        )

    async def get_or_create(self, owner_id: OwnerId, item_id: ItemId) -> RatingRecord:
        """Get the rating of a show, or a default one if none is stored.

        The default is not written; records are created by the first
        applied comparison.

        Args:
            owner_id: Owner ID
            item_id: Show ID

        Returns:
            Stored or default rating record
        """
        record = await self.rating_repository.find(owner_id, item_id)
        return record or self.default_record(owner_id, item_id)

    async def apply_comparison(
        self, owner_id: OwnerId, winner_id: ItemId, loser_id: ItemId
    ) -> RatingChange:
        """Apply one outcome to both ratings as a single atomic unit.

        Lost races are retried with backoff; once the retry budget is spent
        the conflict is escalated.

        Args:
            owner_id: Owner ID
            winner_id: Show that won
            loser_id: Show that lost

        Returns:
            Both updated records

        Raises:
            ValidationError: If winner and loser are the same show
            PersistenceError: If the store failed or conflicts persisted
        """
        if winner_id == loser_id:
            raise ValidationError("A show cannot be compared with itself")

        with logfire.span(
            "rating_service.apply_comparison",
            owner_id=str(owner_id),
            winner_id=str(winner_id),
            loser_id=str(loser_id),
        ):
            try:
                async for attempt in AsyncRetrying(
                    stop=stop_after_attempt(self.settings.max_conflict_retries),
                    wait=wait_random_exponential(
                        min=self.settings.retry_min_wait,
                        max=self.settings.retry_max_wait,
                    ),
                    retry=retry_if_exception_type(ConcurrencyConflict),
                ):
                    with attempt:
                        change = await self._apply_once(owner_id, winner_id, loser_id)
            except RetryError as e:
                logfire.error(
                    "Rating update kept conflicting",
                    owner_id=str(owner_id),
                    attempts=self.settings.max_conflict_retries,
                )
                raise PersistenceError(
                    "Rating update could not be applied after "
                    f"{self.settings.max_conflict_retries} attempts"
                ) from e

            logfire.info(
                "Comparison applied",
                winner_id=str(winner_id),
                winner_elo=change.winner.elo_score,
                loser_id=str(loser_id),
                loser_elo=change.loser.elo_score,
            )
            return change

    async def _apply_once(
        self, owner_id: OwnerId, winner_id: ItemId, loser_id: ItemId
    ) -> RatingChange:
        """Read, compute and conditionally write both records once."""
        stored = await self.rating_repository.find_many(owner_id, [winner_id, loser_id])
        winner = stored.get(winner_id) or self.default_record(owner_id, winner_id)
        loser = stored.get(loser_id) or self.default_record(owner_id, loser_id)

        result = elo.update(
            winner.elo_score,
            loser.elo_score,
            k=self._k_for(winner),
            loser_k=self._k_for(loser),
        )
        new_winner = winner.applied(result.new_winner_rating)
        new_loser = loser.applied(result.new_loser_rating)

        written = await self.rating_repository.compare_and_swap(
            owner_id,
            [
                (winner.comparisons_count, new_winner),
                (loser.comparisons_count, new_loser),
            ],
        )
        if not written:
            logfire.warn(
                "Rating write conflict",
                owner_id=str(owner_id),
                winner_id=str(winner_id),
                loser_id=str(loser_id),
            )
            raise ConcurrencyConflict(str(owner_id), [str(winner_id), str(loser_id)])

        return RatingChange(winner=new_winner, loser=new_loser)

    def _k_for(self, record: RatingRecord) -> float:
        return elo.provisional_k_factor(
            self.settings.k_factor,
            record.comparisons_count,
            self.settings.provisional_comparisons,
        )

    async def mark_pending_recompute(
        self, owner_id: OwnerId, item_ids: Sequence[ItemId]
    ) -> None:
        """Flag ratings whose update could not be completed.

        Args:
            owner_id: Owner ID
            item_ids: Shows whose records diverge from the ledger
        """
        with logfire.span(
            "rating_service.mark_pending_recompute",
            owner_id=str(owner_id),
            item_ids=[str(i) for i in item_ids],
        ):
            await self.rating_repository.mark_pending(owner_id, item_ids)
            logfire.warn(
                "Ratings marked for recompute",
                owner_id=str(owner_id),
                count=len(item_ids),
            )

    async def recompute(self, owner_id: OwnerId) -> list[RatingRecord]:
        """Rebuild every rating of an owner by replaying the ledger.

        Clears all pending-recompute flags.

        Args:
            owner_id: Owner ID

        Returns:
            The rebuilt records
        """
        with logfire.span("rating_service.recompute", owner_id=str(owner_id)):
            comparisons = await self.comparison_repository.find_by_owner(owner_id)
            records: dict[ItemId, RatingRecord] = {}

            for comparison in comparisons:
                winner_id, loser_id = comparison.winner_id, comparison.loser_id
                winner = records.get(winner_id) or self.default_record(owner_id, winner_id)
                loser = records.get(loser_id) or self.default_record(owner_id, loser_id)
                result = elo.update(
                    winner.elo_score,
                    loser.elo_score,
                    k=self._k_for(winner),
                    loser_k=self._k_for(loser),
                )
                records[winner_id] = winner.applied(result.new_winner_rating)
                records[loser_id] = loser.applied(result.new_loser_rating)

            rebuilt = [
                record.model_copy(update={"updated_at": datetime.now()})
                for record in records.values()
            ]
            await self.rating_repository.replace_all(owner_id, rebuilt)

            logfire.info(
                "Ratings recomputed from ledger",
                owner_id=str(owner_id),
                comparisons=len(comparisons),
                records=len(rebuilt),
            )
            return rebuilt

    def confidence(self, record: RatingRecord | None) -> Confidence:
        """Describe how settled a rating is.

        Args:
            record: Stored record, or None for a show never compared

        Returns:
            Confidence level
        """
        if record is None or record.comparisons_count == 0:
            return Confidence.UNRATED
        if record.comparisons_count >= self.settings.established_threshold:
            return Confidence.ESTABLISHED
        return Confidence.PROVISIONAL
