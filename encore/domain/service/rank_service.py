"""Rank domain service.

Ranks are derived on every call from (shows, now, scope); nothing is cached,
so year and month rollovers or edited show dates never leave a stale view.
"""

from datetime import datetime
from typing import Iterable, Optional, Sequence

import logfire

from encore.domain.error import NotFoundError
from encore.domain.model.common import DomainModel
from encore.domain.model.rating import RatingRecord
from encore.domain.model.show import Show
from encore.domain.repository import RatingRepository, ShowRepository
from encore.domain.value import ItemId, OwnerId, RankResult, RankScope

from .base import Service


class RankedShow(DomainModel):
    """One row of a scoped ranking."""

    item_id: ItemId
    position: int
    elo_score: float
    comparisons_count: int
    percentile: float


def shows_in_scope(
    shows: Iterable[Show],
    now: datetime,
    scope: RankScope,
    category: Optional[str] = None,
) -> list[Show]:
    """Filter shows down to a time scope and optional category."""
    return [
        show
        for show in shows
        if scope.contains(show.occurred_on, now)
        and (category is None or show.category == category)
    ]


def order_ratings(records: Iterable[RatingRecord]) -> list[RatingRecord]:
    """Sort records best first; equal scores fall back to ascending show ID."""
    return sorted(records, key=lambda record: (-record.elo_score, str(record.item_id)))


def percentile(position: int, total: int) -> float:
    """Share of the ranking at or below ``position``, in percent."""
    if position <= 0 or total <= 0:
        return 0.0
    return (total - position + 1) / total * 100


class RankService(Service):
    """Domain service computing ranks and percentiles."""

    def __init__(
        self, show_repository: ShowRepository, rating_repository: RatingRepository
    ) -> None:
        """Initialize rank service.

        Args:
            show_repository: Show repository
            rating_repository: Rating repository
        """
        self.show_repository = show_repository
        self.rating_repository = rating_repository

    async def _scoped_ranking(
        self,
        owner_id: OwnerId,
        scope: RankScope,
        now: datetime,
        category: Optional[str],
    ) -> list[RatingRecord]:
        shows = await self.show_repository.find_by_owner(owner_id)
        in_scope = shows_in_scope(shows, now, scope, category)
        ratings = await self.rating_repository.find_many(
            owner_id, [show.id for show in in_scope]
        )
        # Shows never compared are left out of the ranking entirely
        rated = [record for record in ratings.values() if record.comparisons_count > 0]
        return order_ratings(rated)

    async def compute_rank(
        self,
        owner_id: OwnerId,
        item_id: ItemId,
        scope: RankScope,
        now: datetime,
        category: Optional[str] = None,
    ) -> RankResult:
        """Compute the position of one show within a scope.

        Args:
            owner_id: Owner ID
            item_id: Show to locate
            scope: Time scope applied before ranking
            now: Reference time for the scope
            category: Optional show type filter

        Returns:
            Position (0 if the show is not ranked in scope), total ranked
            shows in scope and percentile

        Raises:
            NotFoundError: If the show does not exist or belongs to someone else
        """
        with logfire.span(
            "rank_service.compute_rank",
            owner_id=str(owner_id),
            item_id=str(item_id),
            scope=scope.value,
        ):
            show = await self.show_repository.find_by_id(item_id)
            if show is None or show.owner_id != owner_id:
                logfire.warn("Rank requested for unknown show", item_id=str(item_id))
                raise NotFoundError("Show", str(item_id))

            ranking = await self._scoped_ranking(owner_id, scope, now, category)
            total = len(ranking)
            position = next(
                (
                    index
                    for index, record in enumerate(ranking, start=1)
                    if record.item_id == item_id
                ),
                0,
            )

            return RankResult(
                position=position,
                total=total,
                percentile=percentile(position, total),
            )

    async def list_rankings(
        self,
        owner_id: OwnerId,
        scope: RankScope,
        now: datetime,
        category: Optional[str] = None,
    ) -> Sequence[RankedShow]:
        """List an owner's ranked shows within a scope, best first."""
        with logfire.span(
            "rank_service.list_rankings", owner_id=str(owner_id), scope=scope.value
        ):
            ranking = await self._scoped_ranking(owner_id, scope, now, category)
            total = len(ranking)
            return [
                RankedShow(
                    item_id=record.item_id,
                    position=position,
                    elo_score=record.elo_score,
                    comparisons_count=record.comparisons_count,
                    percentile=percentile(position, total),
                )
                for position, record in enumerate(ranking, start=1)
            ]
