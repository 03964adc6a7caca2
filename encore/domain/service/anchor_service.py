"""Anchor selection domain service.

Chooses which existing show a show should be compared against next. The
service only reads ratings and the ledger; its output is advisory, so a
stale read at worst yields a less informative pairing.
"""

import random
from itertools import combinations
from typing import Optional, Sequence

import logfire

from encore.config import AnchorSettings, MatchupSettings, RankingSettings
from encore.domain.model.comparison import ComparisonRecord
from encore.domain.model.show import Show
from encore.domain.repository import ComparisonRepository, RatingRepository
from encore.domain.value import ItemId, NormalizedPair, OwnerId

from . import pairing
from .base import Service


class AnchorService(Service):
    """Domain service for anchor and matchup selection."""

    def __init__(
        self,
        rating_repository: RatingRepository,
        comparison_repository: ComparisonRepository,
        anchor_settings: AnchorSettings,
        matchup_settings: MatchupSettings,
        ranking_settings: RankingSettings,
    ) -> None:
        """Initialize anchor service.

        Args:
            rating_repository: Rating repository (read only)
            comparison_repository: Comparison ledger (read only)
            anchor_settings: Anchor scoring weights
            matchup_settings: Matchup scoring configuration
            ranking_settings: Elo configuration (default rating)
        """
        self.rating_repository = rating_repository
        self.comparison_repository = comparison_repository
        self.anchor_settings = anchor_settings
        self.matchup_settings = matchup_settings
        self.ranking_settings = ranking_settings

    async def select_anchor(
        self,
        owner_id: OwnerId,
        target_item_id: ItemId,
        candidate_pool: Sequence[Show],
        seed: int,
    ) -> Optional[ItemId]:
        """Pick the show that will tell us most about ``target_item_id``.

        Candidates the target has not met yet are scored and one of the best
        is drawn with the seeded generator. When the target has already met
        every candidate, the draw is uniform over the whole pool.

        Args:
            owner_id: Owner ID
            target_item_id: Show that needs a comparison partner
            candidate_pool: Shows to choose from
            seed: Seed for the tie-breaking draw

        Returns:
            The chosen show ID, or None if no candidate remains after
            excluding the target and shows of other owners
        """
        with logfire.span(
            "anchor_service.select_anchor",
            owner_id=str(owner_id),
            target_item_id=str(target_item_id),
            pool_size=len(candidate_pool),
            seed=seed,
        ):
            candidates = _own_shows(owner_id, candidate_pool, exclude=target_item_id)
            if not candidates:
                logfire.info("No anchor candidates", target_item_id=str(target_item_id))
                return None

            rng = random.Random(seed)
            history = await self.comparison_repository.find_by_item(
                owner_id, target_item_id
            )
            met = {comparison.pair.other(target_item_id) for comparison in history}
            fresh = [show for show in candidates if show.id not in met]

            if not fresh:
                anchor = rng.choice(candidates).id
                logfire.info(
                    "Target met every candidate, uniform anchor",
                    target_item_id=str(target_item_id),
                    anchor_id=str(anchor),
                )
                return anchor

            ratings = await self.rating_repository.find_many(
                owner_id, [show.id for show in candidates]
            )
            rated = [record for record in ratings.values() if record.comparisons_count > 0]
            median_elo = pairing.median_rating(rated, self.ranking_settings.default_rating)
            median_count = pairing.median_comparisons(rated)

            scored = sorted(
                (
                    (
                        pairing.anchor_score(
                            ratings.get(show.id),
                            median_elo,
                            median_count,
                            self.ranking_settings.default_rating,
                            self.anchor_settings,
                        ),
                        show.id,
                    )
                    for show in fresh
                ),
                key=lambda scored_id: (-scored_id[0], str(scored_id[1])),
            )
            top = scored[: max(1, self.anchor_settings.top_n)]
            score, anchor = rng.choice(top)

            logfire.info(
                "Anchor selected",
                target_item_id=str(target_item_id),
                anchor_id=str(anchor),
                score=score,
                fresh_candidates=len(fresh),
            )
            return anchor

    async def select_matchup(
        self, owner_id: OwnerId, shows: Sequence[Show], seed: int
    ) -> Optional[tuple[ItemId, ItemId]]:
        """Pick the next most informative pair among an owner's shows.

        Pairs already compared, or whose outcome follows from a chain of
        recorded wins, are skipped.

        Args:
            owner_id: Owner ID
            shows: The owner's shows
            seed: Seed for the draw among the best pairs

        Returns:
            The pair to compare next, or None if nothing useful remains
        """
        with logfire.span(
            "anchor_service.select_matchup", owner_id=str(owner_id), seed=seed
        ):
            candidates = _own_shows(owner_id, shows)
            if len(candidates) < 2:
                return None

            scored = await self._score_open_pairs(owner_id, candidates)
            if not scored:
                logfire.info("No open matchups", owner_id=str(owner_id))
                return None

            scored.sort(key=lambda item: (-item[0], str(item[1].low), str(item[1].high)))
            top = scored[: max(1, self.matchup_settings.top_n)]
            _, pair = random.Random(seed).choice(top)

            logfire.info(
                "Matchup selected",
                owner_id=str(owner_id),
                low=str(pair.low),
                high=str(pair.high),
                open_pairs=len(scored),
            )
            return pair.low, pair.high

    async def rankings_complete(self, owner_id: OwnerId, shows: Sequence[Show]) -> bool:
        """Whether an owner's rankings are settled enough to stop asking.

        Requires enough comparisons overall and per show, and no remaining
        pair scoring above the configured value threshold.

        Args:
            owner_id: Owner ID
            shows: The owner's shows

        Returns:
            True if more comparisons would add little
        """
        candidates = _own_shows(owner_id, shows)
        if len(candidates) < 2:
            return True

        settings = self.matchup_settings
        comparisons = await self.comparison_repository.find_by_owner(owner_id)
        required = max(settings.min_total_comparisons, len(candidates) * 2)
        if len(comparisons) < required:
            return False
        if len(comparisons) / len(candidates) < settings.min_comparisons_per_item:
            return False

        scored = await self._score_open_pairs(owner_id, candidates, comparisons)
        return all(score <= settings.remaining_value_threshold for score, _ in scored)

    async def _score_open_pairs(
        self,
        owner_id: OwnerId,
        candidates: Sequence[Show],
        comparisons: Optional[list[ComparisonRecord]] = None,
    ) -> list[tuple[float, NormalizedPair]]:
        if comparisons is None:
            comparisons = await self.comparison_repository.find_by_owner(owner_id)
        graph = pairing.build_beats_graph(comparisons)
        seen = pairing.compared_pairs(comparisons)
        ratings = await self.rating_repository.find_many(
            owner_id, [show.id for show in candidates]
        )

        scored: list[tuple[float, NormalizedPair]] = []
        for first, second in combinations(candidates, 2):
            pair = NormalizedPair.of(first.id, second.id)
            if pair in seen:
                continue
            if pairing.is_implied(pair, graph, self.matchup_settings.transitive_depth):
                continue
            score = pairing.pair_score(
                pairing.rated_or_none(ratings, first.id),
                pairing.rated_or_none(ratings, second.id),
                self.matchup_settings,
            )
            scored.append((score, pair))
        return scored


def _own_shows(
    owner_id: OwnerId, shows: Sequence[Show], exclude: Optional[ItemId] = None
) -> list[Show]:
    """Owner's shows without duplicates, in a stable order."""
    unique = {
        show.id: show
        for show in shows
        if show.owner_id == owner_id and show.id != exclude
    }
    return sorted(unique.values(), key=lambda show: str(show.id))
