"""Unit tests for AnchorService."""

from datetime import datetime
from typing import Optional, Sequence, get_type_hints
from uuid import uuid4

import pytest

from encore.config import AnchorSettings, MatchupSettings, RankingSettings
from encore.domain.model import ComparisonRecord, RatingRecord, Show
from encore.domain.repository import ComparisonRepository, RatingRepository
from encore.domain.service import AnchorService
from encore.domain.value import ComparisonId, ItemId, NormalizedPair, OwnerId
from encore.persistence.repository.inmemory import (
    InMemoryComparisonRepository,
    InMemoryRatingRepository,
)
from tests.conftest import make_show
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _comparison(owner_id: OwnerId, winner: Show, loser: Show) -> ComparisonRecord:
    pair = NormalizedPair.of(winner.id, loser.id)
    return ComparisonRecord(
        id=ComparisonId(uuid4()),
        owner_id=owner_id,
        item_low_id=pair.low,
        item_high_id=pair.high,
        winner_id=winner.id,
        created_at=datetime.now(),
    )


def _rating(owner_id: OwnerId, show: Show, elo: float, count: int) -> RatingRecord:
    return RatingRecord(
        owner_id=owner_id, item_id=show.id, elo_score=elo, comparisons_count=count
    )


def _service(
    rating_repo: RatingRepository,
    comparison_repo: ComparisonRepository,
    anchor_settings: AnchorSettings | None = None,
) -> AnchorService:
    return AnchorService(
        rating_repository=rating_repo,
        comparison_repository=comparison_repo,
        anchor_settings=anchor_settings or AnchorSettings(),
        matchup_settings=MatchupSettings(),
        ranking_settings=RankingSettings(),
    )


class TestSelectAnchor:
    """Tests for select_anchor."""

    @pytest.mark.asyncio
    async def test_empty_pool_returns_none(self, unit_env, owner_id):
        """No candidates, no anchor."""
        anchor_service = await unit_env.get(AnchorService)

        anchor = await anchor_service.select_anchor(owner_id, ItemId(uuid4()), [], seed=1)

        assert anchor is None

    @pytest.mark.asyncio
    async def test_pool_of_only_the_target_returns_none(self, unit_env, owner_id):
        """A show is never its own anchor."""
        anchor_service = await unit_env.get(AnchorService)
        target = make_show(owner_id)

        anchor = await anchor_service.select_anchor(owner_id, target.id, [target], seed=1)

        assert anchor is None

    @pytest.mark.asyncio
    async def test_other_owners_shows_are_never_picked(self, unit_env, owner_id):
        """Foreign shows in the pool are ignored."""
        anchor_service = await unit_env.get(AnchorService)
        target = make_show(owner_id)
        foreign = [make_show(OwnerId(uuid4())) for _ in range(5)]

        anchor = await anchor_service.select_anchor(
            owner_id, target.id, [target, *foreign], seed=7
        )

        assert anchor is None

    @pytest.mark.asyncio
    async def test_anchor_is_from_pool_and_not_target(self, unit_env, owner_id):
        """Whatever the seed, the anchor is another show of the pool."""
        anchor_service = await unit_env.get(AnchorService)
        target = make_show(owner_id)
        pool = [target] + [make_show(owner_id) for _ in range(6)]

        for seed in range(20):
            anchor = await anchor_service.select_anchor(owner_id, target.id, pool, seed)
            assert anchor in {show.id for show in pool}
            assert anchor != target.id

    @pytest.mark.asyncio
    async def test_same_seed_same_anchor(self, unit_env, owner_id):
        """The draw is reproducible, independent of pool order."""
        anchor_service = await unit_env.get(AnchorService)
        target = make_show(owner_id)
        pool = [make_show(owner_id) for _ in range(8)]

        first = await anchor_service.select_anchor(owner_id, target.id, pool, seed=42)
        second = await anchor_service.select_anchor(
            owner_id, target.id, list(reversed(pool)), seed=42
        )

        assert first == second

    @pytest.mark.asyncio
    async def test_prefers_stable_show_near_the_median(self, owner_id):
        """An established mid-table show beats never-compared ones."""
        rating_repo = InMemoryRatingRepository()
        target = make_show(owner_id)
        settled = make_show(owner_id)
        fresh = [make_show(owner_id) for _ in range(4)]
        await rating_repo.replace_all(owner_id, [_rating(owner_id, settled, 1200, 5)])
        anchor_service = _service(
            rating_repo, InMemoryComparisonRepository(), AnchorSettings(top_n=1)
        )

        anchor = await anchor_service.select_anchor(
            owner_id, target.id, [settled, *fresh], seed=3
        )

        assert anchor == settled.id

    @pytest.mark.asyncio
    async def test_oversampled_show_is_penalized(self, owner_id):
        """A show compared far more than the rest loses to a typical one."""
        rating_repo = InMemoryRatingRepository()
        target = make_show(owner_id)
        typical = make_show(owner_id)
        hub = make_show(owner_id)
        others = [make_show(owner_id) for _ in range(3)]
        await rating_repo.replace_all(
            owner_id,
            [
                _rating(owner_id, typical, 1200, 5),
                _rating(owner_id, hub, 1200, 30),
                *[_rating(owner_id, show, 1200, 5) for show in others],
            ],
        )
        settings = AnchorSettings(top_n=1)
        anchor_service = _service(rating_repo, InMemoryComparisonRepository(), settings)

        anchor = await anchor_service.select_anchor(
            owner_id, target.id, [hub, typical], seed=0
        )

        assert anchor == typical.id

    @pytest.mark.asyncio
    async def test_prefers_shows_not_met_yet(self, owner_id):
        """Shows the target was already compared with are skipped."""
        comparison_repo = InMemoryComparisonRepository()
        target = make_show(owner_id)
        met = [make_show(owner_id) for _ in range(4)]
        unmet = make_show(owner_id)
        for show in met:
            await comparison_repo.save(_comparison(owner_id, target, show))
        anchor_service = _service(InMemoryRatingRepository(), comparison_repo)

        for seed in range(10):
            anchor = await anchor_service.select_anchor(
                owner_id, target.id, [*met, unmet], seed
            )
            assert anchor == unmet.id

    @pytest.mark.asyncio
    async def test_everything_met_falls_back_to_whole_pool(self, owner_id):
        """When every candidate was met, one of them is still returned."""
        comparison_repo = InMemoryComparisonRepository()
        target = make_show(owner_id)
        met = [make_show(owner_id) for _ in range(3)]
        for show in met:
            await comparison_repo.save(_comparison(owner_id, show, target))
        anchor_service = _service(InMemoryRatingRepository(), comparison_repo)

        anchor = await anchor_service.select_anchor(owner_id, target.id, met, seed=5)

        assert anchor in {show.id for show in met}


class TestSelectMatchup:
    """Tests for select_matchup."""

    @pytest.mark.asyncio
    async def test_needs_two_shows(self, unit_env, owner_id):
        """A single show has nothing to be compared with."""
        anchor_service = await unit_env.get(AnchorService)

        assert await anchor_service.select_matchup(owner_id, [make_show(owner_id)], 1) is None

    @pytest.mark.asyncio
    async def test_returns_canonical_pair(self, unit_env, owner_id):
        """Two uncompared shows are paired, in normalized order."""
        anchor_service = await unit_env.get(AnchorService)
        a, b = make_show(owner_id), make_show(owner_id)

        pair = await anchor_service.select_matchup(owner_id, [a, b], seed=9)

        assert pair is not None
        assert set(pair) == {a.id, b.id}
        assert str(pair[0]) < str(pair[1])

    @pytest.mark.asyncio
    async def test_compared_pair_is_not_offered_again(self, unit_env, owner_id):
        """Once a pair is in the ledger it is not proposed."""
        anchor_service = await unit_env.get(AnchorService)
        comparison_repo = await unit_env.get(ComparisonRepository)
        a, b = make_show(owner_id), make_show(owner_id)
        await comparison_repo.save(_comparison(owner_id, a, b))

        assert await anchor_service.select_matchup(owner_id, [a, b], seed=9) is None

    @pytest.mark.asyncio
    async def test_transitively_implied_pair_is_skipped(self, unit_env, owner_id):
        """If A beat B and B beat C, A against C tells us nothing new."""
        anchor_service = await unit_env.get(AnchorService)
        comparison_repo = await unit_env.get(ComparisonRepository)
        a, b, c = make_show(owner_id), make_show(owner_id), make_show(owner_id)
        await comparison_repo.save(_comparison(owner_id, a, b))
        await comparison_repo.save(_comparison(owner_id, b, c))

        assert await anchor_service.select_matchup(owner_id, [a, b, c], seed=1) is None

    @pytest.mark.asyncio
    async def test_close_uncertain_pair_is_preferred(self, owner_id):
        """Close ratings with few comparisons beat a lopsided pair."""
        rating_repo = InMemoryRatingRepository()
        a, b, far = make_show(owner_id), make_show(owner_id), make_show(owner_id)
        await rating_repo.replace_all(
            owner_id,
            [
                _rating(owner_id, a, 1210, 1),
                _rating(owner_id, b, 1190, 1),
                _rating(owner_id, far, 1700, 1),
            ],
        )
        anchor_service = AnchorService(
            rating_repo,
            InMemoryComparisonRepository(),
            AnchorSettings(),
            MatchupSettings(top_n=1),
            RankingSettings(),
        )

        pair = await anchor_service.select_matchup(owner_id, [a, b, far], seed=0)

        assert pair is not None
        assert set(pair) == {a.id, b.id}


class TestRankingsComplete:
    """Tests for rankings_complete."""

    @pytest.mark.asyncio
    async def test_fewer_than_two_shows_is_complete(self, unit_env, owner_id):
        """Nothing to rank means nothing left to do."""
        anchor_service = await unit_env.get(AnchorService)

        assert await anchor_service.rankings_complete(owner_id, [make_show(owner_id)])

    @pytest.mark.asyncio
    async def test_too_few_comparisons_is_incomplete(self, unit_env, owner_id):
        """A handful of comparisons is not enough."""
        anchor_service = await unit_env.get(AnchorService)
        comparison_repo = await unit_env.get(ComparisonRepository)
        shows = [make_show(owner_id) for _ in range(4)]
        await comparison_repo.save(_comparison(owner_id, shows[0], shows[1]))

        assert not await anchor_service.rankings_complete(owner_id, shows)

    @pytest.mark.asyncio
    async def test_every_pair_compared_is_complete(self, owner_id):
        """With enough comparisons and no open pair, ranking is done."""
        comparison_repo = InMemoryComparisonRepository()
        shows = [make_show(owner_id) for _ in range(3)]
        # 15 comparisons over the three pairs
        for _ in range(5):
            await comparison_repo.save(_comparison(owner_id, shows[0], shows[1]))
            await comparison_repo.save(_comparison(owner_id, shows[1], shows[2]))
            await comparison_repo.save(_comparison(owner_id, shows[0], shows[2]))
        anchor_service = _service(InMemoryRatingRepository(), comparison_repo)

        assert await anchor_service.rankings_complete(owner_id, shows)


class TestScoreOpenPairs:
    """Tests for the open-pair scoring shared by matchups and completion."""

    def test_signature_is_typed(self):
        """Callers pass shows and an optional preloaded ledger."""
        hints = get_type_hints(AnchorService._score_open_pairs)

        assert hints["candidates"] == Sequence[Show]
        assert hints["comparisons"] == Optional[list[ComparisonRecord]]
        assert hints["return"] == list[tuple[float, NormalizedPair]]

    @pytest.mark.asyncio
    async def test_scores_only_pairs_not_yet_compared(self, owner_id):
        """A compared pair drops out; the others come back canonical."""
        comparison_repo = InMemoryComparisonRepository()
        a, b, c = (make_show(owner_id) for _ in range(3))
        await comparison_repo.save(_comparison(owner_id, a, b))
        anchor_service = _service(InMemoryRatingRepository(), comparison_repo)

        scored = await anchor_service._score_open_pairs(owner_id, [a, b, c])

        pairs = {pair for _, pair in scored}
        assert pairs == {NormalizedPair.of(a.id, c.id), NormalizedPair.of(b.id, c.id)}
        assert all(isinstance(score, float) for score, _ in scored)
