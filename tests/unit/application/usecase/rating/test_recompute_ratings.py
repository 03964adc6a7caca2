"""Unit tests for RecomputeRatingsUseCase."""

import pytest

from encore.application.usecase.comparison import (
    RecordComparisonRequest,
    RecordComparisonUseCase,
)
from encore.application.usecase.rating import (
    RecomputeRatingsRequest,
    RecomputeRatingsUseCase,
)
from encore.domain.repository import (
    ComparisonRepository,
    RatingRepository,
    ShowRepository,
)
from tests.conftest import make_show
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRecomputeRatingsUseCase:
    """Tests for RecomputeRatingsUseCase."""

    @pytest.mark.asyncio
    async def test_rebuild_repairs_flagged_records(self, unit_env, owner_id):
        """A flagged record is rebuilt from the ledger and unflagged."""
        # Arrange
        record = await unit_env.get(RecordComparisonUseCase)
        use_case = await unit_env.get(RecomputeRatingsUseCase)
        show_repo = await unit_env.get(ShowRepository)
        rating_repo = await unit_env.get(RatingRepository)
        a = await show_repo.save(make_show(owner_id))
        b = await show_repo.save(make_show(owner_id))
        c = await show_repo.save(make_show(owner_id))
        await record.execute(
            RecordComparisonRequest(owner_id=owner_id, item_a=a.id, item_b=b.id, winner_id=a.id)
        )
        await record.execute(
            RecordComparisonRequest(owner_id=owner_id, item_a=b.id, item_b=c.id, winner_id=c.id)
        )
        before = {r.item_id: r.elo_score for r in await rating_repo.find_by_owner(owner_id)}
        await rating_repo.mark_pending(owner_id, [a.id])

        # Act
        response = await use_case.execute(RecomputeRatingsRequest(owner_id=owner_id))

        # Assert
        assert response.records == 3
        assert response.comparisons == 2
        after = await rating_repo.find_by_owner(owner_id)
        assert {r.item_id: r.elo_score for r in after} == before
        assert not any(r.pending_recompute for r in after)

    @pytest.mark.asyncio
    async def test_rebuild_after_show_deletion(self, unit_env, owner_id):
        """Deleting a show drops its comparisons; recompute forgets them."""
        record = await unit_env.get(RecordComparisonUseCase)
        use_case = await unit_env.get(RecomputeRatingsUseCase)
        show_repo = await unit_env.get(ShowRepository)
        comparison_repo = await unit_env.get(ComparisonRepository)
        rating_repo = await unit_env.get(RatingRepository)
        a = await show_repo.save(make_show(owner_id))
        b = await show_repo.save(make_show(owner_id))
        c = await show_repo.save(make_show(owner_id))
        await record.execute(
            RecordComparisonRequest(owner_id=owner_id, item_a=a.id, item_b=b.id, winner_id=a.id)
        )
        await record.execute(
            RecordComparisonRequest(owner_id=owner_id, item_a=b.id, item_b=c.id, winner_id=b.id)
        )

        # Mirror the database cascade
        await show_repo.delete(a.id)
        await comparison_repo.delete_by_item(a.id)
        response = await use_case.execute(RecomputeRatingsRequest(owner_id=owner_id))

        assert response.records == 2
        assert response.comparisons == 1
        assert await rating_repo.find(owner_id, a.id) is None
        rebuilt_b = await rating_repo.find(owner_id, b.id)
        assert rebuilt_b.elo_score == 1216
        assert rebuilt_b.comparisons_count == 1
