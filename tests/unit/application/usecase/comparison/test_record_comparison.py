"""Unit tests for RecordComparisonUseCase."""

from uuid import uuid4

import pytest
from pydantic import ValidationError as RequestValidationError

from encore.application.usecase.comparison import (
    RecordComparisonRequest,
    RecordComparisonUseCase,
)
from encore.domain.error import NotFoundError
from encore.domain.repository import RatingRepository, ShowRepository
from encore.domain.service import LedgerService
from tests.conftest import make_show
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRecordComparisonUseCase:
    """Tests for RecordComparisonUseCase."""

    @pytest.mark.asyncio
    async def test_returns_ids_as_strings_and_new_ratings(self, unit_env, owner_id):
        """The response carries the outcome of the ledger write."""
        # Arrange
        use_case = RecordComparisonUseCase(
            ledger_service=await unit_env.get(LedgerService)
        )
        show_repo = await unit_env.get(ShowRepository)
        a = await show_repo.save(make_show(owner_id))
        b = await show_repo.save(make_show(owner_id))

        # Act
        response = await use_case.execute(
            RecordComparisonRequest(
                owner_id=owner_id, item_a=a.id, item_b=b.id, winner_id=a.id
            )
        )

        # Assert
        assert response.winner_id == str(a.id)
        assert response.loser_id == str(b.id)
        assert response.new_winner_rating == 1216
        assert response.new_loser_rating == 1184

    @pytest.mark.asyncio
    async def test_ratings_accumulate_across_calls(self, unit_env, owner_id):
        """Each call builds on the stored ratings."""
        use_case = await unit_env.get(RecordComparisonUseCase)
        show_repo = await unit_env.get(ShowRepository)
        rating_repo = await unit_env.get(RatingRepository)
        a = await show_repo.save(make_show(owner_id))
        b = await show_repo.save(make_show(owner_id))

        await use_case.execute(
            RecordComparisonRequest(owner_id=owner_id, item_a=a.id, item_b=b.id, winner_id=a.id)
        )
        response = await use_case.execute(
            RecordComparisonRequest(owner_id=owner_id, item_a=a.id, item_b=b.id, winner_id=b.id)
        )

        assert response.new_winner_rating == 1201
        assert response.new_loser_rating == 1199
        record = await rating_repo.find(owner_id, a.id)
        assert record is not None and record.comparisons_count == 2

    @pytest.mark.asyncio
    async def test_unknown_show_propagates_not_found(self, unit_env, owner_id):
        use_case = await unit_env.get(RecordComparisonUseCase)
        show_repo = await unit_env.get(ShowRepository)
        a = await show_repo.save(make_show(owner_id))
        ghost = uuid4()

        with pytest.raises(NotFoundError):
            await use_case.execute(
                RecordComparisonRequest(
                    owner_id=owner_id, item_a=a.id, item_b=ghost, winner_id=ghost
                )
            )

    def test_malformed_ids_are_rejected_by_the_request(self, owner_id):
        with pytest.raises(RequestValidationError):
            RecordComparisonRequest(
                owner_id=owner_id, item_a="not-a-uuid", item_b=uuid4(), winner_id=uuid4()
            )
