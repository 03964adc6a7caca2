"""Tests for the in-memory rating repository's compare-and-swap contract."""

from uuid import uuid4

import pytest

from encore.domain.model import RatingRecord
from encore.domain.value import ItemId, OwnerId
from encore.persistence.repository.inmemory import InMemoryRatingRepository


def _record(owner_id, item_id, elo=1200.0, count=0, pending=False):
    return RatingRecord(
        owner_id=owner_id,
        item_id=item_id,
        elo_score=elo,
        comparisons_count=count,
        pending_recompute=pending,
    )


@pytest.fixture
def repo():
    return InMemoryRatingRepository()


@pytest.fixture
def items():
    return ItemId(uuid4()), ItemId(uuid4())


class TestCompareAndSwap:
    @pytest.mark.asyncio
    async def test_first_write_expects_zero(self, repo, owner_id, items):
        a, b = items

        written = await repo.compare_and_swap(
            owner_id, [(0, _record(owner_id, a, 1216, 1)), (0, _record(owner_id, b, 1184, 1))]
        )

        assert written
        assert (await repo.find(owner_id, a)).elo_score == 1216
        assert (await repo.find(owner_id, b)).elo_score == 1184

    @pytest.mark.asyncio
    async def test_stale_version_writes_nothing(self, repo, owner_id, items):
        """One stale record blocks the whole batch."""
        a, b = items
        await repo.compare_and_swap(owner_id, [(0, _record(owner_id, a, 1216, 1))])

        written = await repo.compare_and_swap(
            owner_id,
            [(0, _record(owner_id, b, 1184, 1)), (0, _record(owner_id, a, 1230, 1))],
        )

        assert not written
        assert await repo.find(owner_id, b) is None
        assert (await repo.find(owner_id, a)).elo_score == 1216

    @pytest.mark.asyncio
    async def test_owners_do_not_share_records(self, repo, owner_id, items):
        a, _ = items
        other = OwnerId(uuid4())
        await repo.compare_and_swap(owner_id, [(0, _record(owner_id, a, 1216, 1))])

        assert await repo.find(other, a) is None
        assert await repo.compare_and_swap(other, [(0, _record(other, a, 1184, 1))])

    @pytest.mark.asyncio
    async def test_pending_flag_survives_a_write(self, repo, owner_id, items):
        a, _ = items
        await repo.compare_and_swap(owner_id, [(0, _record(owner_id, a, 1216, 1))])
        await repo.mark_pending(owner_id, [a])

        assert await repo.compare_and_swap(owner_id, [(1, _record(owner_id, a, 1230, 2))])
        record = await repo.find(owner_id, a)
        assert record.pending_recompute
        assert record.comparisons_count == 2


class TestMarkPending:
    @pytest.mark.asyncio
    async def test_missing_record_gets_flagged_default(self, repo, owner_id, items):
        a, _ = items

        await repo.mark_pending(owner_id, [a])

        record = await repo.find(owner_id, a)
        assert record.pending_recompute
        assert record.comparisons_count == 0
        assert record.elo_score == 1200

    @pytest.mark.asyncio
    async def test_flagged_default_accepts_first_write(self, repo, owner_id, items):
        a, _ = items
        await repo.mark_pending(owner_id, [a])

        assert await repo.compare_and_swap(owner_id, [(0, _record(owner_id, a, 1216, 1))])


class TestReplaceAll:
    @pytest.mark.asyncio
    async def test_replaces_only_the_owners_records(self, repo, owner_id, items):
        a, b = items
        other = OwnerId(uuid4())
        await repo.compare_and_swap(owner_id, [(0, _record(owner_id, a, 1216, 1))])
        await repo.compare_and_swap(other, [(0, _record(other, a, 1184, 1))])

        await repo.replace_all(owner_id, [_record(owner_id, b, 1190, 3)])

        assert await repo.find(owner_id, a) is None
        assert (await repo.find(owner_id, b)).comparisons_count == 3
        assert (await repo.find(other, a)).elo_score == 1184
