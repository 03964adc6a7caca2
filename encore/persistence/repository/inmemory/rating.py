"""In-memory rating repository for testing."""

import asyncio
from typing import Optional, Sequence

from encore.domain.model.rating import RatingRecord
from encore.domain.repository.rating import RatingRepository
from encore.domain.value import ItemId, OwnerId


class InMemoryRatingRepository(RatingRepository):
    """In-memory implementation of RatingRepository for testing.

    Compare-and-swap checks every version before writing anything, under a
    lock, so it is atomic with respect to other coroutines.
    """

    def __init__(self) -> None:
        self._records: dict[tuple[OwnerId, ItemId], RatingRecord] = {}
        self._lock = asyncio.Lock()

    async def find(self, owner_id: OwnerId, item_id: ItemId) -> Optional[RatingRecord]:
        """Find the rating record of one show."""
        return self._records.get((owner_id, item_id))

    async def find_many(
        self, owner_id: OwnerId, item_ids: Sequence[ItemId]
    ) -> dict[ItemId, RatingRecord]:
        """Find rating records for several shows."""
        return {
            item_id: self._records[(owner_id, item_id)]
            for item_id in item_ids
            if (owner_id, item_id) in self._records
        }

    async def find_by_owner(self, owner_id: OwnerId) -> list[RatingRecord]:
        """Find every rating record of an owner."""
        return [r for (owner, _), r in self._records.items() if owner == owner_id]

    async def compare_and_swap(
        self, owner_id: OwnerId, updates: Sequence[tuple[int, RatingRecord]]
    ) -> bool:
        """Write every record, or none if any version moved."""
        async with self._lock:
            for expected, record in updates:
                current = self._records.get((owner_id, record.item_id))
                current_count = current.comparisons_count if current else 0
                if current_count != expected:
                    return False

            for _, record in updates:
                current = self._records.get((owner_id, record.item_id))
                if current is not None and current.pending_recompute:
                    record = record.model_copy(update={"pending_recompute": True})
                self._records[(owner_id, record.item_id)] = record
            return True

    async def mark_pending(self, owner_id: OwnerId, item_ids: Sequence[ItemId]) -> None:
        """Flag records for recomputation, creating default ones if missing."""
        async with self._lock:
            for item_id in item_ids:
                current = self._records.get((owner_id, item_id)) or RatingRecord(
                    owner_id=owner_id, item_id=item_id
                )
                self._records[(owner_id, item_id)] = current.model_copy(
                    update={"pending_recompute": True}
                )

    async def replace_all(self, owner_id: OwnerId, records: Sequence[RatingRecord]) -> None:
        """Replace every record of an owner."""
        async with self._lock:
            self._records = {
                key: record
                for key, record in self._records.items()
                if key[0] != owner_id
            }
            for record in records:
                self._records[(owner_id, record.item_id)] = record
