"""In-memory comparison repository for testing."""

from typing import Optional

from encore.domain.model.comparison import ComparisonRecord
from encore.domain.repository.comparison import ComparisonRepository
from encore.domain.value import ComparisonId, ItemId, OwnerId


class InMemoryComparisonRepository(ComparisonRepository):
    """In-memory implementation of ComparisonRepository for testing.

    The list keeps insertion order, which is the ledger's creation order.
    """

    def __init__(self) -> None:
        self._comparisons: list[ComparisonRecord] = []

    async def save(self, comparison: ComparisonRecord) -> ComparisonRecord:
        """Append a comparison."""
        self._comparisons.append(comparison)
        return comparison

    async def find_by_id(self, comparison_id: ComparisonId) -> Optional[ComparisonRecord]:
        """Find a comparison by ID."""
        for comparison in self._comparisons:
            if comparison.id == comparison_id:
                return comparison
        return None

    async def find_by_owner(self, owner_id: OwnerId) -> list[ComparisonRecord]:
        """Find an owner's comparisons, oldest first."""
        return [c for c in self._comparisons if c.owner_id == owner_id]

    async def find_by_item(
        self, owner_id: OwnerId, item_id: ItemId
    ) -> list[ComparisonRecord]:
        """Find the comparisons a show took part in, oldest first."""
        return [
            c
            for c in self._comparisons
            if c.owner_id == owner_id and item_id in c.pair
        ]

    async def delete_by_item(self, item_id: ItemId) -> None:
        """Drop every comparison of a show, like the database cascade."""
        self._comparisons = [c for c in self._comparisons if item_id not in c.pair]
