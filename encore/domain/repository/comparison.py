"""Comparison repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from encore.domain.model.comparison import ComparisonRecord
from encore.domain.value import ComparisonId, ItemId, OwnerId


class ComparisonRepository(ABC):
    """Append-only repository for the comparison ledger.

    There is deliberately no update or delete: ledger rows only disappear
    through the cascade when their show is deleted.
    """

    @abstractmethod
    async def save(self, comparison: ComparisonRecord) -> ComparisonRecord:
        """Append a comparison to the ledger.

        Args:
            comparison: The comparison to append

        Returns:
            The saved comparison

        Raises:
            PersistenceError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def find_by_id(self, comparison_id: ComparisonId) -> Optional[ComparisonRecord]:
        """Find a comparison by ID."""
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: OwnerId) -> List[ComparisonRecord]:
        """Find an owner's comparisons, oldest first.

        Args:
            owner_id: The owner's ID

        Returns:
            Comparisons in creation order
        """
        pass

    @abstractmethod
    async def find_by_item(
        self, owner_id: OwnerId, item_id: ItemId
    ) -> List[ComparisonRecord]:
        """Find the comparisons a show took part in, on either side, oldest first."""
        pass
