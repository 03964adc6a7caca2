"""Rating repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from encore.domain.model.rating import RatingRecord
from encore.domain.value import ItemId, OwnerId


class RatingRepository(ABC):
    """Repository for RatingRecord state.

    Writes are conditional on the comparisons_count the caller read, so two
    comparisons racing on the same show can never lose an update.
    """

    @abstractmethod
    async def find(self, owner_id: OwnerId, item_id: ItemId) -> Optional[RatingRecord]:
        """Find the rating record of one show.

        Args:
            owner_id: The owner's ID
            item_id: The show's ID

        Returns:
            The record if one was persisted, None otherwise
        """
        pass

    @abstractmethod
    async def find_many(
        self, owner_id: OwnerId, item_ids: Sequence[ItemId]
    ) -> Dict[ItemId, RatingRecord]:
        """Find rating records for several shows (batch query).

        Args:
            owner_id: The owner's ID
            item_ids: Show IDs to look up

        Returns:
            Mapping of show ID to record, for shows that have one
        """
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: OwnerId) -> List[RatingRecord]:
        """Find every rating record of an owner."""
        pass

    @abstractmethod
    async def compare_and_swap(
        self, owner_id: OwnerId, updates: Sequence[Tuple[int, RatingRecord]]
    ) -> bool:
        """Atomically write several records if none changed since they were read.

        Each update is ``(expected_comparisons_count, new_record)``. An expected
        count of 0 means the record must not exist yet, or exist only as a
        flagged default left by ``mark_pending``.

        Args:
            owner_id: The owner's ID
            updates: Records to write with the version they were read at

        Returns:
            True if every record was written, False if any version check
            failed (in which case nothing was written)

        Raises:
            PersistenceError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def mark_pending(self, owner_id: OwnerId, item_ids: Sequence[ItemId]) -> None:
        """Flag records for recomputation from the ledger.

        Shows without a record get a default record carrying the flag.
        """
        pass

    @abstractmethod
    async def replace_all(self, owner_id: OwnerId, records: Sequence[RatingRecord]) -> None:
        """Replace every record of an owner with a rebuilt set.

        Used when ratings are recomputed from the ledger.
        """
        pass
