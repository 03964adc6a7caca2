"""Show repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from encore.domain.model.show import Show
from encore.domain.value import ItemId, OwnerId


class ShowRepository(ABC):
    """Read access to the shows the engine ranks.

    Shows are owned by the surrounding application; save exists so the
    application (and tests) can populate the store.
    """

    @abstractmethod
    async def find_by_id(self, item_id: ItemId) -> Optional[Show]:
        """Find a show by ID.

        Args:
            item_id: The show's unique identifier

        Returns:
            The show if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_many(self, item_ids: Sequence[ItemId]) -> List[Show]:
        """Find several shows by ID (batch query).

        Args:
            item_ids: Show IDs to look up

        Returns:
            The shows that exist, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: OwnerId) -> List[Show]:
        """Find every show logged by an owner.

        Args:
            owner_id: The owner's ID

        Returns:
            List of the owner's shows
        """
        pass

    @abstractmethod
    async def save(self, show: Show) -> Show:
        """Save a show (create or update).

        Args:
            show: The show to save

        Returns:
            The saved show
        """
        pass
