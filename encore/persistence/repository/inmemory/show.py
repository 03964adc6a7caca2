"""In-memory show repository for testing."""

from typing import Optional, Sequence

from encore.domain.model.show import Show
from encore.domain.repository.show import ShowRepository
from encore.domain.value import ItemId, OwnerId


class InMemoryShowRepository(ShowRepository):
    """In-memory implementation of ShowRepository for testing."""

    def __init__(self) -> None:
        self._shows: dict[ItemId, Show] = {}

    async def find_by_id(self, item_id: ItemId) -> Optional[Show]:
        """Find a show by ID."""
        return self._shows.get(item_id)

    async def find_many(self, item_ids: Sequence[ItemId]) -> list[Show]:
        """Find several shows by ID."""
        return [self._shows[i] for i in set(item_ids) if i in self._shows]

    async def find_by_owner(self, owner_id: OwnerId) -> list[Show]:
        """Find every show of an owner."""
        return [s for s in self._shows.values() if s.owner_id == owner_id]

    async def save(self, show: Show) -> Show:
        """Save a show."""
        self._shows[show.id] = show
        return show

    async def delete(self, item_id: ItemId) -> None:
        """Remove a show. Test helper mirroring the app-side delete."""
        self._shows.pop(item_id, None)
