"""PostgreSQL implementation of Show repository."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from encore.domain.model import Show
from encore.domain.repository import ShowRepository
from encore.domain.value import ItemId, OwnerId
from encore.persistence.database import translate_errors
from encore.persistence.mappers import row_to_show, show_to_dict
from encore.persistence.tables import items_table


class PostgresShowRepository(ShowRepository):
    """PostgreSQL implementation of ShowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, item_id: ItemId) -> Optional[Show]:
        """Find a show by ID."""
        async with translate_errors("items.find_by_id"):
            stmt = select(items_table).where(items_table.c.id == item_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_show(row._asdict()) if row else None

    async def find_many(self, item_ids: Sequence[ItemId]) -> List[Show]:
        """Find several shows by ID (batch query)."""
        if not item_ids:
            return []

        async with translate_errors("items.find_many"):
            stmt = select(items_table).where(items_table.c.id.in_(item_ids))
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_show(row._asdict()) for row in rows]

    async def find_by_owner(self, owner_id: OwnerId) -> List[Show]:
        """Find every show logged by an owner."""
        async with translate_errors("items.find_by_owner"):
            stmt = (
                select(items_table)
                .where(items_table.c.owner_id == owner_id)
                .order_by(items_table.c.occurred_on.desc())
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_show(row._asdict()) for row in rows]

    async def save(self, show: Show) -> Show:
        """Save a show (create or update)."""
        show_dict = show_to_dict(show)
        stmt = insert(items_table).values(**show_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[items_table.c.id],
            set_={
                "occurred_on": stmt.excluded.occurred_on,
                "category": stmt.excluded.category,
            },
        )
        async with translate_errors("items.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return show
