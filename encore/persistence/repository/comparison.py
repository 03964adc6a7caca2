"""PostgreSQL implementation of Comparison repository."""

from typing import List, Optional

from sqlalchemy import and_, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from encore.domain.model import ComparisonRecord
from encore.domain.repository import ComparisonRepository
from encore.domain.value import ComparisonId, ItemId, OwnerId
from encore.persistence.database import translate_errors
from encore.persistence.mappers import comparison_to_dict, row_to_comparison
from encore.persistence.tables import comparisons_table


class PostgresComparisonRepository(ComparisonRepository):
    """PostgreSQL implementation of ComparisonRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, comparison: ComparisonRecord) -> ComparisonRecord:
        """Append a comparison to the ledger."""
        stmt = insert(comparisons_table).values(**comparison_to_dict(comparison))
        async with translate_errors("comparisons.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return comparison

    async def find_by_id(self, comparison_id: ComparisonId) -> Optional[ComparisonRecord]:
        """Find a comparison by ID."""
        async with translate_errors("comparisons.find_by_id"):
            stmt = select(comparisons_table).where(comparisons_table.c.id == comparison_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_comparison(row._asdict()) if row else None

    async def find_by_owner(self, owner_id: OwnerId) -> List[ComparisonRecord]:
        """Find an owner's comparisons, oldest first."""
        async with translate_errors("comparisons.find_by_owner"):
            stmt = (
                select(comparisons_table)
                .where(comparisons_table.c.owner_id == owner_id)
                .order_by(
                    comparisons_table.c.created_at.asc(), comparisons_table.c.seq.asc()
                )
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_comparison(row._asdict()) for row in rows]

    async def find_by_item(
        self, owner_id: OwnerId, item_id: ItemId
    ) -> List[ComparisonRecord]:
        """Find the comparisons a show took part in, oldest first."""
        async with translate_errors("comparisons.find_by_item"):
            stmt = (
                select(comparisons_table)
                .where(
                    and_(
                        comparisons_table.c.owner_id == owner_id,
                        or_(
                            comparisons_table.c.item_low_id == item_id,
                            comparisons_table.c.item_high_id == item_id,
                        ),
                    )
                )
                .order_by(
                    comparisons_table.c.created_at.asc(), comparisons_table.c.seq.asc()
                )
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_comparison(row._asdict()) for row in rows]
