"""PostgreSQL implementation of Rating repository."""

from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import and_, delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from encore.domain.model import RatingRecord
from encore.domain.repository import RatingRepository
from encore.domain.value import ItemId, OwnerId
from encore.persistence.database import translate_errors
from encore.persistence.mappers import rating_to_dict, row_to_rating
from encore.persistence.tables import ratings_table


class _StaleVersion(Exception):
    """A conditional write matched no row."""


class PostgresRatingRepository(RatingRepository):
    """PostgreSQL implementation of RatingRepository.

    Compare-and-swap runs inside a SAVEPOINT so a failed version check
    undoes the records already written in the same call without touching
    the rest of the request transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find(self, owner_id: OwnerId, item_id: ItemId) -> Optional[RatingRecord]:
        """Find the rating record of one show."""
        async with translate_errors("ratings.find"):
            stmt = select(ratings_table).where(
                and_(
                    ratings_table.c.owner_id == owner_id,
                    ratings_table.c.item_id == item_id,
                )
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_rating(row._asdict()) if row else None

    async def find_many(
        self, owner_id: OwnerId, item_ids: Sequence[ItemId]
    ) -> Dict[ItemId, RatingRecord]:
        """Find rating records for several shows (batch query)."""
        if not item_ids:
            return {}

        async with translate_errors("ratings.find_many"):
            stmt = select(ratings_table).where(
                and_(
                    ratings_table.c.owner_id == owner_id,
                    ratings_table.c.item_id.in_(item_ids),
                )
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        records = [row_to_rating(row._asdict()) for row in rows]
        return {record.item_id: record for record in records}

    async def find_by_owner(self, owner_id: OwnerId) -> List[RatingRecord]:
        """Find every rating record of an owner."""
        async with translate_errors("ratings.find_by_owner"):
            stmt = select(ratings_table).where(ratings_table.c.owner_id == owner_id)
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_rating(row._asdict()) for row in rows]

    async def compare_and_swap(
        self, owner_id: OwnerId, updates: Sequence[Tuple[int, RatingRecord]]
    ) -> bool:
        """Conditionally write several records in one savepoint."""
        async with translate_errors("ratings.compare_and_swap"):
            try:
                async with self.session.begin_nested():
                    # Canonical row order, so crossing comparisons cannot deadlock
                    for expected, record in sorted(
                        updates, key=lambda update: str(update[1].item_id)
                    ):
                        result = await self.session.execute(
                            self._conditional_write(owner_id, expected, record)
                        )
                        if result.rowcount != 1:  # type: ignore[attr-defined]
                            raise _StaleVersion()
            except _StaleVersion:
                return False
        return True

    def _conditional_write(self, owner_id: OwnerId, expected: int, record: RatingRecord):
        values = {
            "elo_score": record.elo_score,
            "comparisons_count": record.comparisons_count,
            "updated_at": record.updated_at,
        }
        if expected == 0:
            # First comparison: insert, or take over a flagged default row
            stmt = insert(ratings_table).values(**rating_to_dict(record))
            return stmt.on_conflict_do_update(
                index_elements=[ratings_table.c.owner_id, ratings_table.c.item_id],
                set_=values,
                where=ratings_table.c.comparisons_count == 0,
            )

        return (
            update(ratings_table)
            .where(
                and_(
                    ratings_table.c.owner_id == owner_id,
                    ratings_table.c.item_id == record.item_id,
                    ratings_table.c.comparisons_count == expected,
                )
            )
            .values(**values)
        )

    async def mark_pending(self, owner_id: OwnerId, item_ids: Sequence[ItemId]) -> None:
        """Flag records for recomputation, creating default ones if missing."""
        if not item_ids:
            return

        now = datetime.now()
        stmt = insert(ratings_table).values(
            [
                {
                    "owner_id": owner_id,
                    "item_id": item_id,
                    "pending_recompute": True,
                    "updated_at": now,
                }
                for item_id in item_ids
            ]
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ratings_table.c.owner_id, ratings_table.c.item_id],
            set_={"pending_recompute": True, "updated_at": now},
        )
        async with translate_errors("ratings.mark_pending"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def replace_all(self, owner_id: OwnerId, records: Sequence[RatingRecord]) -> None:
        """Replace every record of an owner with a rebuilt set."""
        async with translate_errors("ratings.replace_all"):
            await self.session.execute(
                delete(ratings_table).where(ratings_table.c.owner_id == owner_id)
            )
            if records:
                await self.session.execute(
                    insert(ratings_table).values(
                        [rating_to_dict(record) for record in records]
                    )
                )
            await self.session.flush()
