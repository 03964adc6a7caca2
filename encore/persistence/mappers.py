"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from encore.domain.model import ComparisonRecord, RatingRecord, Show
from encore.domain.value import ComparisonId, ItemId, OwnerId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_show(row: Dict[str, Any]) -> Show:
    """Convert database row to Show domain model.

    Args:
        row: Database row as dict

    Returns:
        Show domain model
    """
    return Show(
        id=ItemId(_uuid(row["id"])),
        owner_id=OwnerId(_uuid(row["owner_id"])),
        occurred_on=row["occurred_on"],
        category=row.get("category"),
    )


def show_to_dict(show: Show) -> Dict[str, Any]:
    """Convert Show domain model to database dict."""
    return show.model_dump()


def row_to_rating(row: Dict[str, Any]) -> RatingRecord:
    """Convert database row to RatingRecord domain model.

    Args:
        row: Database row as dict

    Returns:
        RatingRecord domain model
    """
    return RatingRecord(
        owner_id=OwnerId(_uuid(row["owner_id"])),
        item_id=ItemId(_uuid(row["item_id"])),
        elo_score=row["elo_score"],
        comparisons_count=row["comparisons_count"],
        pending_recompute=row.get("pending_recompute", False),
        updated_at=row["updated_at"],
    )


def rating_to_dict(record: RatingRecord) -> Dict[str, Any]:
    """Convert RatingRecord domain model to database dict."""
    return record.model_dump()


def row_to_comparison(row: Dict[str, Any]) -> ComparisonRecord:
    """Convert database row to ComparisonRecord domain model.

    Args:
        row: Database row as dict

    Returns:
        ComparisonRecord domain model
    """
    return ComparisonRecord(
        id=ComparisonId(_uuid(row["id"])),
        owner_id=OwnerId(_uuid(row["owner_id"])),
        item_low_id=ItemId(_uuid(row["item_low_id"])),
        item_high_id=ItemId(_uuid(row["item_high_id"])),
        winner_id=ItemId(_uuid(row["winner_id"])),
        created_at=row["created_at"],
    )


def comparison_to_dict(comparison: ComparisonRecord) -> Dict[str, Any]:
    """Convert ComparisonRecord domain model to database dict."""
    return comparison.model_dump()
