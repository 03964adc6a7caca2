"""Domain value objects for the ranking engine.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import Field, model_validator

from encore.domain.value.common import ValueObject
from encore.domain.value.identifiers import ItemId


class RankScope(str, Enum):
    """Time window a ranking is computed over."""

    ALL_TIME = "all-time"
    THIS_YEAR = "this-year"
    LAST_YEAR = "last-year"
    THIS_MONTH = "this-month"

    def contains(self, day: date, now: datetime) -> bool:
        """Whether a show that happened on ``day`` falls inside this scope.

        The window is derived from ``now`` on every call, so year and month
        rollovers never need a cache invalidation.
        """
        if self is RankScope.THIS_YEAR:
            return day.year == now.year
        if self is RankScope.LAST_YEAR:
            return day.year == now.year - 1
        if self is RankScope.THIS_MONTH:
            return day.year == now.year and day.month == now.month
        return True


class Confidence(str, Enum):
    """How settled a rating is. Informational only, never a gate."""

    UNRATED = "unrated"
    PROVISIONAL = "provisional"
    ESTABLISHED = "established"


class NormalizedPair(ValueObject):
    """Two item ids in canonical order.

    The same two shows always produce the same pair, regardless of which
    side the user tapped first. Ordering is by the string form of the ids.
    """

    low: ItemId
    high: ItemId

    @model_validator(mode="after")
    def validate_order(self) -> "NormalizedPair":
        """Ensure the pair is distinct and canonically ordered."""
        if str(self.low) >= str(self.high):
            raise ValueError("Pair must hold two distinct ids in ascending order")
        return self

    @classmethod
    def of(cls, item_a: ItemId, item_b: ItemId) -> "NormalizedPair":
        """Build the canonical pair for two distinct ids."""
        if str(item_a) <= str(item_b):
            return cls(low=item_a, high=item_b)
        return cls(low=item_b, high=item_a)

    def other(self, item_id: ItemId) -> ItemId:
        """Return the side of the pair that is not ``item_id``."""
        return self.high if item_id == self.low else self.low

    def __contains__(self, item_id: object) -> bool:
        return item_id == self.low or item_id == self.high


class EloUpdate(ValueObject):
    """Result of a single Elo update."""

    new_winner_rating: float
    new_loser_rating: float


class RankResult(ValueObject):
    """Position of one show within a scoped, rated subset."""

    position: int = Field(ge=0)
    total: int = Field(ge=0)
    percentile: float = Field(ge=0, le=100)
