"""Comparison record entity.

Comparisons are the append-only ledger of "which show was better?"
decisions. The ledger is the source of truth for every rating.
"""

from datetime import datetime

from pydantic import Field, model_validator

from encore.domain.model.common import DomainModel
from encore.domain.value import ComparisonId, ItemId, NormalizedPair, OwnerId


class ComparisonRecord(DomainModel):
    """A single pairwise decision.

    Business rules:
    - item_low_id / item_high_id are the canonically ordered pair
    - winner_id is one of the two
    - Repeated comparisons of the same pair are separate records
    """

    id: ComparisonId
    owner_id: OwnerId
    item_low_id: ItemId
    item_high_id: ItemId
    winner_id: ItemId
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_winner(self) -> "ComparisonRecord":
        """Validate pair order and that the winner is part of the pair."""
        if str(self.item_low_id) >= str(self.item_high_id):
            raise ValueError("Comparison pair must be normalized")
        if self.winner_id not in (self.item_low_id, self.item_high_id):
            raise ValueError("Winner must be one of the compared items")
        return self

    @property
    def pair(self) -> NormalizedPair:
        """The normalized pair of this comparison."""
        return NormalizedPair(low=self.item_low_id, high=self.item_high_id)

    @property
    def loser_id(self) -> ItemId:
        """The side that did not win."""
        return self.pair.other(self.winner_id)
