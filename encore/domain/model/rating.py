"""Rating record entity.

A rating record is the materialized Elo state of one show for its owner.
It is a rebuildable cache of the comparison ledger.
"""

from datetime import datetime

from pydantic import Field

from encore.domain.model.common import DomainModel
from encore.domain.value import ItemId, OwnerId

DEFAULT_ELO = 1200.0


class RatingRecord(DomainModel):
    """Per-(owner, show) rating state.

    Business rules:
    - Only persisted after the show's first comparison
    - comparisons_count grows by exactly 1 per comparison and doubles as the
      optimistic concurrency version
    - pending_recompute marks a record whose last update could not be
      applied; it is cleared by replaying the ledger
    """

    owner_id: OwnerId
    item_id: ItemId
    elo_score: float = DEFAULT_ELO
    comparisons_count: int = Field(default=0, ge=0)
    pending_recompute: bool = False
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_persisted(self) -> bool:
        """Whether this record reflects at least one stored comparison."""
        return self.comparisons_count > 0

    def applied(self, new_score: float) -> "RatingRecord":
        """Return the record after one more comparison."""
        return self.model_copy(
            update={
                "elo_score": new_score,
                "comparisons_count": self.comparisons_count + 1,
                "updated_at": datetime.now(),
            }
        )
