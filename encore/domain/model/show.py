"""Show entity.

A show is a logged concert owned by exactly one user. Shows are created and
edited outside the ranking engine; the engine only reads the attributes it
needs for scoping.
"""

from datetime import date
from typing import Optional

from encore.domain.model.common import DomainModel
from encore.domain.value import ItemId, OwnerId


class Show(DomainModel):
    """Rankable item.

    Attributes used by the engine:
    - occurred_on: date of the show, drives time-scoped rankings
    - category: show type tag (e.g. "show", "festival"), optional filter
    """

    id: ItemId
    owner_id: OwnerId
    occurred_on: date
    category: Optional[str] = None
