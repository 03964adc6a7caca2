"""Strongly typed identifiers for the ranking domain.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

OwnerId = NewType("OwnerId", UUID)
ItemId = NewType("ItemId", UUID)
ComparisonId = NewType("ComparisonId", UUID)
