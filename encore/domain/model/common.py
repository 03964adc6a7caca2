"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for shows, rating records and ledger rows.

    Entities are never mutated in place: a rating update produces the next
    record with ``model_copy(update=...)``. Unknown fields are rejected so a
    stray column never leaks into a model.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
