"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable, hashable value compared field by field.

    Frozen models hash by value, so pairs and results can be used as set
    members and dict keys.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
