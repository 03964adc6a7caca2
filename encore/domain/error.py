"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (self-comparison, winner outside the pair)."""

    pass


class AuthError(DomainError):
    """Raised when no owner can be resolved for the request."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConcurrencyConflict(DomainError):
    """Raised when a concurrent write invalidated the read snapshot.

    Retryable: the caller should re-read and try again.
    """

    def __init__(self, owner_id: str, item_ids: list[str]):
        self.owner_id = owner_id
        self.item_ids = item_ids
        super().__init__(
            f"Concurrent rating update for owner {owner_id}: {', '.join(item_ids)}"
        )


class PersistenceError(DomainError):
    """Raised when the durable store is unavailable or a transaction failed."""

    pass
