"""Base service class for domain services."""


class Service:
    """Base class for the ranking domain services.

    Services get their repositories and settings through the constructor
    and never open database sessions themselves; the request scope owns
    the transaction.
    """
