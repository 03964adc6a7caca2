"""Infrastructure providers.

Implementations must be imported for ``PersistenceProvider.__subclasses__()``
to see them.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = ["PersistenceProvider", "ProdPersistenceProvider"]
