"""Infrastructure component slots and their production implementations.

The production classes are imported so that ``__subclasses__()`` on each slot
finds them; mocks register themselves the same way from ``tests.di``.
"""

from .cache import CacheProvider, ProdCacheProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "CacheProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdPersistenceProvider",
]
