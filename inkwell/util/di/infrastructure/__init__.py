"""Infrastructure DI providers."""

from .persistence import PersistenceProvider, ProdPersistenceProvider
from .storage import ProdStorageProvider, StorageProvider

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdStorageProvider",
    "StorageProvider",
]
