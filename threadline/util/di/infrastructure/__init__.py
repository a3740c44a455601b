"""Infrastructure providers."""

# Import bases
from .cache import CacheProvider
from .persistence import PersistenceProvider
from .realtime import RealtimeProvider

# Import implementations (needed for __subclasses__())
from .cache import ProdCacheProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .realtime import ProdRealtimeProvider  # noqa: F401

__all__ = [
    "CacheProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdPersistenceProvider",
    "ProdRealtimeProvider",
    "RealtimeProvider",
]
