"""Mock providers for testing."""

from .cache import MockCacheProvider
from .persistence import MockPersistenceProvider
from .realtime import MockRealtimeProvider
from .container import build_test_container

__all__ = [
    "MockCacheProvider",
    "MockPersistenceProvider",
    "MockRealtimeProvider",
    "build_test_container",
]
