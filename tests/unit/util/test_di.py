"""Unit tests for provider selection and the test container."""

import pytest

from threadline.adapter.cache.memory import InMemoryCache
from threadline.adapter.realtime.hub import WebSocketHub
from threadline.adapter.realtime.recording import RecordingBroadcaster
from threadline.domain.service import Broadcaster, Cache
from threadline.util.di import (
    CacheProvider,
    ProdCacheProvider,
    ProdConfigProvider,
    ProdRealtimeProvider,
    RealtimeProvider,
    get_provider,
)
from threadline.util.error import DependencyInjectionError
from tests.di import MockCacheProvider, MockRealtimeProvider, build_test_container


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_returned_as_is(self):
        """Providers without implementations are used directly."""
        # Act & Assert
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_selects_mock_or_production(self):
        """Mockable components resolve by the __is_mock__ flag."""
        # Act & Assert
        assert get_provider(CacheProvider, use_mock=True) is MockCacheProvider
        assert get_provider(CacheProvider, use_mock=False) is ProdCacheProvider
        assert get_provider(RealtimeProvider, use_mock=True) is MockRealtimeProvider
        assert get_provider(RealtimeProvider) is ProdRealtimeProvider


class TestBuildTestContainer:
    """Tests for build_test_container."""

    def test_unknown_component_rejected(self):
        """Typos in unmock are caught early."""
        # Act & Assert
        with pytest.raises(DependencyInjectionError, match="Unknown components"):
            build_test_container(unmock={"search"})

    @pytest.mark.asyncio
    async def test_mocks_by_default(self):
        """Every mockable port resolves to its test double."""
        # Arrange
        container = build_test_container()

        # Act
        cache = await container.get(Cache)
        broadcaster = await container.get(Broadcaster)
        await container.close()

        # Assert
        assert isinstance(cache, InMemoryCache)
        assert isinstance(broadcaster, RecordingBroadcaster)

    @pytest.mark.asyncio
    async def test_unmock_realtime(self):
        """The real hub backs the broadcaster when realtime is unmocked."""
        # Arrange
        container = build_test_container(unmock={"realtime"})

        # Act
        broadcaster = await container.get(Broadcaster)
        hub = await container.get(WebSocketHub)
        await container.close()

        # Assert
        assert broadcaster is hub
