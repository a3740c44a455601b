"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from threadline.config import AuthSettings, CacheSettings, RealtimeSettings, Settings
from threadline.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_cache_settings(self, settings: Settings) -> CacheSettings:
        """Provide listing cache settings."""
        return settings.cache

    @provide(scope=Scope.APP)
    def provide_realtime_settings(self, settings: Settings) -> RealtimeSettings:
        """Provide real-time broadcast settings."""
        return settings.realtime
