"""Real-time infrastructure providers."""

from dishka import Scope, provide

from threadline.adapter.realtime.hub import WebSocketHub
from threadline.config import RealtimeSettings
from threadline.domain.service import Broadcaster
from threadline.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Real-time component base."""

    __mock_component__ = "realtime"


class ProdRealtimeProvider(RealtimeProvider):
    """Production real-time provider: in-process WebSocket hub."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_hub(self, realtime_settings: RealtimeSettings) -> WebSocketHub:
        """Provide the WebSocket hub shared by all connections."""
        return WebSocketHub(
            send_timeout_seconds=realtime_settings.send_timeout_seconds
        )

    @provide(scope=Scope.APP)
    def get_broadcaster(self, hub: WebSocketHub) -> Broadcaster:
        """Publish through the hub."""
        return hub
