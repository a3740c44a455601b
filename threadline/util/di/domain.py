"""Domain layer DI providers."""

from dishka import Scope, provide

from threadline.config import AuthSettings, CacheSettings, RealtimeSettings
from threadline.domain.repository import CommentRepository, UserRepository
from threadline.domain.service import (
    Broadcaster,
    BroadcastService,
    Cache,
    CommentService,
    JWTService,
    ListingCacheService,
    UserService,
)
from threadline.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services that touch repositories are REQUEST-scoped to align with the
    session lifecycle. Stateless services are APP-scoped so WebSocket
    handlers can resolve them outside a request.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_listing_cache_service(
        self, cache: Cache, cache_settings: CacheSettings
    ) -> ListingCacheService:
        """Provide listing cache domain service."""
        return ListingCacheService(cache=cache, cache_settings=cache_settings)

    @provide(scope=Scope.APP)
    def get_broadcast_service(
        self, broadcaster: Broadcaster, realtime_settings: RealtimeSettings
    ) -> BroadcastService:
        """Provide broadcast domain service."""
        return BroadcastService(
            broadcaster=broadcaster, realtime_settings=realtime_settings
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        user_service: UserService,
        cache_service: ListingCacheService,
        broadcast_service: BroadcastService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            user_service=user_service,
            cache_service=cache_service,
            broadcast_service=broadcast_service,
        )
