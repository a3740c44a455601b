"""Domain services."""

from .base import Service
from .broadcast_service import Broadcaster, BroadcastService
from .cache_service import LISTING_NAMESPACE, Cache, ListingCacheService
from .comment_service import CommentService, normalize_content
from .jwt_service import JWTService
from .user_service import UserService

__all__ = [
    "BroadcastService",
    "Broadcaster",
    "Cache",
    "CommentService",
    "JWTService",
    "LISTING_NAMESPACE",
    "ListingCacheService",
    "Service",
    "UserService",
    "normalize_content",
]
