"""Domain value objects for Threadline."""

from threadline.domain.value.identifiers import CommentId, UserId
from threadline.domain.value.types import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_CONTENT_LENGTH,
    MAX_OFFSET,
    MAX_PAGE_SIZE,
    ReactionKind,
    SortMode,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommentId",
    # Types
    "ReactionKind",
    "SortMode",
    # Limits
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_CONTENT_LENGTH",
    "MAX_OFFSET",
    "MAX_PAGE_SIZE",
]
