"""Domain value types for Threadline.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

MAX_CONTENT_LENGTH = 2000

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Largest row offset a listing may skip (PostgreSQL OFFSET is a 32-bit integer)
MAX_OFFSET = 2_147_483_647


class SortMode(str, Enum):
    """Ordering of a comment listing.

    Ties in the reaction-based orders break by newest first.
    """

    NEWEST = "newest"
    MOST_LIKED = "most-liked"
    MOST_DISLIKED = "most-disliked"


class ReactionKind(str, Enum):
    """Kind of reaction a user can toggle on a comment."""

    LIKE = "like"
    DISLIKE = "dislike"

    @property
    def opposite(self) -> "ReactionKind":
        """The reaction that is cleared when this one is applied."""
        if self is ReactionKind.LIKE:
            return ReactionKind.DISLIKE
        return ReactionKind.LIKE
