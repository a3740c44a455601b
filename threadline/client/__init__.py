"""Client helpers for following comment threads in real time."""

from .subscriber import CommentFeed, CommentSubscriber

__all__ = ["CommentFeed", "CommentSubscriber"]
