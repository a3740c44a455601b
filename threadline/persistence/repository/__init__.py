"""PostgreSQL repository implementations."""

from threadline.persistence.repository.comment import PostgresCommentRepository
from threadline.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresCommentRepository",
]
