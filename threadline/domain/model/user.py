"""User entity.

Users are owned by the external identity service; we only read them to
validate authors and inline author details into comment projections.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from threadline.domain.model.common import DomainModel, utcnow
from threadline.domain.value import UserId


class User(DomainModel):
    """User entity."""

    id: UserId
    name: str = Field(min_length=1, max_length=255)
    email: str
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
