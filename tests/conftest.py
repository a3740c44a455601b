"""Test configuration and fixtures."""

from uuid import uuid4

import logfire

from threadline.config import AuthSettings, Settings
from threadline.domain.model import User
from threadline.domain.value import UserId
from threadline.util.jwt import create_token

# Keep spans local: no console noise, nothing sent
logfire.configure(send_to_logfire=False, console=False)


def make_user(name: str = "Test User", email: str | None = None) -> User:
    """Build a user with a fresh ID.

    Args:
        name: Display name
        email: Email; derived from the ID when omitted

    Returns:
        User domain model
    """
    user_id = UserId(uuid4())
    return User(
        id=user_id,
        name=name,
        email=email or f"{str(user_id)[:8]}@example.com",
    )


def make_token(user: User, settings: AuthSettings | None = None) -> str:
    """Sign a JWT for ``user`` with the environment's auth settings."""
    return create_token(
        str(user.id), user.email, user.name, settings or Settings().auth
    )
