"""Caller identity extraction shared by routes."""

from fastapi import Cookie, Header

BEARER_PREFIX = "bearer "


def bearer_token(authorization: str | None) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header value."""
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :].strip() or None
    return None


def get_auth_token(
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> str | None:
    """JWT from the ``auth_token`` cookie, falling back to a Bearer header.

    Verification happens in the use cases; missing tokens are passed on as
    None so read-only routes stay public.
    """
    return auth_token or bearer_token(authorization)
