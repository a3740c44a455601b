"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from threadline.config import AuthSettings
from threadline.domain.error import UnauthenticatedError
from threadline.domain.service import JWTService
from threadline.util.jwt import JWTError

SETTINGS = AuthSettings(jwt_secret="unit-test-secret-with-enough-bytes!")


class TestJWTService:
    """Tests for JWTService."""

    def test_round_trip(self):
        """A created token verifies back to its claims."""
        # Arrange
        service = JWTService(SETTINGS)
        user_id = str(uuid4())

        # Act
        token = service.create_token(user_id, "ada@example.com", "Ada")
        payload = service.verify_token(token)

        # Assert
        assert payload.user_id == user_id
        assert payload.email == "ada@example.com"
        assert payload.name == "Ada"

    def test_wrong_secret_rejected(self):
        """Tokens signed elsewhere don't verify."""
        # Arrange
        other = JWTService(AuthSettings(jwt_secret="another-secret-of-sufficient-size"))
        token = other.create_token(str(uuid4()), "a@b.c", "A")

        # Act & Assert
        with pytest.raises(JWTError, match="Invalid token"):
            JWTService(SETTINGS).verify_token(token)

    def test_expired_token_rejected(self):
        """Expired tokens fail verification."""
        # Arrange
        token = jwt.encode(
            {
                "user_id": str(uuid4()),
                "email": "a@b.c",
                "name": "A",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        # Act & Assert
        with pytest.raises(JWTError, match="expired"):
            JWTService(SETTINGS).verify_token(token)

    def test_get_user_id_from_token(self):
        """Valid tokens yield the user ID, anything else None."""
        # Arrange
        service = JWTService(SETTINGS)
        user_id = uuid4()
        token = service.create_token(str(user_id), "a@b.c", "A")
        not_a_uuid = service.create_token("user-1", "a@b.c", "A")

        # Act & Assert
        assert service.get_user_id_from_token(token) == user_id
        assert service.get_user_id_from_token(None) is None
        assert service.get_user_id_from_token("garbage") is None
        assert service.get_user_id_from_token(not_a_uuid) is None

    def test_require_user_id(self):
        """Missing identity raises UnauthenticatedError."""
        # Arrange
        service = JWTService(SETTINGS)

        # Act & Assert
        with pytest.raises(UnauthenticatedError):
            service.require_user_id(None)
