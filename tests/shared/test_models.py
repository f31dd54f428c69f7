"""
Tests for shared models.
"""

import pytest
from pydantic import ValidationError

from shared.models import ApiResponse, AuthenticatedUser


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_ignores_extra_claims(self):
        user = AuthenticatedUser(username="alice", email="a@example.com", iat=1, exp=2)
        assert user.model_dump() == {"username": "alice", "email": "a@example.com"}

    def test_is_immutable(self):
        user = AuthenticatedUser(username="alice", email="a@example.com")
        with pytest.raises(ValidationError):
            user.username = "bob"

    def test_requires_username(self):
        with pytest.raises(ValidationError):
            AuthenticatedUser(email="a@example.com")


class TestApiResponse:
    def test_defaults(self):
        assert ApiResponse().model_dump() == {"success": True, "message": "", "message_code": None}
