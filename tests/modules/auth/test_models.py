import pytest
from datetime import datetime, timezone

from modules.auth.models import (
    AccessTokenClaims,
    Identity,
    IntentTokenClaims,
    SigninResponse,
    TokenIntent,
)


class TestIdentity:
    def test_defaults(self):
        """New identities are unvalidated, non-admin and have no refresh token."""
        identity = Identity(username="alice", email="a@example.com", password_hash="h")
        assert identity.id is None
        assert identity.refresh_token is None
        assert identity.validated is False
        assert identity.admin is False
        assert identity.created_at.tzinfo is not None

    def test_parses_store_timestamp(self):
        identity = Identity(
            username="alice",
            email="a@example.com",
            password_hash="h",
            created_at="2024-01-01T00:00:00+00:00",
        )
        assert identity.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestTokenClaims:
    def test_access_claims_require_username(self):
        with pytest.raises(Exception):  # Pydantic ValidationError
            AccessTokenClaims(email="a@example.com", iat=1, exp=2)

    def test_intent_claims_without_intent(self):
        claims = IntentTokenClaims(email="a@example.com", iat=1, exp=2)
        assert claims.intent is None

    def test_intent_values(self):
        assert TokenIntent.RESET_PASSWORD.value == "reset-password"
        assert TokenIntent.VALIDATE_ACCOUNT.value == "validate-account"


class TestSigninResponse:
    def test_envelope_defaults(self):
        response = SigninResponse(
            username="alice",
            access_token="t",
            access_token_expiration=datetime(2024, 1, 1, tzinfo=timezone.utc),
            refresh_token="alice.abc",
        )
        data = response.model_dump()
        assert data["success"] is True
        assert data["message"] == "Enjoy your token!"
        assert data["message_code"] == "SIGNIN_SUCCESS"
