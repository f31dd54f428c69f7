"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import timedelta
from typing import Any, Optional

from api.dependencies import reset_container
from modules.auth.codec import TokenCodec, TokenCodecConfig
from modules.auth.models import Identity
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def make_codec(secret: str = TEST_JWT_SECRET, clock=None) -> TokenCodec:
    return TokenCodec(TokenCodecConfig(secret=secret), clock=clock)


def create_test_token(
    username: str = "alice",
    email: str = "alice@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create an access token the way the issuer does.

    Args:
        username: Username claim
        email: Email claim
        expired: If True, the token expired an hour ago
        secret: Signing secret
    """
    ttl = timedelta(hours=-1) if expired else timedelta(hours=1)
    return make_codec(secret).sign({"email": email, "username": username}, ttl)


class FakeCredentialStore:
    """
    In-memory ICredentialStore.

    Each method runs to completion without yielding, so it is atomic with
    respect to other calls, as the real store's single-statement writes are.
    """

    def __init__(self) -> None:
        self.records: dict[str, Identity] = {}
        self.calls: list[str] = []

    def _matches(self, identity: Identity, match: dict[str, Any]) -> bool:
        return all(getattr(identity, k) == v for k, v in match.items())

    def find_by_email(self, email: str) -> Optional[Identity]:
        self.calls.append("find_by_email")
        return next((i for i in self.records.values() if i.email == email), None)

    def find_by_username(self, username: str) -> Optional[Identity]:
        self.calls.append("find_by_username")
        return self.records.get(username)

    def find_by_username_and_refresh_token(self, username: str, refresh_token: str) -> Optional[Identity]:
        self.calls.append("find_by_username_and_refresh_token")
        identity = self.records.get(username)
        if identity is not None and identity.refresh_token == refresh_token:
            return identity
        return None

    def insert(self, identity: Identity) -> Identity:
        self.calls.append("insert")
        stored = identity.model_copy(update={"id": str(len(self.records) + 1)})
        self.records[identity.username] = stored
        return stored

    def update_fields(self, match: dict[str, Any], fields: dict[str, Any]) -> int:
        self.calls.append("update_fields")
        count = 0
        for username, identity in list(self.records.items()):
            if self._matches(identity, match):
                self.records[username] = identity.model_copy(update=fields)
                count += 1
        return count

    def clear_field(self, match: dict[str, Any], field: str) -> int:
        return self.update_fields(match, {field: None})

    def set_if_absent(self, match: dict[str, Any], field: str, value: Any) -> bool:
        self.calls.append("set_if_absent")
        for username, identity in self.records.items():
            if self._matches(identity, match) and getattr(identity, field) is None:
                self.records[username] = identity.model_copy(update={field: value})
                return True
        return False


class FakeMailer:
    """Records sent messages instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Pin settings to test values and start every test with a fresh container."""
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("SMTP_ENABLED", "false")
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()


@pytest.fixture
def store() -> FakeCredentialStore:
    return FakeCredentialStore()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def codec() -> TokenCodec:
    return make_codec()


@pytest.fixture
def auth_token() -> str:
    """Create a valid access token for alice."""
    return create_test_token()


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
