"""Tests for password-reset and account-activation flows."""

from datetime import timedelta
from urllib.parse import parse_qs, urlparse
import re

import pytest

from modules.auth.exceptions import (
    ExpiredTokenError,
    IntentMismatchError,
    InvalidTokenError,
    UserNotFoundError,
)
from modules.auth.intent import IntentTokenFlow
from modules.auth.models import Identity, TokenIntent
from modules.auth.password import PasswordHasher

from tests.conftest import create_test_token, make_codec


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def flow(store, codec, hasher, mailer) -> IntentTokenFlow:
    return IntentTokenFlow(store, codec, hasher, mailer, frontend_url="https://app.example.com/")


@pytest.fixture
def alice(store, hasher) -> Identity:
    return store.insert(
        Identity(username="alice", email="alice@example.com", password_hash=hasher.hash("old-pass"))
    )


def _token_from_mail(mail: dict) -> str:
    href = re.search(r'href="([^"]+)"', mail["html"]).group(1)
    return parse_qs(urlparse(href).query)["token"][0]


class TestRequestReset:

    def test_mails_link_and_returns_expiry(self, flow, mailer, codec, alice):
        expires = flow.request_reset("alice@example.com")

        assert len(mailer.sent) == 1
        mail = mailer.sent[0]
        assert mail["to"] == "alice@example.com"
        assert "https://app.example.com/resetpassword?token=" in mail["html"]

        token = _token_from_mail(mail)
        claims = codec.verify(token)
        assert claims["intent"] == "reset-password"
        assert claims["email"] == "alice@example.com"
        assert codec.expires_at(token) == expires

    def test_unknown_email(self, flow, mailer):
        with pytest.raises(UserNotFoundError):
            flow.request_reset("nobody@example.com")
        assert mailer.sent == []


class TestRedeemReset:

    def test_sets_new_password(self, flow, store, hasher, alice):
        token = flow.issue("alice@example.com", TokenIntent.RESET_PASSWORD, timedelta(hours=1))

        flow.redeem_reset(token, "new-pass")

        stored = store.records["alice"]
        assert hasher.verify("new-pass", stored.password_hash)
        assert not hasher.verify("old-pass", stored.password_hash)

    def test_rejects_activation_token(self, flow, store, alice):
        before = store.records["alice"].password_hash
        token = flow.issue("alice@example.com", TokenIntent.VALIDATE_ACCOUNT, timedelta(hours=1))

        with pytest.raises(IntentMismatchError):
            flow.redeem_reset(token, "new-pass")

        assert store.records["alice"].password_hash == before

    def test_rejects_access_token(self, flow, alice):
        with pytest.raises(IntentMismatchError):
            flow.redeem_reset(create_test_token(email="alice@example.com"), "new-pass")

    def test_rejects_expired(self, flow, alice):
        token = flow.issue("alice@example.com", TokenIntent.RESET_PASSWORD, timedelta(seconds=-1))
        with pytest.raises(ExpiredTokenError):
            flow.redeem_reset(token, "new-pass")

    def test_rejects_foreign_signature(self, flow, alice):
        token = make_codec(secret="other").sign(
            {"email": "alice@example.com", "intent": "reset-password"}, timedelta(hours=1)
        )
        with pytest.raises(InvalidTokenError):
            flow.redeem_reset(token, "new-pass")

    def test_token_without_email(self, flow, codec):
        token = codec.sign({"intent": "reset-password"}, timedelta(hours=1))
        with pytest.raises(InvalidTokenError):
            flow.redeem_reset(token, "new-pass")

    def test_identity_deleted(self, flow):
        token = flow.issue("gone@example.com", TokenIntent.RESET_PASSWORD, timedelta(hours=1))
        with pytest.raises(UserNotFoundError):
            flow.redeem_reset(token, "new-pass")


class TestRequestActivation:

    def test_mails_activation_link(self, flow, mailer, codec, alice):
        flow.request_activation("alice@example.com")

        mail = mailer.sent[0]
        assert "https://app.example.com/activate?token=" in mail["html"]
        claims = codec.verify(_token_from_mail(mail))
        assert claims["intent"] == "validate-account"
        assert claims["exp"] - claims["iat"] == 30 * 24 * 3600

    def test_unknown_email_is_silent(self, flow, mailer):
        flow.request_activation("nobody@example.com")
        assert mailer.sent == []
