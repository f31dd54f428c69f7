"""
Authentication service implementation.

Orchestrates signup, signin, refresh-token exchange and the password
reset / activation flows on top of the credential store.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from shared.config import Settings
from shared.models import AuthenticatedUser

from .codec import TokenCodec, TokenCodecConfig
from .exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidUsernameError,
    MissingFieldsError,
    MissingTokenError,
    UsernameAlreadyExistsError,
)
from .intent import IntentTokenFlow
from .interfaces import IAuthService, ICredentialStore, IMailer
from .issuer import AccessTokenIssuer
from .models import AccessToken, Identity, SigninResult
from .password import PasswordHasher
from .refresh import TOKEN_SEPARATOR, RefreshTokenManager


logger = logging.getLogger(__name__)


def _require(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise MissingFieldsError(missing)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Store access is synchronous; the async methods match the interface
    the route handlers await.
    """

    def __init__(
        self,
        store: ICredentialStore,
        hasher: PasswordHasher,
        issuer: AccessTokenIssuer,
        refresh: RefreshTokenManager,
        intents: IntentTokenFlow,
    ):
        self._store = store
        self._hasher = hasher
        self._issuer = issuer
        self._refresh = refresh
        self._intents = intents

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: ICredentialStore,
        mailer: IMailer,
        codec: Optional[TokenCodec] = None,
    ) -> "AuthService":
        """Wire an AuthService and its collaborators from configuration."""
        codec = codec or TokenCodec(TokenCodecConfig.from_settings(settings))
        hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
        issuer = AccessTokenIssuer(codec, ttl=timedelta(seconds=settings.access_token_ttl_seconds))
        refresh = RefreshTokenManager(store, issuer, token_bytes=settings.refresh_token_bytes)
        intents = IntentTokenFlow(
            store,
            codec,
            hasher,
            mailer,
            frontend_url=settings.frontend_url,
            reset_ttl=timedelta(seconds=settings.reset_token_ttl_seconds),
            activation_ttl=timedelta(seconds=settings.activation_token_ttl_seconds),
        )
        return cls(store, hasher, issuer, refresh, intents)

    async def signup(self, username: str, email: str, password: str) -> Identity:
        """Register a new identity after checking email, then username, uniqueness."""
        _require(email=email, username=username, password=password)
        if TOKEN_SEPARATOR in username:
            raise InvalidUsernameError(username)

        if self._store.find_by_email(email) is not None:
            raise EmailAlreadyExistsError(email)
        if self._store.find_by_username(username) is not None:
            raise UsernameAlreadyExistsError(username)

        identity = self._store.insert(
            Identity(
                username=username,
                email=email,
                password_hash=self._hasher.hash(password),
            )
        )
        logger.info("User registered: %s", username)
        return identity

    async def signin(self, email: str, password: str) -> SigninResult:
        _require(email=email, password=password)

        identity = self._store.find_by_email(email)
        if identity is None or not self._hasher.verify(password, identity.password_hash):
            logger.info("Failed signin attempt")
            raise InvalidCredentialsError()

        access = self._issuer.issue(identity)
        refresh_token = self._refresh.ensure(identity)
        logger.info("User signed in: %s", identity.username)
        return SigninResult(
            username=identity.username,
            access_token=access.access_token,
            access_token_expiration=access.expires_at,
            refresh_token=refresh_token,
        )

    async def refresh_access_token(self, refresh_token: str) -> AccessToken:
        return self._refresh.redeem(refresh_token)

    async def revoke_refresh_token(self, refresh_token: str) -> None:
        self._refresh.revoke(refresh_token)

    async def forgot_password(self, email: str) -> datetime:
        _require(email=email)
        return self._intents.request_reset(email)

    async def reset_password(self, reset_token: str, new_password: str) -> None:
        _require(reset_token=reset_token, password=new_password)
        self._intents.redeem_reset(reset_token, new_password)

    async def request_activation(self, email: str) -> None:
        _require(email=email)
        self._intents.request_activation(email)

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate an access token and return the authenticated user.

        Pure token check: the credential store is not consulted.
        """
        if not token:
            raise MissingTokenError()
        return self._issuer.verify(token)
