"""
Refresh-token lifecycle.

A refresh token is ``<username>.<random hex>`` stored on the identity
record. It is long-lived and reusable until explicitly revoked; redeeming
it does not rotate it.
"""

import logging
import secrets

from .exceptions import RefreshTokenNotFoundError
from .interfaces import ICredentialStore
from .issuer import AccessTokenIssuer
from .models import AccessToken, Identity


logger = logging.getLogger(__name__)

DEFAULT_TOKEN_BYTES = 40
TOKEN_SEPARATOR = "."


def parse_username(refresh_token: str) -> str:
    """
    Return the username prefix of a refresh token.

    The prefix only routes the lookup; the store match on the full token
    value is what authenticates it.

    Raises:
        RefreshTokenNotFoundError: If the token has no ``.`` or an empty prefix
    """
    if not refresh_token or TOKEN_SEPARATOR not in refresh_token:
        raise RefreshTokenNotFoundError()
    username = refresh_token.split(TOKEN_SEPARATOR, 1)[0]
    if not username:
        raise RefreshTokenNotFoundError()
    return username


class RefreshTokenManager:
    """Generates, stores, redeems and revokes refresh tokens."""

    def __init__(
        self,
        store: ICredentialStore,
        issuer: AccessTokenIssuer,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
    ):
        self._store = store
        self._issuer = issuer
        self._token_bytes = token_bytes

    def generate(self, username: str) -> str:
        return f"{username}{TOKEN_SEPARATOR}{secrets.token_hex(self._token_bytes)}"

    def ensure(self, identity: Identity) -> str:
        """
        Return the identity's refresh token, creating one if it has none.

        Creation uses a set-if-absent write. If another request stored a
        token first, that token is read back and returned instead.
        """
        if identity.refresh_token:
            return identity.refresh_token

        candidate = self.generate(identity.username)
        if self._store.set_if_absent({"username": identity.username}, "refresh_token", candidate):
            logger.info("Issued refresh token for %s", identity.username)
            return candidate

        current = self._store.find_by_username(identity.username)
        if current is None or not current.refresh_token:
            # Record vanished or was revoked between the two calls
            raise RefreshTokenNotFoundError()
        return current.refresh_token

    def redeem(self, refresh_token: str) -> AccessToken:
        """
        Exchange a refresh token for a new access token.

        Raises:
            RefreshTokenNotFoundError: If the token is malformed or unknown
        """
        username = parse_username(refresh_token)
        identity = self._store.find_by_username_and_refresh_token(username, refresh_token)
        if identity is None:
            logger.debug("Refresh token rejected for %s", username)
            raise RefreshTokenNotFoundError()
        logger.info("Access token refreshed for %s", username)
        return self._issuer.issue(identity)

    def revoke(self, refresh_token: str) -> None:
        """
        Clear a stored refresh token.

        Raises:
            RefreshTokenNotFoundError: If no record held this token
        """
        username = parse_username(refresh_token)
        cleared = self._store.clear_field(
            {"username": username, "refresh_token": refresh_token},
            "refresh_token",
        )
        if not cleared:
            raise RefreshTokenNotFoundError()
        logger.info("Revoked refresh token for %s", username)
