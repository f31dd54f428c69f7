"""
Access-token issuing and verification.

Access tokens are stateless: validity is signature + expiry, nothing is
persisted and nothing can revoke one before it expires.
"""

from datetime import timedelta

from pydantic import ValidationError as PydanticValidationError

from shared.models import AuthenticatedUser

from .codec import TokenCodec
from .exceptions import InvalidTokenError
from .models import AccessToken, AccessTokenClaims, Identity


DEFAULT_ACCESS_TOKEN_TTL = timedelta(hours=1)


class AccessTokenIssuer:
    """Mints short-lived access tokens bound to an identity."""

    def __init__(self, codec: TokenCodec, ttl: timedelta = DEFAULT_ACCESS_TOKEN_TTL):
        self._codec = codec
        self._ttl = ttl

    def issue(self, identity: Identity) -> AccessToken:
        """Issue an access token carrying the identity's email and username."""
        token = self._codec.sign(
            {"email": identity.email, "username": identity.username},
            self._ttl,
        )
        return AccessToken(access_token=token, expires_at=self._codec.expires_at(token))

    def verify(self, token: str) -> AuthenticatedUser:
        """
        Verify an access token and return the identity it proves.

        Intent tokens (no ``username`` claim) are rejected.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the token is not a valid access token
        """
        payload = self._codec.verify(token)
        try:
            claims = AccessTokenClaims(**payload)
        except PydanticValidationError as e:
            raise InvalidTokenError() from e
        return AuthenticatedUser(username=claims.username, email=claims.email)
