"""
Signed token codec.

Signs, verifies and decodes compact JWTs carrying a payload and an
absolute expiry. The codec is constructed from an explicit config so that
nothing reads the signing secret from process-wide state.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import jwt

from shared.config import Settings

from .exceptions import ExpiredTokenError, InvalidTokenError


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenCodecConfig:
    """Signing parameters for TokenCodec."""

    secret: str
    algorithm: str = "HS256"

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodecConfig":
        return cls(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


class TokenCodec:
    """
    Tamper-evident token encoding with enforced expiry.

    Signature checking is delegated to PyJWT; expiry is checked against
    the codec's own clock so it can be controlled in tests.
    """

    def __init__(self, config: TokenCodecConfig, clock: Optional[Clock] = None):
        if not config.secret:
            raise ValueError("Token signing secret must not be empty")
        self._config = config
        self._clock = clock or utc_now

    def sign(self, payload: dict[str, Any], ttl: timedelta) -> str:
        """
        Sign a payload, stamping it with ``iat`` and an absolute ``exp``.

        Args:
            payload: Claims to embed (must be JSON-serialisable)
            ttl: Lifetime of the token from now

        Returns:
            Compact signed token string
        """
        now = self._clock()
        claims = dict(payload)
        claims["iat"] = int(now.timestamp())
        claims["exp"] = int((now + ttl).timestamp())
        return jwt.encode(claims, self._config.secret, algorithm=self._config.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """
        Verify a token and return its payload.

        A token whose ``exp`` is in the past is always reported as expired,
        whatever the state of its signature.

        Raises:
            ExpiredTokenError: If the token's expiry has passed
            InvalidTokenError: If the token is malformed, unsigned by us, or lacks ``exp``
        """
        claims = self.decode(token)

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError()
        if exp <= self._clock().timestamp():
            raise ExpiredTokenError()

        try:
            return jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"require": ["exp"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e

    def decode(self, token: str) -> dict[str, Any]:
        """
        Read a token's payload without verifying it.

        Only for display purposes such as reporting an expiry time.

        Raises:
            InvalidTokenError: If the token cannot be parsed at all
        """
        if not token:
            raise InvalidTokenError()
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e

    def expires_at(self, token: str) -> datetime:
        """Absolute expiry of a token as an aware UTC datetime."""
        return datetime.fromtimestamp(self.decode(token)["exp"], tz=timezone.utc)
