"""
Password-reset and account-activation flows.

Both flows mail the user a link carrying a signed intent token. Intent
tokens are never stored: at redemption time they are valid if the
signature checks out, they have not expired and their intent tag matches
the operation.
"""

import logging
from datetime import datetime, timedelta
from urllib.parse import urlencode

from pydantic import ValidationError as PydanticValidationError

from .codec import TokenCodec
from .exceptions import IntentMismatchError, InvalidTokenError, UserNotFoundError
from .interfaces import ICredentialStore, IMailer
from .models import IntentTokenClaims, TokenIntent
from .password import PasswordHasher


logger = logging.getLogger(__name__)

DEFAULT_RESET_TTL = timedelta(hours=1)
DEFAULT_ACTIVATION_TTL = timedelta(days=30)

RESET_SUBJECT = "Reset your Firstmakers password"
RESET_HTML = """<p>Hello {username},</p>
<p>Someone asked to reset the password of your Firstmakers account.</p>
<p><a href="{link}">Choose a new password</a> (valid for one hour).</p>
<p>If it was not you, you can ignore this email.</p>"""

ACTIVATION_SUBJECT = "Activate your Firstmakers account"
ACTIVATION_HTML = """<p>Hello {username},</p>
<p>Welcome to Firstmakers!</p>
<p><a href="{link}">Activate your account</a></p>"""


class IntentTokenFlow:
    """Issues and redeems reset-password / validate-account tokens."""

    def __init__(
        self,
        store: ICredentialStore,
        codec: TokenCodec,
        hasher: PasswordHasher,
        mailer: IMailer,
        frontend_url: str,
        reset_ttl: timedelta = DEFAULT_RESET_TTL,
        activation_ttl: timedelta = DEFAULT_ACTIVATION_TTL,
    ):
        self._store = store
        self._codec = codec
        self._hasher = hasher
        self._mailer = mailer
        self._frontend_url = frontend_url.rstrip("/")
        self._reset_ttl = reset_ttl
        self._activation_ttl = activation_ttl

    def issue(self, email: str, intent: TokenIntent, ttl: timedelta) -> str:
        return self._codec.sign({"email": email, "intent": intent.value}, ttl)

    def _link(self, path: str, token: str) -> str:
        return f"{self._frontend_url}/{path}?{urlencode({'token': token})}"

    def request_reset(self, email: str) -> datetime:
        """
        Mail a password-reset link to the owner of ``email``.

        Returns:
            Absolute expiry of the reset link

        Raises:
            UserNotFoundError: If no identity owns the email
            DeliveryError: If the email could not be sent
        """
        identity = self._store.find_by_email(email)
        if identity is None:
            raise UserNotFoundError(email)

        token = self.issue(identity.email, TokenIntent.RESET_PASSWORD, self._reset_ttl)
        link = self._link("resetpassword", token)
        self._mailer.send(
            identity.email,
            RESET_SUBJECT,
            RESET_HTML.format(username=identity.username, link=link),
        )
        logger.info("Password reset requested for %s", identity.username)
        return self._codec.expires_at(token)

    def redeem_reset(self, token: str, new_password: str) -> None:
        """
        Set a new password using a reset token.

        Outstanding access and refresh tokens are left untouched.

        Raises:
            InvalidTokenError: If the token is malformed or tampered with
            ExpiredTokenError: If the token has expired
            IntentMismatchError: If the token was not issued for a password reset
            UserNotFoundError: If the identity no longer exists
        """
        claims = self._claims(token)
        if claims.intent != TokenIntent.RESET_PASSWORD.value:
            raise IntentMismatchError(TokenIntent.RESET_PASSWORD.value, claims.intent)

        updated = self._store.update_fields(
            {"email": claims.email},
            {"password_hash": self._hasher.hash(new_password)},
        )
        if not updated:
            raise UserNotFoundError(claims.email)
        logger.info("Password reset completed for %s", claims.email)

    def request_activation(self, email: str) -> None:
        """
        Mail an account-activation link to the owner of ``email``.

        Unknown emails are logged and otherwise ignored so the caller
        cannot probe which addresses are registered.

        Raises:
            DeliveryError: If the email could not be sent
        """
        identity = self._store.find_by_email(email)
        if identity is None:
            logger.debug("Activation requested for unknown email")
            return

        token = self.issue(identity.email, TokenIntent.VALIDATE_ACCOUNT, self._activation_ttl)
        self._mailer.send(
            identity.email,
            ACTIVATION_SUBJECT,
            ACTIVATION_HTML.format(username=identity.username, link=self._link("activate", token)),
        )
        logger.info("Activation link sent to %s", identity.username)

    def _claims(self, token: str) -> IntentTokenClaims:
        payload = self._codec.verify(token)
        try:
            return IntentTokenClaims(**payload)
        except PydanticValidationError as e:
            raise InvalidTokenError() from e
