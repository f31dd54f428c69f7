"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the
backing store.
"""

from datetime import datetime
from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import AccessToken, Identity, SigninResult


@runtime_checkable
class ICredentialStore(Protocol):
    """
    Persistence contract for identities.

    Every method is atomic over a single record. ``match`` arguments are
    equality filters on record fields.
    """

    def find_by_email(self, email: str) -> Optional[Identity]:
        ...

    def find_by_username(self, username: str) -> Optional[Identity]:
        ...

    def find_by_username_and_refresh_token(
        self, username: str, refresh_token: str
    ) -> Optional[Identity]:
        ...

    def insert(self, identity: Identity) -> Identity:
        """
        Persist a new identity.

        Raises:
            ConflictError: If the username or email is already taken
        """
        ...

    def update_fields(self, match: dict[str, Any], fields: dict[str, Any]) -> int:
        """Set ``fields`` on the matching record. Returns the number of records changed."""
        ...

    def clear_field(self, match: dict[str, Any], field: str) -> int:
        """Unset ``field`` on the matching record. Returns the number of records changed."""
        ...

    def set_if_absent(self, match: dict[str, Any], field: str, value: Any) -> bool:
        """Set ``field`` only if it is currently unset. Returns True if this call wrote it."""
        ...


@runtime_checkable
class IMailer(Protocol):
    """Outbound mail collaborator."""

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        """
        Raises:
            DeliveryError: If the message could not be delivered
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def signup(self, username: str, email: str, password: str) -> Identity:
        """
        Register a new identity.

        Raises:
            MissingFieldsError: If any field is empty
            EmailAlreadyExistsError: If the email is registered
            UsernameAlreadyExistsError: If the username is taken
        """
        ...

    async def signin(self, email: str, password: str) -> SigninResult:
        """
        Authenticate with email and password.

        Returns an access token and the identity's (possibly new) refresh token.

        Raises:
            InvalidCredentialsError: On unknown email or wrong password
        """
        ...

    async def refresh_access_token(self, refresh_token: str) -> AccessToken:
        """
        Raises:
            RefreshTokenNotFoundError: If the token is malformed or unknown
        """
        ...

    async def revoke_refresh_token(self, refresh_token: str) -> None:
        """
        Raises:
            RefreshTokenNotFoundError: If no stored token was cleared
        """
        ...

    async def forgot_password(self, email: str) -> datetime:
        """
        Email a password-reset link. Returns the link's expiry.

        Raises:
            UserNotFoundError: If no identity owns the email
            DeliveryError: If the email could not be sent
        """
        ...

    async def reset_password(self, reset_token: str, new_password: str) -> None:
        """
        Raises:
            InvalidTokenError, ExpiredTokenError, IntentMismatchError
        """
        ...

    async def request_activation(self, email: str) -> None:
        """Email an account-activation link if the email is registered."""
        ...

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate an access token and return the authenticated user.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...
