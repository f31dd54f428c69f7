"""
Authentication module.

Handles signup/signin, the access/refresh/intent token lifecycle and the
credential store.

Public API:
- IAuthService: Interface for auth operations
- ICredentialStore: Persistence contract for identities
- Identity, AccessToken, SigninResult, TokenIntent: Models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, ICredentialStore, IMailer
from .models import AccessToken, Identity, SigninResult, TokenIntent
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    IntentMismatchError,
    InvalidCredentialsError,
    UserNotFoundError,
    RefreshTokenNotFoundError,
    EmailAlreadyExistsError,
    UsernameAlreadyExistsError,
    MissingFieldsError,
    InvalidUsernameError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ICredentialStore",
    "IMailer",
    # Models
    "AccessToken",
    "Identity",
    "SigninResult",
    "TokenIntent",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "IntentMismatchError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "RefreshTokenNotFoundError",
    "EmailAlreadyExistsError",
    "UsernameAlreadyExistsError",
    "MissingFieldsError",
    "InvalidUsernameError",
]
