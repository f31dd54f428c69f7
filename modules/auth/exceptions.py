"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid, malformed or tampered with."""

    def __init__(self, message: str = "Failed to authenticate token."):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a signed token is past its expiry."""

    def __init__(self, message: str = "Failed to authenticate token. Token has expired."):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "No token provided."):
        super().__init__(message, code="MISSING_TOKEN")


class IntentMismatchError(AuthenticationError):
    """Raised when an intent token is redeemed for the wrong purpose."""

    def __init__(self, expected: str, actual: str | None):
        super().__init__(
            "Token is not valid for this operation.",
            code="INTENT_MISMATCH",
            details={"expected": expected, "actual": actual},
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised on signin with an unknown email or a wrong password."""

    def __init__(self):
        super().__init__("Authentication failed. Wrong email or password.", code="INVALID_CREDENTIALS")


class UserNotFoundError(NotFoundError):
    """Raised when no identity owns the given email."""

    def __init__(self, email: str):
        super().__init__(
            "No user registered with this email.",
            code="USER_NOT_FOUND",
            details={"email": email},
        )


class RefreshTokenNotFoundError(NotFoundError):
    """Raised when a refresh token is malformed or matches no identity."""

    def __init__(self):
        super().__init__("Refresh token is not valid.", code="REFRESH_TOKEN_NOT_FOUND")


class EmailAlreadyExistsError(ConflictError):
    """Raised on signup when the email is already registered."""

    def __init__(self, email: str):
        super().__init__(
            "There is already a user with this email.",
            code="EMAIL_EXISTS",
            details={"email": email},
        )


class UsernameAlreadyExistsError(ConflictError):
    """Raised on signup when the username is taken."""

    def __init__(self, username: str):
        super().__init__(
            f'Username "{username}" already exists.',
            code="USERNAME_EXISTS",
            details={"username": username},
        )


class MissingFieldsError(ValidationError):
    """Raised when required request fields are absent or empty."""

    def __init__(self, fields: list[str]):
        super().__init__(
            f"Must provide valid {', '.join(fields)}.",
            code="MISSING_FIELDS",
            details={"fields": fields},
        )


class InvalidUsernameError(ValidationError):
    """Raised on signup when the username contains the refresh-token separator."""

    def __init__(self, username: str):
        super().__init__(
            "Username must not contain '.'.",
            code="INVALID_USERNAME",
            details={"username": username},
        )
