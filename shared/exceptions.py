"""
Base exception classes for the Firstmakers backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application: the API
layer maps each base class to one HTTP status code.
"""

from typing import Optional, Any


class FirstmakersError(Exception):
    """
    Base exception for all Firstmakers errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(FirstmakersError):
    """Resource not found."""

    pass


class ValidationError(FirstmakersError):
    """Input validation failed."""

    pass


class ConflictError(FirstmakersError):
    """Resource already exists."""

    pass


class AuthenticationError(FirstmakersError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(FirstmakersError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(FirstmakersError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StoreError(ExternalServiceError):
    """The backing store failed or could not be reached."""

    def __init__(self, message: str = "Storage backend unavailable", details: Optional[dict[str, Any]] = None):
        super().__init__(message, service="store", code="STORE_ERROR", details=details)


class DeliveryError(ExternalServiceError):
    """An outbound email could not be delivered."""

    def __init__(self, recipient: str, reason: str = ""):
        super().__init__(
            "Email could not be delivered",
            service="mail",
            code="DELIVERY_ERROR",
            details={"reason": reason} if reason else None,
        )
        self.recipient = recipient
