"""
Devices module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
)


class DeviceNotFoundError(NotFoundError):
    """Raised when the caller has no device with that name."""

    def __init__(self, device_name: str):
        super().__init__(
            "Device not found.",
            code="DEVICE_NOT_FOUND",
            details={"device_name": device_name},
        )


class PinNotFoundError(NotFoundError):
    """Raised when a device has no pin with that name."""

    def __init__(self, device_name: str, pin: str):
        super().__init__(
            "Pin not found.",
            code="PIN_NOT_FOUND",
            details={"device_name": device_name, "pin": pin},
        )


class DeviceAlreadyExistsError(ConflictError):
    """Raised when the caller already has a device with that name."""

    def __init__(self, username: str, device_name: str):
        super().__init__(
            f"Device already exists for that username: {username} - {device_name}",
            code="DEVICE_EXISTS",
            details={"device_name": device_name},
        )


class DeviceAccessDeniedError(AuthorizationError):
    """Raised when a request targets another user's devices."""

    def __init__(self, username: str, owner: str):
        super().__init__(
            "Access denied to another user's devices.",
            code="DEVICE_ACCESS_DENIED",
            details={"username": username, "owner": owner},
        )
