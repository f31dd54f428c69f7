"""
Devices module.

Handles a user's devices and the values of their named pins.

Public API:
- IDeviceService: Interface for device operations
- Device: Device with its pin map
- Device exceptions
"""

from .interfaces import IDeviceService
from .models import Device, CreateDeviceRequest, UpdateDeviceRequest, PinValueRequest, DataLogRequest
from .exceptions import (
    DeviceNotFoundError,
    PinNotFoundError,
    DeviceAlreadyExistsError,
    DeviceAccessDeniedError,
)

__all__ = [
    # Interface
    "IDeviceService",
    # Models
    "Device",
    "CreateDeviceRequest",
    "UpdateDeviceRequest",
    "PinValueRequest",
    "DataLogRequest",
    # Exceptions
    "DeviceNotFoundError",
    "PinNotFoundError",
    "DeviceAlreadyExistsError",
    "DeviceAccessDeniedError",
]
