"""
Devices module interface.

The API layer depends on IDeviceService for all device and pin operations.
Every method takes the authenticated username as the owner key.
"""

from typing import Any, Protocol, runtime_checkable

from .models import Device


@runtime_checkable
class IDeviceService(Protocol):
    """Interface for device and pin operations."""

    async def list_devices(self, username: str) -> list[Device]:
        ...

    async def list_active_devices(self, username: str, minutes: int) -> list[Device]:
        """Devices updated within the last ``minutes``."""
        ...

    async def get_device(self, username: str, device_name: str) -> Device:
        """
        Raises:
            DeviceNotFoundError: If the user has no such device
        """
        ...

    async def create_device(self, username: str, device_name: str, pins: dict[str, Any]) -> Device:
        """
        Raises:
            DeviceAlreadyExistsError: If the name is taken for this user
        """
        ...

    async def update_pins(self, username: str, device_name: str, pins: dict[str, Any]) -> Device:
        """Merge ``pins`` into the device's pin map."""
        ...

    async def delete_device(self, username: str, device_name: str) -> None:
        ...

    async def set_pin(self, username: str, device_name: str, pin: str, value: Any) -> Device:
        """Write one pin value, creating the device if it does not exist."""
        ...

    async def delete_pin(self, username: str, device_name: str, pin: str) -> Device:
        ...

    async def log_data(
        self,
        username: str,
        owner: str,
        device_name: str,
        pin: str,
        payload: Any,
    ) -> Device:
        """
        Record a data point for one of the caller's own devices.

        Raises:
            DeviceAccessDeniedError: If ``owner`` is not the caller
        """
        ...
