"""
Device service implementation.

Owner scoping: every operation receives the username from the verified
access token and passes it to the repository as a filter.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from .exceptions import (
    DeviceAccessDeniedError,
    DeviceAlreadyExistsError,
    DeviceNotFoundError,
    PinNotFoundError,
)
from .interfaces import IDeviceService
from .models import Device
from .repository import DeviceRepository


logger = logging.getLogger(__name__)

DEFAULT_ACTIVE_WINDOW_MINUTES = 60 * 24


class DeviceService(IDeviceService):
    """Device and pin operations on top of DeviceRepository."""

    def __init__(self, repository: DeviceRepository):
        self._repo = repository

    async def list_devices(self, username: str) -> list[Device]:
        return self._repo.list_for_user(username)

    async def list_active_devices(
        self,
        username: str,
        minutes: int = DEFAULT_ACTIVE_WINDOW_MINUTES,
    ) -> list[Device]:
        since = datetime.now(timezone.utc) - timedelta(minutes=minutes)
        return self._repo.list_updated_since(username, since)

    async def get_device(self, username: str, device_name: str) -> Device:
        device = self._repo.get(username, device_name)
        if device is None:
            raise DeviceNotFoundError(device_name)
        return device

    async def create_device(self, username: str, device_name: str, pins: dict[str, Any]) -> Device:
        if self._repo.get(username, device_name) is not None:
            raise DeviceAlreadyExistsError(username, device_name)
        device = self._repo.create(username, device_name, pins)
        logger.info("Device created: %s/%s", username, device_name)
        return device

    async def update_pins(self, username: str, device_name: str, pins: dict[str, Any]) -> Device:
        device = await self.get_device(username, device_name)
        merged = {**device.pins, **pins}
        updated = self._repo.replace_pins(username, device_name, merged)
        if updated is None:
            raise DeviceNotFoundError(device_name)
        return updated

    async def delete_device(self, username: str, device_name: str) -> None:
        if not self._repo.delete(username, device_name):
            raise DeviceNotFoundError(device_name)
        logger.info("Device deleted: %s/%s", username, device_name)

    async def set_pin(self, username: str, device_name: str, pin: str, value: Any) -> Device:
        device = self._repo.get(username, device_name)
        if device is None:
            try:
                return self._repo.create(username, device_name, {pin: value})
            except DeviceAlreadyExistsError:
                # Created by a concurrent write; fall through to the merge
                device = await self.get_device(username, device_name)

        updated = self._repo.replace_pins(username, device_name, {**device.pins, pin: value})
        if updated is None:
            raise DeviceNotFoundError(device_name)
        return updated

    async def delete_pin(self, username: str, device_name: str, pin: str) -> Device:
        device = await self.get_device(username, device_name)
        if pin not in device.pins:
            raise PinNotFoundError(device_name, pin)

        pins = {name: value for name, value in device.pins.items() if name != pin}
        updated = self._repo.replace_pins(username, device_name, pins)
        if updated is None:
            raise DeviceNotFoundError(device_name)
        return updated

    async def log_data(
        self,
        username: str,
        owner: str,
        device_name: str,
        pin: str,
        payload: Any,
    ) -> Device:
        if owner != username:
            raise DeviceAccessDeniedError(username, owner)
        return await self.set_pin(username, device_name, pin, payload)
