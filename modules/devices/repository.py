"""
Device repository for database access.

Encapsulates all Supabase queries and data mapping for the ``devices``
table. Every query is filtered by the owner's username.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.exceptions import ConflictError
from shared.repository import BaseRepository

from .exceptions import DeviceAlreadyExistsError
from .models import Device


DEVICES_TABLE = "devices"


class DeviceRepository(BaseRepository[Device]):
    """
    Repository for device data access.

    Note: This repository does NOT decide who may touch a device.
    The service layer passes the authenticated username into every call.
    """

    def list_for_user(self, username: str) -> list[Device]:
        rows = self._execute(
            self._db.table(DEVICES_TABLE)
            .select("*")
            .eq("username", username)
            .order("device_name")
        )
        return [self._map_to_device(r) for r in rows]

    def list_updated_since(self, username: str, since: datetime) -> list[Device]:
        rows = self._execute(
            self._db.table(DEVICES_TABLE)
            .select("*")
            .eq("username", username)
            .gte("updated", since.isoformat())
            .order("updated", desc=True)
        )
        return [self._map_to_device(r) for r in rows]

    def get(self, username: str, device_name: str) -> Optional[Device]:
        rows = self._execute(
            self._db.table(DEVICES_TABLE)
            .select("*")
            .eq("username", username)
            .eq("device_name", device_name)
            .limit(1)
        )
        return self._map_to_device(rows[0]) if rows else None

    def create(self, username: str, device_name: str, pins: dict[str, Any]) -> Device:
        """
        Insert a new device.

        Raises:
            DeviceAlreadyExistsError: If the user already has a device with that name
        """
        data = {
            "username": username,
            "device_name": device_name,
            "pins": pins,
            "updated": datetime.now(timezone.utc).isoformat(),
        }
        try:
            rows = self._execute(self._db.table(DEVICES_TABLE).insert(data))
        except ConflictError as e:
            raise DeviceAlreadyExistsError(username, device_name) from e
        return self._map_to_device(rows[0])

    def replace_pins(self, username: str, device_name: str, pins: dict[str, Any]) -> Optional[Device]:
        """Overwrite the pin map and bump ``updated``. Returns None if the device is missing."""
        rows = self._execute(
            self._db.table(DEVICES_TABLE)
            .update({"pins": pins, "updated": datetime.now(timezone.utc).isoformat()})
            .eq("username", username)
            .eq("device_name", device_name)
        )
        return self._map_to_device(rows[0]) if rows else None

    def delete(self, username: str, device_name: str) -> bool:
        """Delete a device. Returns True if a row was removed."""
        rows = self._execute(
            self._db.table(DEVICES_TABLE)
            .delete()
            .eq("username", username)
            .eq("device_name", device_name)
        )
        return len(rows) > 0

    def _map_to_device(self, data: dict[str, Any]) -> Device:
        """Map database row to Device model."""
        return Device(
            id=str(data["id"]) if data.get("id") is not None else None,
            username=data["username"],
            device_name=data["device_name"],
            pins=data.get("pins") or {},
            updated=data["updated"],
        )
