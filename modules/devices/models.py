"""
Device data models.

A device belongs to one user and holds a free-form map of named pins to
their last written values.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, Field


class Device(BaseModel):
    """A user's device and its pin values."""

    id: Optional[str] = None
    username: str = Field(..., description="Owner (token username)")
    device_name: str
    pins: dict[str, Any] = Field(default_factory=dict)
    updated: datetime


class CreateDeviceRequest(BaseModel):
    device_name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("device_name", "deviceName"),
    )
    pins: dict[str, Any] = Field(default_factory=dict)


class UpdateDeviceRequest(BaseModel):
    """Pins to merge into the device; pins not listed keep their value."""

    pins: dict[str, Any] = Field(default_factory=dict)


class PinValueRequest(BaseModel):
    value: Any = None


class DataLogRequest(BaseModel):
    payload: Any = None
