"""
Device API endpoints.

All routes require a bearer token; devices are always looked up under the
token's username.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_device_service
from api.middleware.auth import get_current_user
from shared.models import ApiResponse, AuthenticatedUser

from .interfaces import IDeviceService
from .models import (
    CreateDeviceRequest,
    DataLogRequest,
    Device,
    PinValueRequest,
    UpdateDeviceRequest,
)

router = APIRouter()
data_router = APIRouter()


@router.get("", response_model=list[Device])
async def list_devices(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> list[Device]:
    """List the current user's devices."""
    return await service.list_devices(user.username)


@router.get("/active", response_model=list[Device])
async def list_active_devices(
    minutes: int = Query(default=60 * 24, ge=1, description="Activity window in minutes"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> list[Device]:
    """List the current user's devices updated within the window (default 24h)."""
    return await service.list_active_devices(user.username, minutes)


@router.post("", response_model=Device, status_code=201)
async def create_device(
    request: CreateDeviceRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> Device:
    return await service.create_device(user.username, request.device_name, request.pins)


@router.get("/{device_name}", response_model=Device)
async def get_device(
    device_name: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> Device:
    return await service.get_device(user.username, device_name)


@router.put("/{device_name}", response_model=Device)
async def update_device(
    device_name: str,
    request: UpdateDeviceRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> Device:
    """Merge the given pin values into the device."""
    return await service.update_pins(user.username, device_name, request.pins)


@router.delete("/{device_name}", response_model=ApiResponse)
async def delete_device(
    device_name: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> ApiResponse:
    await service.delete_device(user.username, device_name)
    return ApiResponse(message="Device deleted", message_code="DEVICE_DELETED")


@router.get("/{device_name}/pins", response_model=dict[str, Any])
async def read_pins(
    device_name: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> dict[str, Any]:
    device = await service.get_device(user.username, device_name)
    return device.pins


@router.put("/{device_name}/pins/{pin}", response_model=Device)
async def update_pin(
    device_name: str,
    pin: str,
    request: PinValueRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> Device:
    """Write a pin value. The device is created if it does not exist yet."""
    return await service.set_pin(user.username, device_name, pin, request.value)


@router.delete("/{device_name}/pins/{pin}", response_model=Device)
async def delete_pin(
    device_name: str,
    pin: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> Device:
    return await service.delete_pin(user.username, device_name, pin)


@data_router.post("/{owner}/{device_name}/{pin}", response_model=ApiResponse)
async def log_data(
    owner: str,
    device_name: str,
    pin: str,
    request: DataLogRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDeviceService = Depends(get_device_service),
) -> ApiResponse:
    """
    Record a data point for a device pin.

    ``owner`` must be the caller's own username.
    """
    await service.log_data(user.username, owner, device_name, pin, request.payload)
    return ApiResponse(message="Device update successful", message_code="DEVICE_UPDATED")
