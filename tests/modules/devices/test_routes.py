"""
Tests for device API endpoints.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_device_service
from modules.devices.exceptions import (
    DeviceAccessDeniedError,
    DeviceAlreadyExistsError,
    DeviceNotFoundError,
)
from modules.devices.models import Device

from tests.conftest import create_test_token


@pytest.fixture
def device() -> Device:
    return Device(
        id="dev-1",
        username="alice",
        device_name="board",
        pins={"D1": 1},
        updated=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def mock_service() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(mock_service) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_device_service] = lambda: mock_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestDeviceRoutes:

    def test_requires_token(self, client, mock_service):
        response = client.get("/api/devices")
        assert response.status_code == 403
        assert response.json()["message_code"] == "MISSING_TOKEN"
        mock_service.list_devices.assert_not_called()

    def test_list(self, client, mock_service, device, auth_headers):
        mock_service.list_devices.return_value = [device]

        response = client.get("/api/devices", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()[0]["device_name"] == "board"
        mock_service.list_devices.assert_awaited_once_with("alice")

    def test_active_is_not_a_device_name(self, client, mock_service, auth_headers):
        mock_service.list_active_devices.return_value = []

        response = client.get("/api/devices/active?minutes=30", headers=auth_headers)

        assert response.status_code == 200
        mock_service.list_active_devices.assert_awaited_once_with("alice", 30)
        mock_service.get_device.assert_not_called()

    def test_create(self, client, mock_service, device, auth_headers):
        mock_service.create_device.return_value = device

        response = client.post(
            "/api/devices",
            json={"deviceName": "board", "pins": {"D1": 1}},
            headers=auth_headers,
        )

        assert response.status_code == 201
        mock_service.create_device.assert_awaited_once_with("alice", "board", {"D1": 1})

    def test_create_duplicate(self, client, mock_service, auth_headers):
        mock_service.create_device.side_effect = DeviceAlreadyExistsError("alice", "board")

        response = client.post("/api/devices", json={"device_name": "board"}, headers=auth_headers)

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "Device already exists for that username: alice - board",
            "message_code": "DEVICE_EXISTS",
        }

    def test_create_missing_name(self, client, mock_service, auth_headers):
        response = client.post("/api/devices", json={"pins": {}}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message_code"] == "MISSING_FIELDS"

    def test_get_not_found(self, client, mock_service, auth_headers):
        mock_service.get_device.side_effect = DeviceNotFoundError("board")
        response = client.get("/api/devices/board", headers=auth_headers)
        assert response.status_code == 404

    def test_update_merges(self, client, mock_service, device, auth_headers):
        mock_service.update_pins.return_value = device

        response = client.put("/api/devices/board", json={"pins": {"D2": 0}}, headers=auth_headers)

        assert response.status_code == 200
        mock_service.update_pins.assert_awaited_once_with("alice", "board", {"D2": 0})

    def test_delete(self, client, mock_service, auth_headers):
        response = client.delete("/api/devices/board", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message_code"] == "DEVICE_DELETED"

    def test_read_pins(self, client, mock_service, device, auth_headers):
        mock_service.get_device.return_value = device
        response = client.get("/api/devices/board/pins", headers=auth_headers)
        assert response.json() == {"D1": 1}

    def test_set_pin(self, client, mock_service, device, auth_headers):
        mock_service.set_pin.return_value = device

        response = client.put("/api/devices/board/pins/D1", json={"value": 1}, headers=auth_headers)

        assert response.status_code == 200
        mock_service.set_pin.assert_awaited_once_with("alice", "board", "D1", 1)

    def test_delete_pin(self, client, mock_service, device, auth_headers):
        mock_service.delete_pin.return_value = device
        response = client.delete("/api/devices/board/pins/D1", headers=auth_headers)
        assert response.status_code == 200
        mock_service.delete_pin.assert_awaited_once_with("alice", "board", "D1")


class TestDataLogRoute:

    def test_log_own_device(self, client, mock_service, device, auth_headers):
        mock_service.log_data.return_value = device

        response = client.post("/api/data/alice/board/A0", json={"payload": 42}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message_code"] == "DEVICE_UPDATED"
        mock_service.log_data.assert_awaited_once_with("alice", "alice", "board", "A0", 42)

    def test_log_other_users_device(self, client, mock_service):
        mock_service.log_data.side_effect = DeviceAccessDeniedError("bob", "alice")
        token = create_test_token(username="bob", email="bob@example.com")

        response = client.post(
            "/api/data/alice/board/A0",
            json={"payload": 42, "access_token": token},
        )

        assert response.status_code == 403
        assert response.json()["message_code"] == "DEVICE_ACCESS_DENIED"
