"""
Smartwatch relay

Devices connect over a WebSocket and push one JSON reading per message. Each
reading becomes a HealthMetric row, is acknowledged to the device and is
forwarded to the user's live dashboards. Connections are tracked in memory,
keyed by ``"{user_id}-{device_id}"``; a reconnect replaces the previous entry.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from medikey import crud
from medikey.core.database_utils import get_db_session
from medikey.models.health_metric import HealthMetric
from medikey.schemas.health_metric import HealthMetricCreate, serialize_metric_value
from medikey.schemas.smartwatch import ConnectedDevice, SmartWatchMetric
from medikey.utils.timezone import utcnow, to_utc_aware, to_utc_naive
from medikey.websocket import ConnectionManager, manager as live_manager

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Connected to MediKey health monitoring service"
PROCESSING_ERROR = "Failed to process data"

DEFAULT_DEVICE_ID = "unknown"
DEFAULT_DEVICE_TYPE = "generic"

# metric type -> (unit, store value as JSON text)
METRIC_UNITS = {
    "heart_rate": ("bpm", False),
    "blood_pressure": ("mmHg", True),
    "blood_oxygen": ("%", False),
    "temperature": ("°C", False),
    "sleep": ("min", True),
    "activity": ("steps", True),
}


def connection_key(user_id: int, device_id: str) -> str:
    return f"{user_id}-{device_id}"


@dataclass
class DeviceConnection:
    device: ConnectedDevice
    websocket: WebSocket


def to_health_metric(metric: SmartWatchMetric, device_id: str, device_type: str) -> HealthMetricCreate:
    """Map a device reading onto the stored metric shape"""
    unit, as_json = METRIC_UNITS.get(metric.type, ("", False))
    value = json.dumps(metric.value) if as_json else serialize_metric_value(metric.value)
    return HealthMetricCreate(
        metric_type=metric.type,
        value=value,
        unit=unit,
        recorded_at=to_utc_naive(metric.timestamp) or utcnow(),
        notes=f"Recorded from {metric.device_type or device_type} ({metric.device_id or device_id})",
    )


class SmartWatchService:
    def __init__(self, dashboards: ConnectionManager):
        self.dashboards = dashboards
        self.connected_devices: Dict[str, DeviceConnection] = {}

    async def register(self, websocket: WebSocket, user_id: int, device_id: str, device_type: str) -> str:
        key = connection_key(user_id, device_id)
        self.connected_devices[key] = DeviceConnection(
            device=ConnectedDevice(
                user_id=user_id, device_id=device_id, device_type=device_type, last_seen=utcnow()
            ),
            websocket=websocket,
        )
        try:
            await run_in_threadpool(self._store_connection, user_id, device_id, device_type)
            await websocket.send_json({"type": "connection", "status": "success", "message": WELCOME_MESSAGE})
        except Exception as e:
            logger.warning(f"SmartWatch registration failed for {key}: {e}")
            await self.unregister(key, websocket)
            raise
        logger.info(f"SmartWatch connected: User {user_id}, Device {device_id} ({device_type})")
        return key

    async def unregister(self, key: str, websocket: WebSocket) -> None:
        entry = self.connected_devices.get(key)
        # A newer socket for the same device has already taken over the entry
        if entry is None or entry.websocket is not websocket:
            return
        del self.connected_devices[key]
        device = entry.device
        await run_in_threadpool(self._mark_disconnected, device.user_id, device.device_id)
        logger.info(f"SmartWatch disconnected: User {device.user_id}, Device {device.device_id}")

    async def handle_message(self, key: str, raw: str) -> None:
        entry = self.connected_devices.get(key)
        if entry is None:
            return
        device = entry.device
        try:
            metric = SmartWatchMetric.model_validate(json.loads(raw))
            stored = await run_in_threadpool(
                self.process_metric, device.user_id, metric, device.device_id, device.device_type
            )
        except (ValueError, ValidationError) as e:
            logger.warning(f"Rejected smartwatch message from {key}: {e}")
            await entry.websocket.send_json({"type": "error", "message": PROCESSING_ERROR})
            return
        except Exception as e:
            logger.error(f"Error processing smartwatch data from {key}: {e}")
            await entry.websocket.send_json({"type": "error", "message": PROCESSING_ERROR})
            return

        device.last_seen = utcnow()
        # Dashboards hear about the reading before the device gets its ack
        try:
            await self.dashboards.broadcast(self._metric_event(stored, device), device.user_id)
        except Exception as e:
            logger.error(f"Failed to relay metric {stored.id} to dashboards: {e}")
        await entry.websocket.send_json(
            {"type": "ack", "metricType": metric.type, "timestamp": to_utc_aware(device.last_seen).isoformat()}
        )

    def process_metric(
        self, user_id: int, metric: SmartWatchMetric, device_id: str, device_type: str
    ) -> HealthMetric:
        """Persist one reading and refresh the device's last sync time"""
        metric_in = to_health_metric(metric, device_id, device_type)
        with get_db_session() as db:
            stored = crud.health_metric.create_with_owner(db, obj_in=metric_in, user_id=user_id)
            crud.smartwatch_device.touch(db, user_id=user_id, device_id=device_id)
        return stored

    def get_connected_devices(self, user_id: int) -> List[ConnectedDevice]:
        return [entry.device for entry in self.connected_devices.values() if entry.device.user_id == user_id]

    async def send_command(self, user_id: int, device_id: str, command: str, data: Optional[Dict[str, Any]] = None) -> bool:
        key = connection_key(user_id, device_id)
        entry = self.connected_devices.get(key)
        if entry is None:
            return False
        if not await self._send(key, entry, {"type": "command", "command": command, "data": data or {}}):
            return False
        logger.info(f"Sent command '{command}' to device {device_id} of user {user_id}")
        return True

    async def broadcast(self, user_id: int, message: str) -> int:
        delivered = 0
        for key, entry in list(self.connected_devices.items()):
            if entry.device.user_id != user_id:
                continue
            if await self._send(key, entry, {"type": "broadcast", "message": message}):
                delivered += 1
        return delivered

    async def _send(self, key: str, entry: DeviceConnection, message: Dict[str, Any]) -> bool:
        """Deliver one frame; a socket that fails is unregistered"""
        try:
            await entry.websocket.send_json(message)
        except Exception as e:
            logger.warning(f"Dropping dead device socket {key}: {e}")
            await self.unregister(key, entry.websocket)
            return False
        return True

    @staticmethod
    def _metric_event(stored: HealthMetric, device: ConnectedDevice) -> Dict[str, Any]:
        return jsonable_encoder({
            "type": "metric",
            "id": stored.id,
            "metricType": stored.metric_type,
            "value": stored.value,
            "unit": stored.unit,
            "recordedAt": stored.recorded_at,
            "deviceId": device.device_id,
            "deviceType": device.device_type,
        })

    @staticmethod
    def _store_connection(user_id: int, device_id: str, device_type: str) -> None:
        with get_db_session() as db:
            crud.smartwatch_device.register_connection(
                db, user_id=user_id, device_id=device_id, device_type=device_type
            )

    @staticmethod
    def _mark_disconnected(user_id: int, device_id: str) -> None:
        with get_db_session() as db:
            crud.smartwatch_device.mark_disconnected(db, user_id=user_id, device_id=device_id)


smartwatch_service = SmartWatchService(live_manager)
