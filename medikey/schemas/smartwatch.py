from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import Field
from medikey.schemas.base import ApiModel


class SmartWatchMetric(ApiModel):
    """A reading pushed by a device over the smartwatch socket"""
    type: str = Field(..., min_length=1)
    value: Any
    timestamp: Optional[datetime] = None
    device_type: Optional[str] = None
    device_id: Optional[str] = None


class ConnectedDevice(ApiModel):
    user_id: int
    device_id: str
    device_type: str
    last_seen: datetime


class SmartwatchDevice(ApiModel):
    id: int
    user_id: int
    device_name: str
    device_id: str
    device_type: str
    connected_at: Optional[datetime] = None
    last_sync: Optional[datetime] = None
    status: str


class SendCommandRequest(ApiModel):
    device_id: str = Field(..., min_length=1)
    command: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict)


class SendCommandResponse(ApiModel):
    sent: bool


class BroadcastRequest(ApiModel):
    message: str = Field(..., min_length=1)


class BroadcastResponse(ApiModel):
    delivered: int
