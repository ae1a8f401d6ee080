import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from medikey import crud, models, schemas
from medikey.api import deps
from medikey.core.database_utils import get_db_session
from medikey.services.smartwatch import DEFAULT_DEVICE_ID, DEFAULT_DEVICE_TYPE, connection_key, smartwatch_service
from medikey.websocket import manager

logger = logging.getLogger(__name__)

router = APIRouter()

CLOSE_MISSING_TOKEN = 4000
CLOSE_INVALID_TOKEN = 4001


def _resolve_user_id(token: str) -> Optional[int]:
    with get_db_session() as db:
        user = deps.get_user_from_token(db, token)
        return user.id if user else None


async def _authenticate(websocket: WebSocket, token: Optional[str]) -> Optional[int]:
    """
    Accept the handshake, then close with an application code and return None
    unless the token names an existing user.
    """
    await websocket.accept()
    if not token:
        await websocket.close(code=CLOSE_MISSING_TOKEN, reason="Missing token")
        return None
    user_id = await run_in_threadpool(_resolve_user_id, token)
    if user_id is None:
        await websocket.close(code=CLOSE_INVALID_TOKEN, reason="Invalid token")
        return None
    return user_id


@router.websocket("")
async def smartwatch_socket(
    websocket: WebSocket,
    token: Optional[str] = None,
    device_id: Optional[str] = Query(None, alias="deviceId"),
    device_type: Optional[str] = Query(None, alias="deviceType"),
):
    """
    Device connection. Each text frame is one JSON reading; every reading is
    answered with an ack or an error frame.
    """
    user_id = await _authenticate(websocket, token)
    if user_id is None:
        return
    device_id = device_id or websocket.headers.get("x-device-id") or DEFAULT_DEVICE_ID
    device_type = device_type or websocket.headers.get("x-device-type") or DEFAULT_DEVICE_TYPE

    key = connection_key(user_id, device_id)
    try:
        await smartwatch_service.register(websocket, user_id, device_id, device_type)
        while True:
            raw = await websocket.receive_text()
            await smartwatch_service.handle_message(key, raw)
    except WebSocketDisconnect:
        pass
    finally:
        await smartwatch_service.unregister(key, websocket)


@router.websocket("/live")
async def live_metrics_socket(websocket: WebSocket, token: Optional[str] = None):
    """
    Dashboard subscription to the metrics relayed from the user's devices.
    """
    user_id = await _authenticate(websocket, token)
    if user_id is None:
        return
    await manager.connect(websocket, user_id)
    logger.info(f"Live dashboard connected for user {user_id}")
    try:
        while True:
            # Dashboards only listen; inbound frames keep the socket alive
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket, user_id)
        logger.info(f"Live dashboard disconnected for user {user_id}")


@router.get("/connected-devices", response_model=List[schemas.ConnectedDevice])
def read_connected_devices(current_user: models.User = Depends(deps.get_current_user)) -> Any:
    return smartwatch_service.get_connected_devices(current_user.id)


@router.get("/devices", response_model=List[schemas.SmartwatchDevice])
def read_devices(
    db: Session = Depends(deps.get_db),
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return crud.smartwatch_device.get_by_user(db, user_id=current_user.id)


@router.post("/send-command", response_model=schemas.SendCommandResponse)
async def send_command(
    *,
    command_in: schemas.SendCommandRequest,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    sent = await smartwatch_service.send_command(
        current_user.id, command_in.device_id, command_in.command, command_in.data
    )
    if not sent:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Device not connected")
    return {"sent": True}


@router.post("/broadcast", response_model=schemas.BroadcastResponse)
async def broadcast_message(
    *,
    broadcast_in: schemas.BroadcastRequest,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    delivered = await smartwatch_service.broadcast(current_user.id, broadcast_in.message)
    return {"delivered": delivered}
