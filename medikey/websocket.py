import logging
from typing import Dict, List, Any
from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Live dashboard sockets grouped by the user they belong to"""

    def __init__(self):
        self.active_connections: Dict[int, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, user_id: int):
        if websocket.client_state == WebSocketState.CONNECTING:
            await websocket.accept()
        if user_id not in self.active_connections:
            self.active_connections[user_id] = []
        self.active_connections[user_id].append(websocket)

    def disconnect(self, websocket: WebSocket, user_id: int):
        if user_id in self.active_connections:
            if websocket in self.active_connections[user_id]:
                self.active_connections[user_id].remove(websocket)
            if not self.active_connections[user_id]:
                del self.active_connections[user_id]

    async def broadcast(self, message: Any, user_id: int) -> int:
        """Send to every dashboard of the user; sockets that fail are dropped"""
        delivered = 0
        for connection in list(self.active_connections.get(user_id, [])):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning(f"Dropping dashboard socket of user {user_id}: {e}")
                self.disconnect(connection, user_id)
                continue
            delivered += 1
        return delivered


# Global websocket manager instance for live dashboards
manager = ConnectionManager()
