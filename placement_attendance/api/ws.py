"""
WebSocket manager for dashboard view refreshes
"""

import json
import logging
from datetime import datetime
from typing import Dict, List
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

# Views whose data changes server-side; clients reload them on "revalidate".
ADMIN_SCANNER_VIEW = "admin-scanner"
STUDENT_ATTENDANCE_VIEW = "student-attendance"
VIEWS = (ADMIN_SCANNER_VIEW, STUDENT_ATTENDANCE_VIEW)

class WebSocketManager:
    """Manages WebSocket connections grouped by dashboard view"""

    def __init__(self):
        # view -> list of websockets
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, view: str):
        """Accept WebSocket connection and add it to the view's room"""
        await websocket.accept()
        self.active_connections.setdefault(view, []).append(websocket)
        logger.info(f"WebSocket subscribed to {view}. Total connections: {len(self.active_connections[view])}")

    def disconnect(self, websocket: WebSocket, view: str):
        """Remove WebSocket connection from the view's room"""
        connections = self.active_connections.get(view)
        if not connections or websocket not in connections:
            return
        connections.remove(websocket)
        logger.info(f"WebSocket left {view}. Remaining connections: {len(connections)}")
        if not connections:
            del self.active_connections[view]

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast(self, view: str, message: dict):
        """Broadcast message to every WebSocket watching a view"""
        connections = list(self.active_connections.get(view, []))
        if not connections:
            logger.debug(f"No active connections for view {view}")
            return

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.error(f"Error broadcasting to websocket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket, view)

    async def revalidate(self, view: str):
        """Tell clients of ``view`` that their data is stale"""
        await self.broadcast(view, {
            "type": "revalidate",
            "view": view,
            "timestamp": datetime.utcnow().isoformat(),
        })

    def get_connection_count(self, view: str) -> int:
        return len(self.active_connections.get(view, []))

# Global WebSocket manager instance
websocket_manager = WebSocketManager()

# Router for WebSocket endpoints
router = APIRouter()

@router.websocket("/views/{view}")
async def websocket_endpoint(websocket: WebSocket, view: str):
    """Subscribe to revalidation messages for a dashboard view"""
    if view not in VIEWS:
        await websocket.close(code=4004, reason="Unknown view")
        return

    await websocket_manager.connect(websocket, view)

    try:
        await websocket_manager.send_personal_message({
            "type": "connection",
            "view": view,
            "connection_count": websocket_manager.get_connection_count(view),
        }, websocket)

        while True:
            data = await websocket.receive_text()
            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            if client_message.get("type") == "ping":
                await websocket_manager.send_personal_message({
                    "type": "pong",
                    "timestamp": client_message.get("timestamp"),
                }, websocket)

    except WebSocketDisconnect:
        pass
    finally:
        websocket_manager.disconnect(websocket, view)

