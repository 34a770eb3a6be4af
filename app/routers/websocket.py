from fastapi import APIRouter, WebSocket

from app.dependencies import broadcaster_dependency
from app.websocket.announcements import announcements_websocket

router = APIRouter(prefix="/ws", tags=["ws"])


@router.websocket("/announcements")
async def websocket_announcements_endpoint(
    websocket: WebSocket, broadcaster: broadcaster_dependency
):
    """Real-time channel for announcement events.

    Connect to: ws://host/ws/announcements

    Server messages:
    - {"event": "announcement:created", "data": {...announcement...}}
    """
    await announcements_websocket(websocket, broadcaster)
