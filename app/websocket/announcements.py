import asyncio
import json
import logging
from typing import Any, List

from fastapi import WebSocket, WebSocketDisconnect

from app.schemas.announcement import AnnouncementResponse

logger = logging.getLogger(__name__)

ANNOUNCEMENT_CREATED = "announcement:created"


class AnnouncementBroadcaster:
    """In-memory registry of connected clients.

    Delivery is best-effort: nothing is queued, acknowledged or retried, and a
    client whose send fails is dropped from the registry.
    """

    def __init__(self):
        self.clients: List[WebSocket] = []

    def register_client(self, websocket: WebSocket) -> None:
        if websocket not in self.clients:
            self.clients.append(websocket)

    def unregister_client(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)

    async def broadcast(self, event: str, data: Any) -> None:
        if not self.clients:
            return
        payload = json.dumps({"event": event, "data": data})
        clients = list(self.clients)
        results = await asyncio.gather(
            *(ws.send_text(payload) for ws in clients), return_exceptions=True
        )
        for ws, result in zip(clients, results):
            if isinstance(result, Exception):
                logger.warning("Dropping websocket client after failed send: %s", result)
                self.unregister_client(ws)

    async def notify_created(self, announcement: AnnouncementResponse) -> None:
        await self.broadcast(
            ANNOUNCEMENT_CREATED, announcement.model_dump(mode="json", by_alias=True)
        )


broadcaster = AnnouncementBroadcaster()


def get_broadcaster() -> AnnouncementBroadcaster:
    return broadcaster


async def announcements_websocket(
    websocket: WebSocket, manager: AnnouncementBroadcaster
):
    await websocket.accept()
    manager.register_client(websocket)
    logger.info("Websocket client connected (%d online)", len(manager.clients))
    try:
        while True:
            # the channel is server-push only; anything the client sends is ignored
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        manager.unregister_client(websocket)
        logger.info("Websocket client disconnected (%d online)", len(manager.clients))
