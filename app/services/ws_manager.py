"""Per-order WebSocket fan-out for domain events."""

from __future__ import annotations

import json
import logging
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self._watchers: dict[str, list[WebSocket]] = {}

    async def connect(self, order_id: str, websocket: WebSocket):
        await websocket.accept()
        self._watchers.setdefault(order_id, []).append(websocket)
        logger.debug("Watcher joined order %s (%d open)", order_id, self.connection_count(order_id))

    def disconnect(self, order_id: str, websocket: WebSocket):
        watchers = self._watchers.get(order_id)
        if not watchers or websocket not in watchers:
            return
        watchers.remove(websocket)
        if not watchers:
            del self._watchers[order_id]

    def connection_count(self, order_id: str) -> int:
        return len(self._watchers.get(order_id, []))

    async def broadcast(self, order_id: str, message: dict) -> int:
        """Send one JSON message to every watcher of an order. Returns the delivery count."""
        payload = json.dumps(message)
        delivered = 0
        for ws in list(self._watchers.get(order_id, [])):
            try:
                await ws.send_text(payload)
            except Exception:
                logger.info("Dropping dead websocket for order %s", order_id)
                self.disconnect(order_id, ws)
            else:
                delivered += 1
        return delivered


ws_manager = ConnectionManager()
