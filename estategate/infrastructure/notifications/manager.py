"""Registry of open notification sockets."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Open notification sockets keyed by user id.

    A user may hold several sockets at once, one per browser tab or device.
    A socket that fails on send is dropped from the registry.
    """

    def __init__(self) -> None:
        self._sockets: dict[int, list[WebSocket]] = {}

    async def connect(self, user_id: int, websocket: WebSocket) -> None:
        await websocket.accept()
        self._sockets.setdefault(user_id, []).append(websocket)
        logger.debug("User %s opened a notification socket", user_id)

    def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        sockets = self._sockets.get(user_id, [])
        if websocket in sockets:
            sockets.remove(websocket)
        if not sockets:
            self._sockets.pop(user_id, None)

    def has_connections(self, user_id: int) -> bool:
        return bool(self._sockets.get(user_id))

    def connected_users(self) -> set[int]:
        return set(self._sockets)

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to every socket of ``user_id``.

        Returns the number of sockets that received it.
        """

        delivered = 0
        for websocket in list(self._sockets.get(user_id, [])):
            try:
                await websocket.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                logger.debug("Dropping a closed notification socket of user %s", user_id)
                self.disconnect(user_id, websocket)
            else:
                delivered += 1
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
