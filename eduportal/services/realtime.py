"""Websocket rooms keyed by user email (and by chat pair)."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Iterable

from fastapi import WebSocket

log = logging.getLogger(__name__)


def chat_room(parent_email: str, teacher_email: str) -> str:
    return f"chat-{parent_email}-{teacher_email}"


class RoomManager:
    def __init__(self):
        self._rooms: dict[str, set[WebSocket]] = defaultdict(set)
        self._connections: set[WebSocket] = set()

    async def connect(self, websocket: WebSocket, room: str) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        self.join(websocket, room)
        log.info("Websocket joined room %s", room)

    def join(self, websocket: WebSocket, room: str) -> None:
        self._rooms[room].add(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        for room in list(self._rooms):
            members = self._rooms[room]
            members.discard(websocket)
            if not members:
                del self._rooms[room]

    async def _send(self, websocket: WebSocket, event: str, data: Any) -> None:
        try:
            await websocket.send_json({"event": event, "data": data})
        except Exception as exc:
            log.warning("Dropping websocket after failed send of %s: %s", event, exc)
            self.disconnect(websocket)

    async def emit(self, room: str, event: str, data: Any) -> None:
        for websocket in list(self._rooms.get(room, ())):
            await self._send(websocket, event, data)

    async def emit_many(self, event: str, items: Iterable[tuple[str, Any]]) -> None:
        for room, data in items:
            await self.emit(room, event, data)

    async def broadcast(self, event: str, data: Any, exclude: WebSocket | None = None) -> None:
        for websocket in list(self._connections):
            if websocket is not exclude:
                await self._send(websocket, event, data)


hub = RoomManager()
