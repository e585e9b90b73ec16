"""Connected players."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Protocol

from lobbyarena.message import Message

log = logging.getLogger(__name__)


class Connection(Protocol):
    async def send_str(self, data: str) -> None: ...


@dataclass(frozen=True)
class PlayerInfo:
    """Public description of a player."""

    id: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name}


class Player:
    """A client connected over a websocket."""

    def __init__(self, conn: Connection, name: str = "Player") -> None:
        self._conn = conn
        self._id = str(uuid.uuid4())
        self._send_lock = asyncio.Lock()
        self.name = name
        self.room_id = ""

    @property
    def id(self) -> str:
        return self._id

    def info(self) -> PlayerInfo:
        return PlayerInfo(self._id, self.name)

    async def send(self, msg: Message) -> None:
        """Send a message as JSON text; a lost connection is ignored."""
        async with self._send_lock:
            try:
                await self._conn.send_str(msg.to_json())
            except ConnectionError as exc:
                log.debug("Send to player %s failed: %s", self._id, exc)

    def __repr__(self) -> str:
        return f"Player(id={self._id!r}, name={self.name!r}, room_id={self.room_id!r})"