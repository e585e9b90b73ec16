"""Game rooms holding a set of players."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from lobbyarena.message import Message
from lobbyarena.player import Player


class RoomError(Exception):
    """A room operation was refused."""


class RoomStatus(str, Enum):
    WAITING = "Waiting"
    READY = "Ready"
    IN_GAME = "In game"


def _int_field(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer, got {value!r}")
    return value


@dataclass
class RoomSettings:
    max_players: int = 0
    need_players: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"max_players": self.max_players, "need_players": self.need_players}

    @classmethod
    def from_dict(cls, data: Any) -> RoomSettings:
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        return cls(_int_field(data, "max_players"), _int_field(data, "need_players"))


@dataclass(frozen=True)
class RoomInfo:
    id: str
    status: RoomStatus
    owner_id: str
    settings: RoomSettings

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.value,
            "owner_id": self.owner_id,
            "settings": self.settings.to_dict(),
        }


class Room:
    """A lobby identified by its code; its status follows the player count."""

    def __init__(self, code: str, settings: Optional[RoomSettings] = None) -> None:
        self._id = code
        self._players: dict[str, Player] = {}
        self.settings = settings if settings is not None else RoomSettings()
        self.status = RoomStatus.WAITING
        self.owner_id = ""

    @property
    def id(self) -> str:
        return self._id

    def info(self) -> RoomInfo:
        settings = RoomSettings(self.settings.max_players, self.settings.need_players)
        return RoomInfo(self._id, self.status, self.owner_id, settings)

    def add_player(self, player: Player) -> None:
        if self.status is RoomStatus.IN_GAME:
            raise RoomError("there is a game going on in the room now")
        if len(self._players) > self.settings.max_players:
            raise RoomError("room is full")
        self._players[player.id] = player
        self._update_status()

    def remove_player(self, player: Player) -> None:
        if player.id not in self._players:
            raise RoomError("player not found in room")
        del self._players[player.id]
        self._update_status()

    @property
    def players(self) -> dict[str, Player]:
        """A snapshot of the players, keyed by id."""
        return dict(self._players)

    def get_player(self, player_id: str) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise RoomError("player not found in room") from None

    @property
    def player_count(self) -> int:
        return len(self._players)

    async def broadcast(self, msg: Message, excluded_player_id: Optional[str] = None) -> None:
        """Send ``msg`` to every player except the one with the excluded id."""
        for player in list(self._players.values()):
            if excluded_player_id is None or player.id != excluded_player_id:
                await player.send(msg)

    def _update_status(self) -> None:
        if len(self._players) >= self.settings.need_players:
            self.status = RoomStatus.READY
        else:
            self.status = RoomStatus.WAITING

    def __repr__(self) -> str:
        return f"Room(id={self._id!r}, status={self.status.value!r}, players={len(self._players)})"