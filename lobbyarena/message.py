"""Messages exchanged between clients and the server."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from lobbyarena.character import Character


class MessageType(str, Enum):
    ERROR = "error"
    CREATE_ROOM = "create_room"
    JOIN_ROOM = "join_room"
    LEAVE_ROOM = "leave_room"
    START_GAME = "start_game"
    END_GAME = "end_game"
    UPDATE_ROOM_INFO = "update_room_info"
    UPDATE_PLAYER_INFO = "update_player_info"
    PLAYER_LEFT = "player_left"
    PLAYER_JOIN = "player_join"
    ROOM_CLOSED = "room_closed"
    GAME_STATE = "game_state"


class MessageError(ValueError):
    """A message could not be decoded."""


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {str(key): _encode(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    return value


def _object(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise MessageError(f"expected an object, got {type(data).__name__}")
    return data


@dataclass
class Message:
    """A typed envelope; unknown type strings are kept as plain strings."""

    type: Union[MessageType, str]
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        kind = self.type.value if isinstance(self.type, MessageType) else self.type
        return {"type": kind, "data": _encode(self.data)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str | bytes) -> Message:
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MessageError(f"invalid JSON: {exc}") from exc
        payload = _object(payload)
        kind = payload.get("type")
        if kind is None:
            kind = ""
        if not isinstance(kind, str):
            raise MessageError(f"message type must be a string, got {kind!r}")
        try:
            kind = MessageType(kind)
        except ValueError:
            pass
        return cls(kind, payload.get("data"))


@dataclass
class StartGameData:
    """Initial characters of every player, keyed by player id."""

    data: dict[str, Character] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"Data": {pid: char.to_dict() for pid, char in self.data.items()}}

    @classmethod
    def from_dict(cls, data: Any) -> StartGameData:
        chars = _object(_object(data).get("Data"))
        try:
            return cls({str(pid): Character.from_dict(c) for pid, c in chars.items()})
        except MessageError:
            raise
        except ValueError as exc:
            raise MessageError(str(exc)) from exc


@dataclass
class PlayerState:
    """The current character of one player."""

    id: str = ""
    data: Character = field(default_factory=Character)

    def to_dict(self) -> dict[str, Any]:
        return {"Id": self.id, "Data": self.data.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> PlayerState:
        fields = _object(data)
        player_id = fields.get("Id")
        if player_id is None:
            player_id = ""
        if not isinstance(player_id, str):
            raise MessageError(f"player id must be a string, got {player_id!r}")
        try:
            character = Character.from_dict(fields.get("Data"))
        except ValueError as exc:
            raise MessageError(str(exc)) from exc
        return cls(player_id, character)