"""Registry of open rooms, addressed by numeric codes."""

from __future__ import annotations

import secrets
from contextlib import suppress

from lobbyarena.player import Player
from lobbyarena.room import Room, RoomError, RoomSettings

DIGITS = "0123456789"
CODE_LENGTH = 6
MAX_CODE_ATTEMPTS = 100


def generate_random_code(length: int) -> str:
    """Return a string of ``length`` random decimal digits."""
    if length < 0:
        raise ValueError("code length must not be negative")
    return "".join(secrets.choice(DIGITS) for _ in range(length))


class RoomManager:
    """Creates rooms and moves players in and out of them."""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}

    def create_room(self, owner_id: str, settings: RoomSettings) -> str:
        """Open a room owned by ``owner_id`` and return its code."""
        if settings.max_players <= 0:
            raise RoomError("invalid max players count")
        code = self._unique_code(CODE_LENGTH)
        room = Room(code, settings)
        room.owner_id = owner_id
        self._rooms[code] = room
        return code

    def delete_room(self, room_code: str) -> None:
        """Close a room; its players are left without a room."""
        room = self._rooms.get(room_code)
        if room is None:
            raise RoomError("room not found")
        for player in room.players.values():
            player.room_id = ""
        del self._rooms[room_code]

    def join_room(self, player: Player, room_code: str) -> None:
        room = self.get_room(room_code)
        room.add_player(player)
        player.room_id = room_code

    def kick_from_room(self, player: Player, room_code: str) -> None:
        room = self.get_room(room_code)
        room.remove_player(player)
        player.room_id = ""

    def get_room(self, room_code: str) -> Room:
        try:
            return self._rooms[room_code]
        except KeyError:
            raise RoomError("room not found") from None

    def discard_room(self, room_code: str) -> None:
        """Close a room if it is still open."""
        with suppress(RoomError):
            self.delete_room(room_code)

    def __contains__(self, room_code: object) -> bool:
        return room_code in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def _unique_code(self, length: int) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_random_code(length)
            if code not in self._rooms:
                return code
        raise RoomError("failed to generate unique code")