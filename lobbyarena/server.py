"""Websocket lobby server and its command-line entry point."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Optional, Union

from aiohttp import WSMsgType, web

from lobbyarena.character import Character
from lobbyarena.message import Message, MessageError, MessageType, StartGameData
from lobbyarena.player import Player
from lobbyarena.primitives import Vec2
from lobbyarena.room import Room, RoomError, RoomSettings
from lobbyarena.roommanager import RoomManager

log = logging.getLogger(__name__)

DEFAULT_STATIC_DIR = Path("build") / "static"
DEFAULT_PORT = 8080

START_POSITIONS = (Vec2(100, 300), Vec2(500, 300))
CHARACTER_SIZE = Vec2(60, 40)

_NOT_IN_ROOM = "Player is not in any room"

Handler = Callable[[Player, Message], Awaitable[None]]


class GameServer:
    """Dispatches client messages to rooms."""

    def __init__(self, rooms: Optional[RoomManager] = None) -> None:
        self.rooms = rooms if rooms is not None else RoomManager()
        self._handlers: dict[MessageType, Handler] = {
            MessageType.CREATE_ROOM: self._create_room,
            MessageType.JOIN_ROOM: self._join_room,
            MessageType.LEAVE_ROOM: lambda player, _msg: self.leave_room(player),
            MessageType.START_GAME: lambda player, _msg: self.start_game(player),
            MessageType.UPDATE_ROOM_INFO: self._update_room_info,
            MessageType.UPDATE_PLAYER_INFO: self._update_player_info,
            MessageType.GAME_STATE: self._game_state,
        }

    async def handle_message(self, player: Player, msg: Message) -> None:
        handler = self._handlers.get(msg.type)  # type: ignore[arg-type]
        if handler is None:
            await _send_error(player, "unknown message type")
            return
        await handler(player, msg)

    async def leave_room(self, player: Player) -> None:
        """Take the player out of its room; an owner leaving closes the room."""
        await self._depart(player, notify=True)

    async def start_game(self, player: Player) -> None:
        """Place a character for each player and announce the start."""
        room = await self._room_of(player, _NOT_IN_ROOM)
        if room is None:
            return
        ids = list(room.players)
        if len(ids) < len(START_POSITIONS):
            await _send_error(player, "not enough players to start the game")
            return
        characters = {
            player_id: Character.create(pos, CHARACTER_SIZE)
            for player_id, pos in zip(ids, START_POSITIONS)
        }
        await room.broadcast(Message(MessageType.START_GAME, StartGameData(characters)))

    async def websocket_handler(self, request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        player = Player(ws, "Player")
        log.info("Player %s connected", player.id)
        try:
            async for frame in ws:
                if frame.type in (WSMsgType.TEXT, WSMsgType.BINARY):
                    try:
                        msg = Message.from_json(frame.data)
                    except MessageError as exc:
                        log.warning("Unmarshal error: %s", exc)
                        continue
                    await self.handle_message(player, msg)
                elif frame.type == WSMsgType.ERROR:
                    break
        finally:
            log.info("Player %s disconnected", player.id)
            await self._depart(player, notify=False)
            await ws.close()
        return ws

    async def _create_room(self, player: Player, msg: Message) -> None:
        try:
            settings = RoomSettings.from_dict(msg.data)
        except ValueError:
            settings = RoomSettings()
        try:
            code = self.rooms.create_room(player.id, settings)
        except RoomError as exc:
            await _send_error(player, str(exc))
            return
        try:
            self.rooms.join_room(player, code)
        except RoomError as exc:
            await _send_error(player, str(exc))
            self.rooms.discard_room(code)
            return
        await player.send(Message(MessageType.CREATE_ROOM))

    async def _join_room(self, player: Player, msg: Message) -> None:
        code = msg.data
        if not isinstance(code, str):
            await _send_error(player, "room code must be a string")
            return
        try:
            self.rooms.join_room(player, code)
            room = self.rooms.get_room(code)
        except RoomError as exc:
            await _send_error(player, str(exc))
            return
        await player.send(Message(MessageType.JOIN_ROOM))
        await room.broadcast(Message(MessageType.PLAYER_JOIN, player.name), player.id)

    async def _update_room_info(self, player: Player, _msg: Message) -> None:
        room = await self._room_of(player, _NOT_IN_ROOM)
        if room is not None:
            await player.send(Message(MessageType.UPDATE_ROOM_INFO, room.info()))

    async def _update_player_info(self, player: Player, _msg: Message) -> None:
        await player.send(Message(MessageType.UPDATE_PLAYER_INFO, player.info()))

    async def _game_state(self, player: Player, msg: Message) -> None:
        room = await self._room_of(player, _NOT_IN_ROOM)
        if room is not None:
            await room.broadcast(msg, player.id)

    async def _room_of(self, player: Player, missing_text: str, notify: bool = True) -> Optional[Room]:
        if not player.room_id:
            if notify:
                await _send_error(player, missing_text)
            return None
        try:
            return self.rooms.get_room(player.room_id)
        except RoomError as exc:
            if notify:
                await _send_error(player, str(exc))
            return None

    async def _depart(self, player: Player, notify: bool) -> None:
        room = await self._room_of(player, "player is not in any room", notify)
        if room is None:
            return
        try:
            self.rooms.kick_from_room(player, room.id)
        except RoomError as exc:
            if notify:
                await _send_error(player, str(exc))
            return
        if notify:
            await player.send(Message(MessageType.LEAVE_ROOM))
        if room.owner_id == player.id:
            self.rooms.discard_room(room.id)
            await room.broadcast(
                Message(MessageType.ROOM_CLOSED, "the owner has closed the room"), player.id
            )
        else:
            await room.broadcast(Message(MessageType.PLAYER_LEFT, player.id))


async def _send_error(player: Player, text: str) -> None:
    await player.send(Message(MessageType.ERROR, text))


def create_app(static_dir: Union[str, Path] = DEFAULT_STATIC_DIR) -> web.Application:
    """Build the web application: the websocket at /ws and static files at /."""
    server = GameServer()
    static = Path(static_dir)

    async def index(_request: web.Request) -> web.StreamResponse:
        page = static / "index.html"
        if page.is_file():
            return web.FileResponse(page)
        raise web.HTTPNotFound()

    app = web.Application()
    app.router.add_get("/ws", server.websocket_handler)
    app.router.add_get("/", index)
    if static.is_dir():
        app.router.add_static("/", static)
    return app


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the lobby game server.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument(
        "--static", default=str(DEFAULT_STATIC_DIR), help="directory of files served at /"
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    log.info("Server started at :%d", args.port)
    web.run_app(create_app(args.static), host=args.host, port=args.port, print=None)


if __name__ == "__main__":
    main()