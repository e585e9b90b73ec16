# lobbyarena

A small WebSocket server for two-player browser games, built on aiohttp.
Players connect over a WebSocket, create or join a lobby identified by a
six-digit code, and once the lobby has two players anyone in it can start the
game. From then on the server relays each player's `game_state` messages to
the other players in the room.

The same application also serves a directory of static files at `/`.

## Installation

```
pip install .
```

## Running the server

```
lobbyarena
```

Options:

| option     | default         | meaning                         |
|------------|-----------------|---------------------------------|
| `--host`   | `0.0.0.0`       | address to listen on            |
| `--port`   | `8080`          | port to listen on               |
| `--static` | `build/static`  | directory of files served at `/`|

The WebSocket endpoint is `/ws`. A request for `/` returns `index.html` from
the static directory; other files in that directory are served by their path
if the directory exists when the application is built.

## Protocol

Every message is a JSON text frame holding an object with a `type` and a
`data` field:

```json
{"type": "join_room", "data": "123456"}
```

Message types a client may send:

| type                 | data                                          |
|----------------------|-----------------------------------------------|
| `create_room`        | `{"max_players": 2, "need_players": 2}`       |
| `join_room`          | the room code as a string                     |
| `leave_room`         | `null`                                        |
| `start_game`         | `null`                                        |
| `update_room_info`   | `null`                                        |
| `update_player_info` | `null`                                        |
| `game_state`         | `{"Id": ..., "Data": {"HitBox": ...}}`        |

How the server answers:

- `create_room`: opens a room owned by the sender and puts the sender in it,
  then replies `create_room`. `max_players` must be greater than zero.
- `join_room`: replies `join_room` to the sender and sends `player_join`
  (with the player's name) to the others in the room.
- `leave_room`: replies `leave_room`. If the sender owned the room, the room
  is closed and the others receive `room_closed`; otherwise everyone left in
  the room receives `player_left` with the sender's id.
- `start_game`: needs at least two players in the room. The first two are
  given characters at (100, 300) and (500, 300), 60×40 in size, and the whole
  room receives `start_game` with `{"Data": {<player id>: {"HitBox": ...}}}`.
- `update_room_info`: replies with the room's `id`, `status`, `owner_id` and
  `settings`.
- `update_player_info`: replies with the player's `id` and `name`.
- `game_state`: forwarded unchanged to the other players in the room.

Failures, and any unknown type, are answered with an `error` message whose
data is a text. Frames that are not valid JSON are logged and ignored. When a
connection closes, the player is taken out of its room as with `leave_room`,
without a reply to the departed player.

A room's status is `Waiting` until it holds `need_players` players, and
`Ready` from then on.

## Using it as a library

```python
from aiohttp import web
from lobbyarena.server import create_app

app = create_app("path/to/static")
web.run_app(app, port=8080)
```

The pieces can be used on their own:

- `lobbyarena.server.GameServer` — dispatches messages (`handle_message`,
  `leave_room`, `start_game`) and provides the aiohttp `websocket_handler`.
- `lobbyarena.roommanager.RoomManager` — `create_room`, `delete_room`,
  `join_room`, `kick_from_room`, `get_room`; `generate_random_code(length)`
  makes digit codes.
- `lobbyarena.room.Room`, `RoomSettings`, `RoomInfo`, `RoomStatus`; refused
  operations raise `RoomError`.
- `lobbyarena.player.Player` and `PlayerInfo`.
- `lobbyarena.message.Message`, `MessageType`, `StartGameData`,
  `PlayerState`; undecodable input raises `MessageError`.
- `lobbyarena.character.Character` and the geometry types
  `lobbyarena.primitives.Vec2` and `lobbyarena.primitives.Rect`
  (`intersects`, `contains`, `move`, `center`, ...).

## What it does not do

- It ships no browser client: the static directory must be provided.
- The server does not simulate the game. It never checks or changes the
  positions players send; it only relays them, and it never moves a room to
  the `In game` status.
- Rooms live in memory only and are lost when the server stops.

## Tests

```
pip install .[test]
pytest
```