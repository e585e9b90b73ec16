import json

import pytest

from lobbyarena.message import Message, MessageType
from lobbyarena.player import Player
from lobbyarena.room import Room, RoomError, RoomInfo, RoomSettings, RoomStatus


class FakeConnection:
    def __init__(self):
        self.sent = []

    async def send_str(self, data):
        self.sent.append(data)


def make_player():
    conn = FakeConnection()
    return Player(conn, "Player"), conn


def test_new_room_state():
    room = Room("123456", RoomSettings(max_players=2, need_players=2))
    assert room.id == "123456"
    assert room.status is RoomStatus.WAITING
    assert room.player_count == 0
    assert room.owner_id == ""


def test_info_to_dict():
    room = Room("123456", RoomSettings(max_players=2, need_players=2))
    room.owner_id = "owner"
    info = room.info()
    assert info == RoomInfo("123456", RoomStatus.WAITING, "owner", RoomSettings(2, 2))
    assert info.to_dict() == {
        "id": "123456",
        "status": "Waiting",
        "owner_id": "owner",
        "settings": {"max_players": 2, "need_players": 2},
    }


def test_status_follows_player_count():
    room = Room("1", RoomSettings(max_players=2, need_players=2))
    a, _ = make_player()
    b, _ = make_player()
    room.add_player(a)
    assert room.status is RoomStatus.WAITING
    room.add_player(b)
    assert room.status is RoomStatus.READY
    assert room.info().status.value == "Ready"
    room.remove_player(a)
    assert room.status is RoomStatus.WAITING
    assert room.player_count == 1


def test_adding_same_player_twice_keeps_one_entry():
    room = Room("1", RoomSettings(max_players=2, need_players=2))
    a, _ = make_player()
    room.add_player(a)
    room.add_player(a)
    assert room.player_count == 1


def test_remove_unknown_player_raises():
    room = Room("1", RoomSettings(max_players=2, need_players=2))
    a, _ = make_player()
    with pytest.raises(RoomError, match="player not found in room"):
        room.remove_player(a)


def test_cannot_join_during_game():
    room = Room("1", RoomSettings(max_players=2, need_players=2))
    room.status = RoomStatus.IN_GAME
    a, _ = make_player()
    with pytest.raises(RoomError, match="there is a game going on in the room now"):
        room.add_player(a)
    assert room.player_count == 0


def test_full_room_check_uses_count_before_adding():
    room = Room("1", RoomSettings(max_players=1, need_players=1))
    first, _ = make_player()
    second, _ = make_player()
    third, _ = make_player()
    room.add_player(first)
    room.add_player(second)
    with pytest.raises(RoomError, match="room is full"):
        room.add_player(third)
    assert set(room.players) == {first.id, second.id}


def test_get_player():
    room = Room("1", RoomSettings(max_players=2, need_players=2))
    a, _ = make_player()
    room.add_player(a)
    assert room.get_player(a.id) is a
    with pytest.raises(RoomError):
        room.get_player("missing")


def test_players_is_a_snapshot():
    room = Room("1", RoomSettings(max_players=2, need_players=2))
    a, _ = make_player()
    room.add_player(a)
    snapshot = room.players
    snapshot.clear()
    assert room.player_count == 1


@pytest.mark.asyncio
async def test_broadcast_skips_excluded_player():
    room = Room("1", RoomSettings(max_players=3, need_players=2))
    a, conn_a = make_player()
    b, conn_b = make_player()
    room.add_player(a)
    room.add_player(b)
    msg = Message(MessageType.PLAYER_JOIN, "Player")
    await room.broadcast(msg, a.id)
    assert conn_a.sent == []
    assert [json.loads(s) for s in conn_b.sent] == [msg.to_dict()]


@pytest.mark.asyncio
async def test_broadcast_to_everyone():
    room = Room("1", RoomSettings(max_players=3, need_players=2))
    a, conn_a = make_player()
    b, conn_b = make_player()
    room.add_player(a)
    room.add_player(b)
    msg = Message(MessageType.PLAYER_LEFT, a.id)
    await room.broadcast(msg, None)
    assert conn_a.sent == [msg.to_json()]
    assert conn_b.sent == [msg.to_json()]


def test_settings_round_trip_and_defaults():
    settings = RoomSettings(max_players=2, need_players=2)
    assert RoomSettings.from_dict(settings.to_dict()) == settings
    assert RoomSettings.from_dict(None) == RoomSettings()
    assert RoomSettings.from_dict({"max_players": 4}) == RoomSettings(4, 0)


@pytest.mark.parametrize("bad", [{"max_players": "x"}, {"need_players": 2.5}, [2, 2]])
def test_settings_from_dict_rejects_bad_input(bad):
    with pytest.raises(ValueError):
        RoomSettings.from_dict(bad)