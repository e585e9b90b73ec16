from unittest import mock

import pytest

from lobbyarena.player import Player
from lobbyarena.room import RoomError, RoomSettings, RoomStatus
from lobbyarena.roommanager import CODE_LENGTH, DIGITS, RoomManager, generate_random_code


class FakeConnection:
    def __init__(self):
        self.frames = []

    async def send_str(self, data):
        self.frames.append(data)


def make_player():
    return Player(FakeConnection())


def test_random_code_has_requested_digits():
    for length in (1, 6, 20):
        code = generate_random_code(length)
        assert len(code) == length
        assert set(code) <= set(DIGITS)


def test_random_code_of_zero_length_is_empty():
    assert generate_random_code(0) == ""


def test_random_code_rejects_negative_length():
    with pytest.raises(ValueError):
        generate_random_code(-1)


def test_create_room_returns_registered_code():
    manager = RoomManager()
    code = manager.create_room("owner", RoomSettings(2, 2))
    assert len(code) == CODE_LENGTH
    assert code.isdigit()
    room = manager.get_room(code)
    assert room.id == code
    assert room.owner_id == "owner"
    assert room.settings == RoomSettings(2, 2)
    assert code in manager


@pytest.mark.parametrize("max_players", [0, -3])
def test_create_room_rejects_bad_max_players(max_players):
    manager = RoomManager()
    with pytest.raises(RoomError, match="invalid max players count"):
        manager.create_room("owner", RoomSettings(max_players, 1))
    assert len(manager) == 0


def test_codes_are_unique_until_attempts_run_out():
    manager = RoomManager()
    with mock.patch("secrets.choice", return_value="7"):
        code = manager.create_room("a", RoomSettings(2, 2))
        with pytest.raises(RoomError, match="failed to generate unique code"):
            manager.create_room("b", RoomSettings(2, 2))
    assert code == "7" * CODE_LENGTH
    assert len(manager) == 1


def test_get_unknown_room_raises():
    with pytest.raises(RoomError, match="room not found"):
        RoomManager().get_room("000000")


def test_join_room_sets_room_id():
    manager = RoomManager()
    code = manager.create_room("owner", RoomSettings(2, 2))
    player = make_player()
    manager.join_room(player, code)
    assert player.room_id == code
    assert manager.get_room(code).get_player(player.id) is player


def test_join_unknown_room_raises():
    player = make_player()
    with pytest.raises(RoomError, match="room not found"):
        RoomManager().join_room(player, "123456")
    assert player.room_id == ""


def test_join_full_room_raises():
    manager = RoomManager()
    code = manager.create_room("owner", RoomSettings(1, 1))
    first, second, third = make_player(), make_player(), make_player()
    manager.join_room(first, code)
    manager.join_room(second, code)
    with pytest.raises(RoomError, match="room is full"):
        manager.join_room(third, code)
    assert third.room_id == ""
    assert manager.get_room(code).player_count == 2


def test_join_updates_room_status():
    manager = RoomManager()
    code = manager.create_room("owner", RoomSettings(2, 2))
    manager.join_room(make_player(), code)
    assert manager.get_room(code).status is RoomStatus.WAITING
    manager.join_room(make_player(), code)
    assert manager.get_room(code).status is RoomStatus.READY


def test_kick_from_room_clears_room_id():
    manager = RoomManager()
    code = manager.create_room("owner", RoomSettings(2, 2))
    player = make_player()
    manager.join_room(player, code)
    manager.kick_from_room(player, code)
    assert player.room_id == ""
    assert manager.get_room(code).player_count == 0


def test_kick_player_not_in_room_raises():
    manager = RoomManager()
    code = manager.create_room("owner", RoomSettings(2, 2))
    with pytest.raises(RoomError, match="player not found in room"):
        manager.kick_from_room(make_player(), code)


def test_kick_from_unknown_room_raises():
    with pytest.raises(RoomError, match="room not found"):
        RoomManager().kick_from_room(make_player(), "111111")


def test_delete_room_releases_players():
    manager = RoomManager()
    code = manager.create_room("owner", RoomSettings(2, 2))
    players = [make_player(), make_player()]
    for player in players:
        manager.join_room(player, code)
    manager.delete_room(code)
    assert [p.room_id for p in players] == ["", ""]
    with pytest.raises(RoomError):
        manager.get_room(code)


def test_delete_unknown_room_raises():
    with pytest.raises(RoomError, match="room not found"):
        RoomManager().delete_room("999999")