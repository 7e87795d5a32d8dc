import pytest

from ito.game.errors import NotInRoom, RoomNotFound
from ito.game.service import add_player


def test_get_or_create_returns_same_room(registry):
    room, created = registry.get_or_create("ABC")
    again, created_again = registry.get_or_create("ABC")

    assert created is True
    assert created_again is False
    assert again is room
    assert len(registry.get_or_create("ABC")[0].pool) == 100


def test_get_unknown_room_raises(registry):
    with pytest.raises(RoomNotFound):
        registry.get("nope")


def test_find_room_of_uses_index(registry):
    room, _ = registry.get_or_create("ABC")
    with pytest.raises(NotInRoom):
        registry.find_room_of("sid-1")

    add_player(room, "sid-1", "Alice")
    registry.index_player("sid-1", "ABC")
    assert registry.find_room_of("sid-1") is room


def test_remove_drops_room_and_index(registry):
    room, _ = registry.get_or_create("ABC")
    add_player(room, "sid-1", "Alice")
    registry.index_player("sid-1", "ABC")

    assert registry.remove("ABC") is True
    assert "ABC" not in registry
    assert registry.remove("ABC") is False
    with pytest.raises(NotInRoom):
        registry.find_room_of("sid-1")


def test_new_room_gets_theme_from_catalog(registry):
    room, _ = registry.get_or_create("XYZ")
    assert room.theme in registry.themes.catalog
    assert room.phase == "collecting"
    assert room.host_id is None
