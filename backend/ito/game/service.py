from __future__ import annotations

from typing import Any

from ..utils.text import sanitize_text
from .errors import AlreadyInRoom, InvalidOrder, NotHost, NotInRoom, PoolExhausted, RoomFull, WrongPhase
from .models import Player, RoomState
from .registry import RoomRegistry
from .themes import ThemeSelector


def join_room(registry: RoomRegistry, room_name: str, player_id: str, nickname: str) -> tuple[RoomState, Player, bool]:
    """Returns (room, player, created). A failed join leaves no trace."""
    with registry.lock:
        try:
            registry.find_room_of(player_id)
        except NotInRoom:
            pass
        else:
            raise AlreadyInRoom()

        room, created = registry.get_or_create(room_name)
        try:
            player = add_player(room, player_id, nickname)
        except Exception:
            if created:
                registry.remove(room_name)
            raise

        registry.index_player(player_id, room_name)
        return room, player, created


def add_player(room: RoomState, player_id: str, nickname: str) -> Player:
    if player_id in room.players:
        raise AlreadyInRoom()

    try:
        number = room.pool.draw()
    except PoolExhausted:
        raise RoomFull() from None

    player = Player(id=player_id, nickname=sanitize_text(nickname), number=number)
    room.players[player_id] = player

    if room.host_id is None or room.host_id not in room.players:
        room.host_id = player_id

    return player


def leave_room(registry: RoomRegistry, player_id: str) -> tuple[RoomState | None, bool, str | None]:
    """Returns (room, room_deleted, promoted_host_id). room is None if the player was in none."""
    with registry.lock:
        try:
            room = registry.find_room_of(player_id)
        except NotInRoom:
            registry.unindex_player(player_id)
            return None, False, None

        was_host = room.host_id == player_id
        empty = remove_player(room, player_id)
        registry.unindex_player(player_id)

        if empty:
            registry.remove(room.name)
            return room, True, None

        return room, False, room.host_id if was_host else None


def remove_player(room: RoomState, player_id: str) -> bool:
    """Drop a player and return their card to the pool. Returns True if the room is now empty."""
    player = room.players.pop(player_id, None)
    if player is None:
        return not room.players

    room.pool.release(player.number)
    room.ordered_player_ids = [pid for pid in room.ordered_player_ids if pid != player_id]

    if not room.players:
        room.host_id = None
        return True

    if room.host_id == player_id:
        # Earliest-joined remaining player.
        room.host_id = next(iter(room.players))

    return False


def disband_room(registry: RoomRegistry, player_id: str) -> RoomState:
    with registry.lock:
        room = registry.find_room_of(player_id)
        require_host(room, player_id)
        registry.remove(room.name)
        return room


def require_host(room: RoomState, player_id: str) -> None:
    if player_id not in room.players:
        raise NotInRoom()
    if room.host_id != player_id:
        raise NotHost()


def submit_answer(room: RoomState, player_id: str, answer: str) -> Player:
    player = room.players.get(player_id)
    if player is None:
        raise NotInRoom()
    if room.phase != "collecting":
        raise WrongPhase()

    player.answer = sanitize_text(answer.strip())
    player.is_ready = True
    if player_id not in room.ordered_player_ids:
        room.ordered_player_ids.append(player_id)
    return player


def update_order(room: RoomState, player_id: str, ordered_ids: Any) -> list[str]:
    """Replace the proposed order.

    The list must hold unique ids of players who have answered. Answered
    players missing from it keep their relative order at the end.
    """
    if player_id not in room.players:
        raise NotInRoom()
    if room.phase != "collecting":
        raise WrongPhase()
    if not isinstance(ordered_ids, list):
        raise InvalidOrder()

    seen: set[str] = set()
    for pid in ordered_ids:
        if not isinstance(pid, str) or pid in seen:
            raise InvalidOrder()
        p = room.players.get(pid)
        if p is None or not p.is_ready:
            raise InvalidOrder()
        seen.add(pid)

    rest = [pid for pid in room.ordered_player_ids if pid not in seen]
    room.ordered_player_ids = list(ordered_ids) + rest
    return room.ordered_player_ids


def show_result(room: RoomState, player_id: str) -> None:
    require_host(room, player_id)
    room.phase = "revealed"


def reset_round(room: RoomState, player_id: str, themes: ThemeSelector) -> dict[str, int]:
    """Start a new round: new theme, cleared answers, fresh cards.

    Everything is computed on a copy of the pool first, so an exception leaves
    the room as it was. Returns the new card per player id.
    """
    require_host(room, player_id)

    theme = themes.pick(exclude=room.theme)
    pool = room.pool.copy()
    for p in room.players.values():
        pool.release(p.number)
    numbers = {pid: pool.draw() for pid in room.players}

    room.theme = theme
    room.phase = "collecting"
    room.ordered_player_ids = []
    room.pool = pool
    for pid, p in room.players.items():
        p.answer = ""
        p.is_ready = False
        p.number = numbers[pid]

    return numbers


def room_public_state(room: RoomState) -> dict:
    """Snapshot broadcast as ``game_update``.

    Unlike a full state dump, ``number`` is null for every player until the
    reveal and only ``availableCount`` is sent in place of the pool contents.
    """
    revealed = room.phase == "revealed"
    players = {
        p.id: {
            "id": p.id,
            "nickname": p.nickname,
            "number": p.number if revealed else None,
            "answer": p.answer,
            "isReady": p.is_ready,
        }
        for p in room.players.values()
    }
    return {
        "name": room.name,
        "players": players,
        "hostId": room.host_id,
        "orderedPlayerIds": list(room.ordered_player_ids),
        "theme": room.theme,
        "phase": room.phase,
        "isResultShown": room.is_result_shown,
        "availableCount": len(room.pool),
    }


def room_summary(room: RoomState) -> dict:
    return {
        "name": room.name,
        "playerCount": len(room.players),
        "phase": room.phase,
        "theme": room.theme,
    }
