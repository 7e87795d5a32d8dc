from __future__ import annotations

import logging
import random
from threading import RLock

from .errors import NotInRoom, RoomNotFound
from .models import RoomState
from .pool import NumberPool
from .themes import ThemeSelector

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Rooms by name, plus a player id -> room name index.

    Handlers hold ``lock`` for the whole of one event so that a room is never
    observed half-mutated, whatever the Socket.IO async mode.
    """

    def __init__(
        self,
        themes: ThemeSelector | None = None,
        number_min: int = 1,
        number_max: int = 100,
        rng: random.Random | None = None,
    ) -> None:
        self.lock = RLock()
        self.themes = themes or ThemeSelector(rng=rng)
        self.number_min = number_min
        self.number_max = number_max
        self._rng = rng
        self._rooms: dict[str, RoomState] = {}
        self._player_rooms: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, name: object) -> bool:
        return name in self._rooms

    def _new_room(self, name: str) -> RoomState:
        return RoomState(
            name=name,
            pool=NumberPool(self.number_min, self.number_max, rng=self._rng),
            theme=self.themes.pick(),
        )

    def get_or_create(self, name: str) -> tuple[RoomState, bool]:
        with self.lock:
            room = self._rooms.get(name)
            if room is not None:
                return room, False
            room = self._new_room(name)
            self._rooms[name] = room
            logger.info("Room %s created (theme=%s)", name, room.theme)
            return room, True

    def get(self, name: str) -> RoomState:
        with self.lock:
            room = self._rooms.get(name)
            if room is None:
                raise RoomNotFound()
            return room

    def remove(self, name: str) -> bool:
        with self.lock:
            room = self._rooms.pop(name, None)
            if room is None:
                return False
            for pid in room.players:
                if self._player_rooms.get(pid) == name:
                    del self._player_rooms[pid]
            logger.info("Room %s removed", name)
            return True

    def list_rooms(self) -> list[RoomState]:
        with self.lock:
            return list(self._rooms.values())

    def find_room_of(self, player_id: str) -> RoomState:
        with self.lock:
            name = self._player_rooms.get(player_id)
            room = self._rooms.get(name) if name is not None else None
            if room is None or player_id not in room.players:
                raise NotInRoom()
            return room

    def index_player(self, player_id: str, room_name: str) -> None:
        with self.lock:
            self._player_rooms[player_id] = room_name

    def unindex_player(self, player_id: str) -> None:
        with self.lock:
            self._player_rooms.pop(player_id, None)
