from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .pool import NumberPool


Phase = Literal["collecting", "revealed"]


@dataclass
class Player:
    id: str
    nickname: str
    number: int
    answer: str = ""
    is_ready: bool = False


@dataclass
class RoomState:
    name: str
    pool: NumberPool
    theme: str
    # Insertion order is join order; host promotion relies on it.
    players: dict[str, Player] = field(default_factory=dict)
    host_id: str | None = None
    ordered_player_ids: list[str] = field(default_factory=list)
    phase: Phase = "collecting"

    @property
    def channel(self) -> str:
        # Socket.IO room; prefixed so a room name can never collide with a sid.
        return f"room:{self.name}"

    @property
    def is_result_shown(self) -> bool:
        return self.phase == "revealed"
