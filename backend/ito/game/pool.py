from __future__ import annotations

import random

from .errors import PoolExhausted


class NumberPool:
    """Secret card values of one room that no player currently holds."""

    def __init__(self, low: int = 1, high: int = 100, rng: random.Random | None = None) -> None:
        if low > high:
            raise ValueError(f"empty range {low}..{high}")
        self.low = low
        self.high = high
        self._rng = rng or random.Random()
        self._available: list[int] = []
        self.reset()

    def __len__(self) -> int:
        return len(self._available)

    def __contains__(self, value: object) -> bool:
        return value in self._available

    def available(self) -> list[int]:
        return sorted(self._available)

    def draw(self) -> int:
        if not self._available:
            raise PoolExhausted(f"no values left in {self.low}..{self.high}")
        # Swap-remove keeps draws O(1); order inside the list carries no meaning.
        idx = self._rng.randrange(len(self._available))
        last = self._available.pop()
        if idx == len(self._available):
            return last
        value = self._available[idx]
        self._available[idx] = last
        return value

    def release(self, value: int) -> None:
        if not self.low <= value <= self.high:
            raise ValueError(f"{value} is outside {self.low}..{self.high}")
        if value in self._available:
            raise ValueError(f"{value} is already in the pool")
        self._available.append(value)

    def reset(self) -> None:
        self._available = list(range(self.low, self.high + 1))

    def copy(self) -> NumberPool:
        clone = NumberPool.__new__(NumberPool)
        clone.low = self.low
        clone.high = self.high
        clone._rng = self._rng
        clone._available = list(self._available)
        return clone
