from __future__ import annotations

import random
from collections.abc import Iterable


DEFAULT_THEMES_JA = [
    "一番人気な映画",
    "もらって嬉しいプレゼント",
    "最強の動物",
    "住みたい街",
    "あったら嬉しいドラえもんの道具",
]


class ThemeSelector:
    def __init__(self, catalog: Iterable[str] | None = None, rng: random.Random | None = None) -> None:
        themes = [t.strip() for t in (catalog if catalog is not None else DEFAULT_THEMES_JA) if t and t.strip()]
        if not themes:
            raise ValueError("theme catalog is empty")
        self.catalog = themes
        self._rng = rng or random.Random()

    def pick(self, exclude: str | None = None) -> str:
        """Random theme, never equal to ``exclude`` unless the catalog has one entry."""
        theme = self._rng.choice(self.catalog)
        if len(set(self.catalog)) < 2:
            return theme
        while theme == exclude:
            theme = self._rng.choice(self.catalog)
        return theme
