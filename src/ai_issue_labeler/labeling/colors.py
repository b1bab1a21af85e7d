"""Color assignment for newly created labels.

Colors come from a small generator object so the reconciler itself stays
deterministic; tests inject a fixed or seeded generator.
"""

from __future__ import annotations

import random
import re
from collections.abc import Iterable
from typing import Protocol

_HEX_COLOR = re.compile(r"^[0-9a-f]{6}$")


class ColorGenerator(Protocol):
    def next_color(self) -> str:
        """Return a 6-digit lowercase hex color without the leading '#'."""
        ...


class RandomColorGenerator:
    """Random colors, skipping any reserved value (typically colors already in use)."""

    def __init__(self, seed: int | None = None, reserved: Iterable[str] = ()) -> None:
        self._random = random.Random(seed)
        self._reserved = {c.lower().lstrip("#") for c in reserved}

    def next_color(self) -> str:
        while True:
            color = f"{self._random.randrange(0x1000000):06x}"
            if color not in self._reserved:
                return color


class FixedColorGenerator:
    """Always the same color."""

    def __init__(self, color: str) -> None:
        normalized = color.strip().lstrip("#").lower()
        if not _HEX_COLOR.match(normalized):
            raise ValueError(f"Invalid hex color: {color!r}")
        self._color = normalized

    def next_color(self) -> str:
        return self._color
