"""RGBA colors with 8-bit channels."""

from __future__ import annotations

from dataclasses import dataclass, replace

__all__ = [
    "Color",
    "TRANSPARENT",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    "YELLOW",
    "MAGENTA",
    "CYAN",
]


@dataclass(frozen=True)
class Color:
    """An RGBA color; every channel is an integer in 0..255."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def __post_init__(self) -> None:
        for channel in ("r", "g", "b", "a"):
            value = getattr(self, channel)
            if not 0 <= value <= 255:
                raise ValueError(f"color channel {channel} out of range: {value}")

    def with_alpha(self, a: int) -> Color:
        """Return the same color with a different alpha channel."""
        return replace(self, a=a)


TRANSPARENT = Color(0, 0, 0, 0)
BLACK = Color(0, 0, 0, 255)
WHITE = Color(255, 255, 255, 255)
RED = Color(255, 0, 0, 255)
GREEN = Color(0, 255, 0, 255)
BLUE = Color(0, 0, 255, 255)
YELLOW = Color(255, 255, 0, 255)
MAGENTA = Color(255, 0, 255, 255)
CYAN = Color(0, 255, 255, 255)