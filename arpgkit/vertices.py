"""2D vectors and the vertex layout shared by the renderers."""

from __future__ import annotations

from dataclasses import dataclass, field

from .color import WHITE, Color

__all__ = ["Vector2", "Vertex"]


@dataclass(frozen=True)
class Vector2:
    """An immutable 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)


@dataclass(frozen=True)
class Vertex:
    """A vertex as sent to the GPU: position, color and texture coordinate."""

    position: Vector2 = field(default_factory=Vector2)
    color: Color = WHITE
    tex_coord: Vector2 = field(default_factory=Vector2)